import logging

from .database import get_engine
from .models import DataTable

logger = logging.getLogger(__name__)


class Activator:
    """Everything that has to happen when the plugin is activated."""

    @staticmethod
    def activate():
        """Creates the plugin's table unless it already exists."""
        DataTable.__table__.create(bind=get_engine(), checkfirst=True)
        logger.info("Plugin activated, table %s ready", DataTable.__tablename__)


class Deactivator:
    """Everything that has to happen when the plugin is deactivated."""

    @staticmethod
    def deactivate(app):
        """
        Takes the plugin's hooks, public route, menu pages and assets out of
        ``app``. Hooks registered by others and the stored tables are kept.
        """
        plugin = app.plugin
        if plugin is not None:
            plugin.deactivate()
            app.plugin = None
        app.menu_pages.clear()
        app.enqueued_scripts.clear()
        app.enqueued_styles.clear()
        app.localized.clear()
        logger.info("Plugin deactivated")
