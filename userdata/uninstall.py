"""
Runs when the plugin is being removed.

The host sets the guard environment variable before invoking this module;
run on its own it does nothing.
"""
import logging
import os
import sys

from .config import Config
from .database import get_engine, init_db
from .models import DataTable

logger = logging.getLogger(__name__)


def uninstall(guard=Config.UNINSTALL_GUARD):
    """
    Drops the plugin's table.

    Returns:
        bool: False when the guard is not set and nothing was done.
    """
    if not os.environ.get(guard):
        logger.warning("%s is not set, refusing to uninstall", guard)
        return False

    DataTable.__table__.drop(bind=get_engine(), checkfirst=True)
    logger.info("Dropped table %s", DataTable.__tablename__)
    return True


def main():
    if not os.environ.get(Config.UNINSTALL_GUARD):
        sys.exit(0)
    init_db(Config.from_env().DATABASE_URL)
    uninstall()


if __name__ == "__main__":
    main()
