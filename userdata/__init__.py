__VERSION__ = "1.0.0"

from .app import UserDataApp
from .config import Config


def create_app(config=None, activate=True):
    """
    Builds the application with the plugin loaded.

    Args:
        config: Settings; defaults to ``Config.from_env()``.
        activate (bool): Create the plugin's table if it does not exist yet.
    """
    from .activator import Activator
    from .database import init_db
    from .plugin import Plugin

    app = UserDataApp(config)
    init_db(app.config.DATABASE_URL)
    if activate:
        Activator.activate()
    app.plugin = Plugin(app)
    app.plugin.run()
    app.boot()
    return app


__all__ = ["UserDataApp", "Config", "create_app", "__VERSION__"]
