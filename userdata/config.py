# userdata/config.py
import os
import secrets

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _env(name, default=None):
    return os.environ.get(f"USERDATA_{name}", default)


IMPORT_TIME_SETTINGS = ("TABLE_PREFIX",)


class Config:
    """
    Application settings.

    Every attribute can be overridden with an environment variable of the same
    name prefixed with ``USERDATA_`` (e.g. ``USERDATA_DATABASE_URL``). Values
    are read when the module is imported; build a new instance with
    ``Config.from_env()`` to pick up later changes.

    ``TABLE_PREFIX`` is the exception: the table name is fixed when the
    models are imported, so it can only be set through
    ``USERDATA_TABLE_PREFIX`` before importing the package.
    """

    APP_NAME = "Users Data"
    BASE_DIR = BASE_DIR
    TEMPLATE_FOLDER = "templates"
    STATIC_URL = "/static"
    STATIC_DIR = os.path.join(BASE_DIR, "static")

    DATABASE_URL = _env("DATABASE_URL", f"sqlite:///{os.path.join(os.getcwd(), 'userdata.db')}")
    TABLE_PREFIX = _env("TABLE_PREFIX", "wp_")

    SECRET_KEY = _env("SECRET_KEY") or secrets.token_hex(32)
    NONCE_LIFETIME = int(_env("NONCE_LIFETIME", "86400"))

    HOST = _env("HOST", "127.0.0.1")
    PORT = int(_env("PORT", "8000"))
    LOG_LEVEL = _env("LOG_LEVEL", "INFO")

    UNINSTALL_GUARD = "USERDATA_UNINSTALL_PLUGIN"

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if not key.isupper():
                raise AttributeError(f"Unknown setting '{key}'")
            if key in IMPORT_TIME_SETTINGS:
                raise AttributeError(f"{key} is read once at import time; set USERDATA_{key} instead")
            setattr(self, key, value)

    @classmethod
    def from_env(cls, **overrides):
        values = {}
        for key in ("DATABASE_URL", "SECRET_KEY", "HOST", "LOG_LEVEL"):
            value = _env(key)
            if value is not None:
                values[key] = value
        for key in ("NONCE_LIFETIME", "PORT"):
            value = _env(key)
            if value is not None:
                values[key] = int(value)
        values.update(overrides)
        return cls(**values)


TABLE_NAME = Config.TABLE_PREFIX + "newtheme_data"
