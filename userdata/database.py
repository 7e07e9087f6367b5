# userdata/database.py
import contextvars
import itertools

from sqlalchemy import Column, Integer, String, Text, create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.inspection import inspect
from sqlalchemy.orm import declarative_base, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()
SessionLocal = None
_engine = None

# Each HTTP request gets its own session scope; code running outside a
# request (CLI, tests) shares the ``None`` scope.
_request_scope = contextvars.ContextVar("userdata_request_scope", default=None)
_scope_ids = itertools.count(1)

MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def init_db(database_url, echo=False):
    global SessionLocal, _engine
    options = {"echo": echo}
    if database_url in MEMORY_URLS:
        # One shared connection, otherwise every session sees an empty database.
        options.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
    if _engine is not None:
        _engine.dispose()
    _engine = create_engine(database_url, **options)
    SessionLocal = scoped_session(
        sessionmaker(bind=_engine, expire_on_commit=False),
        scopefunc=_request_scope.get,
    )


def get_engine():
    if _engine is None:
        raise RuntimeError("Database engine is not initialized. Call init_db() first.")
    return _engine


def get_session():
    if SessionLocal is None:
        raise RuntimeError("Database session is not initialized. Call init_db() first.")
    return SessionLocal()


def begin_request_scope():
    """Starts a session scope for the current request; returns a token for end_request_scope."""
    return _request_scope.set(next(_scope_ids))


def end_request_scope(token):
    """Discards the current request's session and restores the previous scope."""
    try:
        if SessionLocal is not None:
            SessionLocal.remove()
    finally:
        _request_scope.reset(token)


class DatabaseError(Exception):
    """Raised when a query fails; the session has been rolled back."""
    pass


def _raise_database_error(db, e):
    db.rollback()
    if isinstance(e, IntegrityError):
        raise DatabaseError(f"Constraint failed: {e.orig}") from e
    raise DatabaseError(f"Database operation failed: {e}") from e


def _run(operation):
    db = get_session()
    try:
        return operation(db)
    except SQLAlchemyError as e:
        _raise_database_error(db, e)
    finally:
        db.close()


class ModelBase(Base):
    """
    Declarative base with the few persistence helpers the plugin needs. Every
    helper runs in its own short transaction and closes the session afterwards,
    so returned objects are detached and can be saved again later.
    """
    __abstract__ = True

    def save(self):
        def operation(db):
            db.add(self)
            db.commit()
        _run(operation)

    def delete(self):
        def operation(db):
            db.delete(self)
            db.commit()
        _run(operation)

    @classmethod
    def all(cls):
        """Every row, ordered by primary key."""
        return _run(lambda db: db.query(cls).order_by(*inspect(cls).primary_key).all())

    @classmethod
    def get(cls, id):
        """The row with primary key ``id``, or None."""
        return _run(lambda db: db.get(cls, id))


__all__ = [
    "init_db", "get_engine", "get_session", "begin_request_scope", "end_request_scope",
    "ModelBase", "Base", "DatabaseError",
    "Integer", "String", "Text", "Column",
]
