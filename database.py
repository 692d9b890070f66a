from datetime import datetime, timezone
import uuid

from sqlalchemy import DateTime, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes on every backend.

    SQLite hands back naive values; those are read as UTC.
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


def build_engine(database_url: str) -> Engine:
    """Create the engine for `database_url`.

    In-memory SQLite keeps a single shared connection so every session sees
    the same database.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(database_url, pool_pre_ping=True, pool_size=20, max_overflow=10)


def build_session_factory(engine: Engine) -> sessionmaker:
    # expire_on_commit=False: records leave the session as readable snapshots
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    # Import all models here to ensure they are registered with Base.metadata
    import models.User  # noqa: F401
    import models.Route  # noqa: F401
    import models.RouteStop  # noqa: F401
    import models.UserRouteProgress  # noqa: F401
    import models.RoutePhoto  # noqa: F401
    import models.SavedRoute  # noqa: F401
    Base.metadata.create_all(bind=engine)
