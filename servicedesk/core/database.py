# servicedesk/core/database.py
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from servicedesk.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

is_sqlite = settings.DATABASE_URL.startswith("sqlite")
connect_args = {"check_same_thread": False} if is_sqlite else {}
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


if is_sqlite:
    @event.listens_for(Engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, _):
        # SQLite ignores FOREIGN KEY clauses unless asked per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_db() -> None:
    """Create every table registered on ``Base``.

    Model modules are imported here so that their tables exist on the
    metadata even when no router imported them yet (seed CLI).
    """
    from servicedesk.asset import models as _asset  # noqa: F401
    from servicedesk.license import models as _license  # noqa: F401
    from servicedesk.ticket import models as _ticket  # noqa: F401
    from servicedesk.user import models as _user  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.debug("Database tables ensured on %s", engine.url.render_as_string(hide_password=True))


# Common DB dependency
def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope(bind=None) -> Iterator[Session]:
    """Standalone session for work outside a request (scripts, worker threads)."""
    db = Session(bind=bind or engine, autoflush=False)
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
