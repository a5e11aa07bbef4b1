# marketplace/db/base.py
import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Build an engine for ``database_url``.

    SQLite needs two adjustments: connections are shared across the
    threads FastAPI runs sync endpoints on, and foreign keys are off
    unless enabled per connection.  In-memory databases additionally
    keep a single connection so every session sees the same data.
    """
    kwargs = {"echo": echo, "pool_pre_ping": True}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db(request: Request) -> Iterator[Session]:
    # the factory lives on the app built by create_app, one session per request
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine, session_factory: sessionmaker) -> None:
    """Create missing tables and seed the fixed category set."""
    # model modules register their tables on Base.metadata when imported
    from marketplace.db.models import booking, category, review, service, user  # noqa: F401

    Base.metadata.create_all(bind=engine)

    db = session_factory()
    try:
        added = category.seed_categories(db)
        db.commit()
    finally:
        db.close()
    logger.info("Database initialised (%d categories seeded)", added)
