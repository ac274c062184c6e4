"""SQLAlchemy engine + session factory.

The draw scheduler writes from a background thread and the read routes query
from request threads, so both go through the shared session factory stored on
``app.extensions`` rather than a per-request session.
"""

from __future__ import annotations

from flask import Flask
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from lottery_live.models.base import Base


def create_app_engine(database_url: str) -> Engine:
    url = make_url(database_url)

    connect_args: dict[str, object] = {}
    if url.get_backend_name() == "sqlite":
        # Scheduler worker threads share the pool with request threads.
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        pool_pre_ping=True,
        future=True,
        connect_args=connect_args,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(app: Flask) -> None:
    """Initialize database engine and the session factory."""

    engine = create_app_engine(str(app.config["DATABASE_URL"]))
    session_factory = create_session_factory(engine)

    # Create tables on startup (scripts/create_tables.py does the same offline).
    from lottery_live import models  # noqa: F401

    Base.metadata.create_all(bind=engine)

    app.extensions["engine"] = engine
    app.extensions["session_factory"] = session_factory
