# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from portal.shared.config import load_config
from portal.shared.config.settings import DatabaseConfig
from portal.shared.logging import logger


class Base(DeclarativeBase):
    pass


SessionLocal = scoped_session(
    sessionmaker(autoflush=False, autocommit=False, expire_on_commit=False)
)

_engine: Engine | None = None
_engine_lock = Lock()


def _build_engine(database: DatabaseConfig) -> Engine:
    engine_kwargs: dict[str, object] = {}
    if database.url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(database.pool_timeout),
        }
    else:
        engine_kwargs.update(
            pool_size=database.pool_size,
            max_overflow=database.max_overflow,
            pool_timeout=database.pool_timeout,
        )
    return create_engine(database.url, echo=False, pool_pre_ping=True, **engine_kwargs)


def configure_engine(database: DatabaseConfig) -> Engine:
    """Bind ``SessionLocal`` to an engine for ``database.url``.

    The current engine is kept when it already points at the same URL.
    """
    global _engine
    with _engine_lock:
        current_url = _engine.url.render_as_string(hide_password=False) if _engine else None
        if current_url == database.url:
            return _engine
        if _engine is not None:
            _engine.dispose()
        SessionLocal.remove()
        _engine = _build_engine(database)
        SessionLocal.configure(bind=_engine)
        logger.info(f"db: engine configured dialect={_engine.dialect.name}")
        return _engine


def get_engine() -> Engine:
    if _engine is None:
        return configure_engine(load_config().database)
    return _engine


@contextmanager
def session_scope() -> Iterator[Session]:
    get_engine()
    session = SessionLocal()
    logger.debug("db.session: opened scoped session")
    try:
        yield session
        session.commit()
        logger.debug("db.session: committed scoped session")
    except Exception:
        logger.exception("db.session: error, rolling back")
        session.rollback()
        raise
    finally:
        session.close()
        SessionLocal.remove()
        logger.debug("db.session: closed scoped session")


def init_db(database: DatabaseConfig | None = None) -> Engine:
    from . import models  # noqa: F401  registers tables on Base.metadata

    engine = configure_engine(database) if database is not None else get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")
    return engine
