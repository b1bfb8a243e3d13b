# infra/db/base.py
from __future__ import annotations
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from typing import Optional
import logging

from infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def default_db_url() -> str:
    return f"sqlite:///{default_db_path().as_posix()}"


def make_engine(db_url: Optional[str] = None, echo: bool = False) -> Engine:
    db_url = db_url or default_db_url()
    logger.info("Using database at: %s", db_url)
    engine = create_engine(db_url, echo=echo, future=True)
    if engine.dialect.name == "sqlite":
        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_db(engine: Engine) -> None:
    # models must be imported so their tables are registered on Base
    import infra.db.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
