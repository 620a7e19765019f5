import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from wordle.core.config import Settings
from wordle.db.base import Base

log = logging.getLogger(__name__)


def _enable_sqlite_fks(dbapi_conn, _record):
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


def build_engine(settings: Settings) -> Engine:
    url = settings.sqlalchemy_url

    if url.startswith("sqlite"):
        kw = {"connect_args": {"check_same_thread": False, "timeout": 30}}
        if ":memory:" in url or url.rstrip("/").endswith(":"):
            # one shared connection, otherwise every checkout sees an empty db
            kw["poolclass"] = StaticPool
        eng = create_engine(url, future=True, **kw)
        event.listen(eng, "connect", _enable_sqlite_fks)
        return eng

    connect_args = {}
    if url.startswith("postgresql") and settings.db_statement_timeout_ms:
        connect_args["options"] = f"-c statement_timeout={int(settings.db_statement_timeout_ms)}"

    return create_engine(
        url,
        future=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def build_sessionmaker(eng: Engine) -> sessionmaker:
    return sessionmaker(bind=eng, autoflush=False, autocommit=False, future=True)


def init_db(eng: Engine, strict: bool = False) -> bool:
    """Create missing tables. Failures are logged and swallowed unless
    ``strict`` is set, so the process still comes up without a database."""
    # models must be imported so their tables are on Base.metadata
    import wordle.models.user  # noqa: F401
    import wordle.models.game  # noqa: F401

    try:
        Base.metadata.create_all(eng)
    except Exception as e:
        if strict:
            raise
        log.exception("database init failed", exc_info=e)
        return False
    log.info("database initialized")
    return True
