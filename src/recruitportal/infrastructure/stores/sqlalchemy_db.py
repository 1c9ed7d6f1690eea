from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from recruitportal.config import get_settings
from recruitportal.domain.errors import StoreFailure
from recruitportal.utils.logging_config import LogFiles, Logger


def get_db_url() -> str:
    return get_settings().db_url


def _ensure_sqlite_dir(db_url: str) -> None:
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite":
        return
    database = url.database or ""
    if not database or database == ":memory:":
        return
    Path(database).parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(db_url: Optional[str] = None) -> Engine:
    resolved = db_url or get_db_url()
    _ensure_sqlite_dir(resolved)
    connect_args = {}
    if resolved.startswith("sqlite"):
        # FastAPI serves sync routes from a threadpool.
        connect_args["check_same_thread"] = False
    return create_engine(resolved, future=True, pool_pre_ping=True, connect_args=connect_args)


class SessionProvider:
    """Owns one engine per store and hands out short-lived sessions."""

    def __init__(self, db_url: Optional[str] = None):
        self.db_url = db_url or get_db_url()
        self.engine = create_db_engine(self.db_url)
        self._factory = sessionmaker(bind=self.engine, expire_on_commit=False, future=True)

    def session(self) -> Session:
        return self._factory()


@contextmanager
def translate_store_errors(operation: str) -> Iterator[None]:
    """Log database errors and surface them as ``StoreFailure``."""
    try:
        yield
    except SQLAlchemyError as exc:
        Logger.error(f"{operation} failed: {exc.__class__.__name__}: {exc}", file=LogFiles.ERROR)
        raise StoreFailure(f"{operation} failed") from exc
