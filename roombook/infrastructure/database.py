import threading
from collections.abc import Iterator
from contextlib import contextmanager, nullcontext

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from .config import settings

DATABASE_URL = settings.database_url

# An in-memory SQLite database lives on a single connection shared by every Session.
# Closing or rolling back any Session resets that connection, so such Sessions must not overlap.
_shared_connection_lock = threading.Lock()


def is_in_memory(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith(":"))


def build_engine(url: str) -> Engine:
    if is_in_memory(url):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
Base = declarative_base()


@contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """
    Open a Session for one request and close it afterwards.

    On engines that share one connection (StaticPool) the whole Session lifetime holds
    a process-wide lock, from first statement to close.
    """
    bind = factory.kw.get("bind")
    shared = bind is not None and isinstance(bind.pool, StaticPool)
    with _shared_connection_lock if shared else nullcontext():
        db = factory()
        try:
            yield db
        finally:
            db.close()
