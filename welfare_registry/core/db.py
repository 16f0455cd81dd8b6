from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from welfare_registry.core.config import Settings


class Store:
    """
    Handle on the relational store.

    Built once at startup and passed to every service call. Holds nothing but
    the session factory (and through it the engine's connection pool).
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        # Payloads are built from rows after commit, so keep them loaded.
        self.session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Commit on normal exit, roll back on any exception, always close."""
        with self.session_factory.begin() as db:
            yield db

    def dispose(self) -> None:
        self.engine.dispose()


def build_store(settings: Settings) -> Store:
    engine = create_engine(settings.database_url, pool_pre_ping=True, echo=settings.sql_echo)
    return Store(engine)


def get_store(request: Request) -> Store:
    return request.app.state.store
