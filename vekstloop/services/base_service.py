"""Shared service base with robust session lifecycle behavior."""

from __future__ import annotations

from sqlalchemy.orm import Query, Session

from vekstloop.database import db as database


class BaseService:
    """Base class for services that operate on a SQLAlchemy session."""

    def __init__(self, db: Session | None = None) -> None:
        self.db = db or database.SessionLocal()

    def commit(self) -> None:
        """Commit current transaction and rollback on failure."""
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.rollback()
        self.close()


class ScopedService(BaseService):
    """Service whose reads and writes are restricted to one workspace.

    ``workspace_id=None`` means global scope: no filter is applied and new
    rows are created without a workspace.
    """

    def __init__(self, db: Session | None = None, workspace_id: str | None = None) -> None:
        super().__init__(db)
        self.workspace_id = workspace_id

    @property
    def is_global(self) -> bool:
        return self.workspace_id is None

    def scoped(self, query: Query, column) -> Query:
        if self.workspace_id is None:
            return query
        return query.filter(column == self.workspace_id)
