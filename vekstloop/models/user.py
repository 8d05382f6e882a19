"""User and session model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vekstloop.models.base import AuditMixin, Base, IdMixin, enum_column
from vekstloop.models.enums import UserKind


class User(Base, IdMixin, AuditMixin):
    __tablename__ = "users"
    __table_args__ = (Index("idx_users_kind", "kind"),)

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    workspace_id: Mapped[str | None] = mapped_column(ForeignKey("workspaces.id", ondelete="SET NULL"), index=True)
    kind: Mapped[UserKind] = mapped_column(enum_column(UserKind), default=UserKind.HUMAN, nullable=False)

    workspace = relationship("Workspace", back_populates="users")
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
    accounts = relationship("Account", back_populates="user", cascade="all, delete-orphan")
    email_provider = relationship("EmailProvider", back_populates="user", uselist=False, cascade="all, delete-orphan")

    @property
    def is_system(self) -> bool:
        return self.kind == UserKind.SYSTEM


class UserSession(Base, IdMixin, AuditMixin):
    __tablename__ = "sessions"

    token: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="sessions")
