"""Contact model module."""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vekstloop.models.base import AuditMixin, Base, IdMixin


class Contact(Base, IdMixin, AuditMixin):
    __tablename__ = "contacts"
    __table_args__ = (Index("idx_contacts_business_primary", "business_id", "is_primary"),)

    business_id: Mapped[str] = mapped_column(ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320))
    phone: Mapped[str | None] = mapped_column(String(40))
    position: Mapped[str | None] = mapped_column(String(120))
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    business = relationship("Business", back_populates="contacts")
    activities = relationship("Activity", back_populates="contact")
