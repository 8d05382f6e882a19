"""Offer (quote) model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vekstloop.models.base import AuditMixin, Base, IdMixin, enum_column
from vekstloop.models.enums import OfferStatus


class Offer(Base, IdMixin, AuditMixin):
    __tablename__ = "offers"

    business_id: Mapped[str] = mapped_column(ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    contact_id: Mapped[str | None] = mapped_column(ForeignKey("contacts.id", ondelete="SET NULL"))
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[OfferStatus] = mapped_column(enum_column(OfferStatus), default=OfferStatus.DRAFT, nullable=False)
    total_amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="NOK", nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    business = relationship("Business", back_populates="offers")
    contact = relationship("Contact")
    items = relationship("OfferItem", back_populates="offer", cascade="all, delete-orphan")


class OfferItem(Base, IdMixin, AuditMixin):
    __tablename__ = "offer_items"

    offer_id: Mapped[str] = mapped_column(ForeignKey("offers.id", ondelete="CASCADE"), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=1, nullable=False)
    unit_price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    discount: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False))
    tax: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False))
    total: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)

    offer = relationship("Offer", back_populates="items")
