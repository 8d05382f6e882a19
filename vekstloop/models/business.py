"""Business and tag model module."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vekstloop.models.base import AuditMixin, Base, IdMixin, WorkspaceScopedMixin, enum_column
from vekstloop.models.enums import BusinessStatus, CustomerStage

business_tags = Table(
    "business_tags",
    Base.metadata,
    Column("business_id", ForeignKey("businesses.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base, IdMixin, AuditMixin):
    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)


class Business(Base, IdMixin, AuditMixin, WorkspaceScopedMixin):
    __tablename__ = "businesses"
    __table_args__ = (
        Index("idx_businesses_workspace_stage", "workspace_id", "stage"),
        Index("idx_businesses_name", "name"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    org_number: Mapped[str | None] = mapped_column(String(40))
    address: Mapped[str | None] = mapped_column(String(255))
    postal_code: Mapped[str | None] = mapped_column(String(20))
    city: Mapped[str | None] = mapped_column(String(120))
    country: Mapped[str | None] = mapped_column(String(120))
    contact_person: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str] = mapped_column(String(40), nullable=False)
    website: Mapped[str | None] = mapped_column(String(255))
    industry: Mapped[str | None] = mapped_column(String(120))
    number_of_employees: Mapped[int | None] = mapped_column(Integer)
    revenue: Mapped[int | None] = mapped_column(Integer)
    notes: Mapped[str | None] = mapped_column(Text)
    status: Mapped[BusinessStatus] = mapped_column(
        enum_column(BusinessStatus), default=BusinessStatus.ACTIVE, nullable=False
    )
    stage: Mapped[CustomerStage] = mapped_column(
        enum_column(CustomerStage), default=CustomerStage.LEAD, nullable=False
    )
    potential_value: Mapped[int | None] = mapped_column(Integer)
    bilag_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    tags = relationship("Tag", secondary=business_tags, order_by="Tag.name")
    contacts = relationship("Contact", back_populates="business", order_by="Contact.is_primary.desc()")
    activities = relationship(
        "Activity",
        back_populates="business",
        cascade="all, delete-orphan",
        order_by="Activity.date.desc()",
    )
    offers = relationship(
        "Offer",
        back_populates="business",
        cascade="all, delete-orphan",
        order_by="Offer.created_at.desc()",
    )
    sms_messages = relationship(
        "SmsMessage",
        back_populates="business",
        cascade="all, delete-orphan",
        order_by="SmsMessage.created_at.desc()",
    )
    tickets = relationship("Ticket", back_populates="business")

    @property
    def tag_names(self) -> list[str]:
        return [tag.name for tag in self.tags]
