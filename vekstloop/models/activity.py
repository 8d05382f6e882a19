"""Activity log model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vekstloop.models.base import AuditMixin, Base, IdMixin, enum_column, utcnow
from vekstloop.models.enums import ActivityType


class Activity(Base, IdMixin, AuditMixin):
    __tablename__ = "activities"
    __table_args__ = (
        Index("idx_activities_business_date", "business_id", "date"),
        Index("idx_activities_application_date", "job_application_id", "date"),
    )

    type: Mapped[ActivityType] = mapped_column(enum_column(ActivityType), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    outcome: Mapped[str | None] = mapped_column(Text)
    business_id: Mapped[str | None] = mapped_column(ForeignKey("businesses.id", ondelete="CASCADE"))
    contact_id: Mapped[str | None] = mapped_column(ForeignKey("contacts.id", ondelete="SET NULL"))
    job_application_id: Mapped[str | None] = mapped_column(ForeignKey("job_applications.id", ondelete="CASCADE"))
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)

    business = relationship("Business", back_populates="activities")
    contact = relationship("Contact", back_populates="activities")
    job_application = relationship("JobApplication", back_populates="activities")
    actor = relationship("User")
