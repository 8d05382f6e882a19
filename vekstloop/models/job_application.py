"""Job application model module."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vekstloop.models.base import AuditMixin, Base, IdMixin, enum_column, utcnow
from vekstloop.models.enums import JobApplicationStatus


class JobApplicationSkill(Base):
    __tablename__ = "job_application_skills"
    __table_args__ = (UniqueConstraint("job_application_id", "name", name="uq_job_application_skill"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    job_application_id: Mapped[str] = mapped_column(
        ForeignKey("job_applications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)


class JobApplication(Base, IdMixin, AuditMixin):
    __tablename__ = "job_applications"
    __table_args__ = (Index("idx_job_applications_status_date", "status", "application_date"),)

    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str] = mapped_column(String(40), nullable=False)
    address: Mapped[str | None] = mapped_column(String(255))
    postal_code: Mapped[str | None] = mapped_column(String(20))
    city: Mapped[str | None] = mapped_column(String(120))
    country: Mapped[str | None] = mapped_column(String(120))
    resume: Mapped[str | None] = mapped_column(Text)
    cover_letter: Mapped[str | None] = mapped_column(Text)
    experience: Mapped[int | None] = mapped_column(Integer)
    education: Mapped[str | None] = mapped_column(String(255))
    desired_position: Mapped[str | None] = mapped_column(String(255))
    current_employer: Mapped[str | None] = mapped_column(String(255))
    expected_salary: Mapped[int | None] = mapped_column(Integer)
    start_date: Mapped[date | None] = mapped_column(Date)
    notes: Mapped[str | None] = mapped_column(Text)
    source: Mapped[str | None] = mapped_column(String(120))
    application_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    status: Mapped[JobApplicationStatus] = mapped_column(
        enum_column(JobApplicationStatus), default=JobApplicationStatus.NEW, nullable=False
    )

    skill_rows = relationship(
        "JobApplicationSkill",
        cascade="all, delete-orphan",
        order_by="JobApplicationSkill.id",
    )
    skills = association_proxy("skill_rows", "name", creator=lambda name: JobApplicationSkill(name=name))
    activities = relationship(
        "Activity",
        back_populates="job_application",
        cascade="all, delete-orphan",
        order_by="Activity.date.desc()",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
