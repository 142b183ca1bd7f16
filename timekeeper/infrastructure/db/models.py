"""
SQLAlchemy ORM models (users + time ledger)
"""
from sqlalchemy import String, DateTime, Integer, ForeignKey, Float, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from timekeeper.infrastructure.db.session import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )


class ProjectCode(Base):
    """
    Project code with a default monthly allotment (hours)
    """
    __tablename__ = "project_codes"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    allotted_hours: Mapped[float] = mapped_column(
        Float, nullable=False, server_default="0"
    )


class ProjectMonthAllotment(Base):
    """
    Month-specific override of a project's allotment; month is "YYYY-MM"
    """
    __tablename__ = "project_month_allotments"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_code_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("project_codes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    month: Mapped[str] = mapped_column(String(7), nullable=False)
    allotted_hours: Mapped[float] = mapped_column(
        Float, nullable=False, server_default="0"
    )

    __table_args__ = (
        UniqueConstraint('project_code_id', 'month', name='uq_project_month_allotment'),
    )


class TimeEntry(Base):
    """
    Hours logged against a project on one day; entry_date is "YYYY-MM-DD"
    """
    __tablename__ = "time_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_code_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("project_codes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    entry_date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    hours: Mapped[float] = mapped_column(Float, nullable=False)

    __table_args__ = (
        UniqueConstraint('project_code_id', 'entry_date', name='uq_time_entry_project_date'),
    )
