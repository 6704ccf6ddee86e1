"""SQLAlchemy models for the usage ledger."""

from datetime import date
from typing import Optional

from sqlalchemy import Date, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from viralgif_engine.common.models import Base, TimestampMixin, generate_uuid


class UsageLogModel(Base, TimestampMixin):
    """One row per successful generation. Rows are never updated or deleted."""

    __tablename__ = "usage_logs"
    __table_args__ = (
        Index("ix_usage_logs_user_reset", "user_id", "reset_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    anon_user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    ip_address: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    industry: Mapped[str] = mapped_column(String(100), nullable=False)
    reset_date: Mapped[date] = mapped_column(Date, nullable=False)
