"""SQLAlchemy models for registered users."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from viralgif_engine.common.models import Base, TimestampMixin, generate_uuid


class UserModel(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    subscription_tier: Mapped[str] = mapped_column(String(50), nullable=False, default="free")
