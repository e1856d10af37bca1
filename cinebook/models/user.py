from datetime import datetime
from enum import Enum
from sqlalchemy import DateTime, ForeignKey, String, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinebook.db.base import Base, BigIntId
from cinebook.models import TimestampMixin


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(Base, TimestampMixin):
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role: Mapped[UserRole] = mapped_column(SAEnum(
        UserRole, name="user_role_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=UserRole.USER)
    sessions: Mapped[list["UserSession"]] = relationship(
        back_populates="user", cascade="all, delete-orphan")


class UserSession(Base, TimestampMixin):
    """Bearer token issued by the login flow; only looked up here."""
    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)
    token: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey(
        "user.id", ondelete="CASCADE"), index=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    user: Mapped["User"] = relationship(back_populates="sessions")
