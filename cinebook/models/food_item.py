from typing import Optional
from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from cinebook.db.base import Base, BigIntId
from cinebook.models import TimestampMixin


class FoodItem(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
