from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class FoodItemBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: int = Field(ge=0)
    category: str = Field(min_length=1, max_length=100)
    image_url: Optional[str] = None
    available: bool = True


class FoodItemCreate(FoodItemBase):

    class Config:
        extra = "forbid"
        str_strip_whitespace = True


class FoodItemUpdate(FoodItemBase):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    price: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    available: Optional[bool] = None

    class Config:
        extra = "forbid"
        str_strip_whitespace = True


class FoodItemResponse(FoodItemBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True
