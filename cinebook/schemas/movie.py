from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field


class MovieBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    duration: int = Field(gt=0, description="Running time in minutes")
    genre: str = Field(min_length=1, max_length=100)
    rating: str = Field(min_length=1, max_length=20)
    release_date: date
    poster_image: Optional[str] = None
    trailer_url: Optional[str] = None


class MovieCreate(MovieBase):

    class Config:
        extra = "forbid"
        str_strip_whitespace = True


class MovieUpdate(MovieBase):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    duration: Optional[int] = Field(default=None, gt=0)
    genre: Optional[str] = Field(default=None, min_length=1, max_length=100)
    rating: Optional[str] = Field(default=None, min_length=1, max_length=20)
    release_date: Optional[date] = None

    class Config:
        extra = "forbid"
        str_strip_whitespace = True


class MovieResponse(MovieBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True  # orm_mode
