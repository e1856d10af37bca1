from dataclasses import dataclass
from fastapi import Query

from cinebook.core.config import get_settings


@dataclass(frozen=True)
class Page:
    limit: int
    offset: int


def clamp_limit(limit: int) -> int:
    return min(limit, get_settings().MAX_PAGE_SIZE)


def pagination(
        limit: int = Query(default=get_settings().DEFAULT_PAGE_SIZE, ge=1),
        offset: int = Query(default=0, ge=0)) -> Page:
    """Oversized limits are capped rather than rejected."""
    return Page(limit=clamp_limit(limit), offset=offset)
