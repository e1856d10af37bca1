import logging
from fastapi import APIRouter, Depends
from redis.asyncio import Redis
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.db.session import getDB_session
from cinebook.redis import get_redis

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get("/health", summary="Health check endpoint", description="Checks database and redis connectivity.")
async def health_check(db: AsyncSession = Depends(getDB_session), redis: Redis = Depends(get_redis)):
    checks = {}
    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        checks["database"] = "unavailable"
    try:
        await redis.ping()
        checks["redis"] = "ok"
    except Exception as e:
        logger.error(f"Redis health check failed: {e}", exc_info=True)
        checks["redis"] = "unavailable"
    overall = "ok" if all(value == "ok" for value in checks.values()) else "degraded"
    return {"status": overall, **checks}
