import json
from typing import Optional
from redis.asyncio import Redis
from fastapi import Request

from cinebook.core.config import get_settings

IDEMPOTENCY_HEADER = "X-Idempotency-Key"


def idempotency_redis_key(scope: str, user_id: str, idem_key: str) -> str:
    return f"idempotency:{scope}:{user_id}:{idem_key}"


async def check_idempotency(request: Request, redis: Redis, scope: str, user_id: str):
    """
    Returns (idem_key, cached_response, is_repeat).
    The header is optional; without it every request is treated as new.
    """
    idem_key: Optional[str] = request.headers.get(IDEMPOTENCY_HEADER)
    if not idem_key:
        return None, None, False
    cached = await redis.get(idempotency_redis_key(scope, user_id, idem_key))
    if cached:
        return idem_key, json.loads(cached), True
    return idem_key, None, False


async def save_idempotent_response(redis: Redis, scope: str, user_id: str, idem_key: str, response: dict):
    await redis.set(
        idempotency_redis_key(scope, user_id, idem_key),
        json.dumps(response),
        ex=get_settings().IDEMPOTENCY_TTL_SECONDS
    )
