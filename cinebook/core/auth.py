from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from cinebook.db.session import getDB_session
from cinebook.exceptions import ForbiddenError, UnauthorizedError
from cinebook.models import User, UserRole, UserSession, utcnow


@dataclass(frozen=True)
class CurrentUser:
    id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def resolve_user(db: AsyncSession, token: str) -> Optional[CurrentUser]:
    result = await db.execute(
        select(User.id, User.role)
        .join(UserSession, UserSession.user_id == User.id)
        .where(UserSession.token == token)
        .where(UserSession.expires_at > utcnow())
    )
    row = result.first()
    if row is None:
        return None
    return CurrentUser(id=row.id, role=row.role)


async def get_current_user(
        authorization: Optional[str] = Header(None),
        db: AsyncSession = Depends(getDB_session)) -> CurrentUser:
    token = _bearer_token(authorization)
    if token is None:
        raise UnauthorizedError()
    user = await resolve_user(db, token)
    if user is None:
        raise UnauthorizedError("Invalid or expired session")
    return user


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user
