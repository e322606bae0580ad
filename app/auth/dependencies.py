import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.schemas import CurrentSchool
from app.auth.security import decode_access_token
from app.core.exceptions import ServiceError, UnauthenticatedError
from app.core.models import School
from app.db.session import get_db

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is reported as NOT_LOGGED_IN, not FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False, description="School session token")


async def authorize(db: AsyncSession, token: Optional[str]) -> CurrentSchool:
    """Verify the token and resolve the school it was issued to."""
    payload = decode_access_token(token)

    school_id_str = payload.get("sub")
    refer_code = payload.get("refer_code")
    if not school_id_str or not refer_code:
        raise UnauthenticatedError()
    try:
        school_id = UUID(school_id_str)
    except ValueError as e:
        raise UnauthenticatedError() from e

    # Re-checked on every request; tokens for removed schools stop working immediately
    result = await db.execute(select(School).where(School.id == school_id))
    school = result.scalar_one_or_none()
    if not school or school.refer_code != refer_code:
        logger.warning("Token references unknown school %s", school_id)
        raise UnauthenticatedError()

    return CurrentSchool(id=school.id, email=school.email, refer_code=school.refer_code)


async def get_current_school(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> CurrentSchool:
    """Resolve the authenticated school from the Authorization header."""
    token = credentials.credentials if credentials else None
    try:
        return await authorize(db, token)
    except ServiceError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.to_detail(),
            headers={"WWW-Authenticate": "Bearer"},
        )
