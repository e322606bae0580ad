import logging
from typing import Optional

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.referral_code import derive_refer_code
from app.auth.schemas import LoginRequest, LoginResponse, SchoolRegisterRequest, SchoolResponse
from app.auth.security import create_access_token, hash_password, verify_password
from app.core.config import settings
from app.core.exceptions import (
    DuplicateEmailError,
    DuplicateReferCodeError,
    InvalidCredentialsError,
    ServiceError,
)
from app.core.models import School

logger = logging.getLogger(__name__)

# Checked against when the email is unknown so both failure paths cost one bcrypt round
_DUMMY_PASSWORD_HASH = hash_password("dummy-password-for-timing")


async def _email_taken(db: AsyncSession, email: str) -> bool:
    result = await db.execute(select(School.id).where(func.lower(School.email) == email.lower()))
    return result.scalar_one_or_none() is not None


async def _refer_code_taken(db: AsyncSession, refer_code: str) -> bool:
    result = await db.execute(select(School.id).where(School.refer_code == refer_code))
    return result.scalar_one_or_none() is not None


async def register_school(db: AsyncSession, payload: SchoolRegisterRequest) -> SchoolResponse:
    email = payload.email.lower()

    # 1. Email must be unique across all schools
    if await _email_taken(db, email):
        raise DuplicateEmailError()

    # 2. Derive refer code; a collision is rejected, never regenerated or overwritten
    refer_code = derive_refer_code(payload.affiliation_code, payload.name, payload.pin_code)
    if await _refer_code_taken(db, refer_code):
        logger.info("Refer code collision on registration: %s", refer_code)
        raise DuplicateReferCodeError(settings.support_email)

    try:
        school = School(
            name=payload.name,
            affiliation_code=payload.affiliation_code,
            phone=payload.phone,
            email=email,
            city=payload.city,
            pin_code=payload.pin_code,
            password_hash=hash_password(payload.password),
            refer_code=refer_code,
        )
        db.add(school)
        await db.commit()
        await db.refresh(school)

    except IntegrityError as e:
        await db.rollback()
        # A concurrent registration won the race on a unique constraint
        if await _email_taken(db, email):
            raise DuplicateEmailError() from e
        if await _refer_code_taken(db, refer_code):
            logger.info("Refer code collision at commit: %s", refer_code)
            raise DuplicateReferCodeError(settings.support_email) from e
        raise ServiceError("Conflict while creating school", status.HTTP_409_CONFLICT) from e
    except Exception as e:
        await db.rollback()
        # Exception text can carry INSERT parameters (password hash); log the type only
        logger.error("Failed to create school: %s", type(e).__name__)
        raise ServiceError(
            "Failed to create school", status.HTTP_500_INTERNAL_SERVER_ERROR
        ) from e

    logger.info("Registered school %s with refer code %s", school.id, school.refer_code)
    return SchoolResponse.model_validate(school)


async def login_school(db: AsyncSession, payload: LoginRequest) -> LoginResponse:
    # 1. Find school by email (case-insensitive)
    stmt = select(School).where(func.lower(School.email) == payload.email.lower())
    result = await db.execute(stmt)
    school: Optional[School] = result.scalar_one_or_none()

    # 2. Same error and same bcrypt work for unknown email and wrong password
    password_hash = school.password_hash if school else _DUMMY_PASSWORD_HASH
    password_ok = verify_password(payload.password, password_hash)
    if not school or not password_ok:
        logger.info("Failed login attempt")
        raise InvalidCredentialsError()

    # 3. Session token carries identity and refer code
    token = create_access_token(
        subject={"sub": str(school.id), "refer_code": school.refer_code}
    )
    return LoginResponse(
        token=token,
        expires_in=settings.access_token_expire_minutes * 60,
    )
