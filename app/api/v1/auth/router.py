from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http_status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.schemas import LoginRequest, LoginResponse, SchoolRegisterRequest, SchoolResponse
from app.auth.services import ServiceError, login_school, register_school
from app.db.session import get_db

router = APIRouter(prefix="/api/school", tags=["auth"])


@router.post(
    "/register",
    response_model=SchoolResponse,
    status_code=http_status.HTTP_201_CREATED,
)
async def register(
    payload: SchoolRegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> SchoolResponse:
    try:
        return await register_school(db, payload)
    except ServiceError as e:
        # Map service errors to HTTP responses
        if e.status_code == http_status.HTTP_500_INTERNAL_SERVER_ERROR:
            raise HTTPException(status_code=e.status_code, detail="Internal server error")
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=http_status.HTTP_200_OK,
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    try:
        return await login_school(db, payload)
    except ServiceError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.to_detail(),
            headers={"WWW-Authenticate": "Bearer"},
        )
