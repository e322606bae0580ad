from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.db.session import get_db

from .schemas import StudentRegisterRequest, StudentResponse
from . import service

router = APIRouter(prefix="/api/student", tags=["students"])


@router.post(
    "/register",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_student(
    payload: StudentRegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> StudentResponse:
    try:
        return await service.register_student(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
