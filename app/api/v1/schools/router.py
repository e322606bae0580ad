from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_school
from app.auth.schemas import CurrentSchool
from app.core.exceptions import ServiceError
from app.db.session import get_db

from .schemas import DashboardResponse, DashboardStudent
from . import service

router = APIRouter(prefix="/api/school", tags=["schools"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    current_school: CurrentSchool = Depends(get_current_school),
) -> DashboardResponse:
    return await service.get_dashboard(db, current_school)


@router.get("/students/search", response_model=List[DashboardStudent])
async def search_students(
    query: str = Query(..., max_length=255, description="Name or email fragment"),
    db: AsyncSession = Depends(get_db),
    current_school: CurrentSchool = Depends(get_current_school),
) -> List[DashboardStudent]:
    try:
        return await service.search_students(db, current_school, query)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
