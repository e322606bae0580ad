"""
Dashboard and search for an authenticated school.

Every query here filters students by the school's own refer code. That filter is the
only thing standing between one school and another school's students, so no query in
this module may omit it.
"""
from typing import List

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.schemas import CurrentSchool
from app.core.enums import PaymentStatus
from app.core.exceptions import ValidationError
from app.core.models import Student

from .schemas import DashboardResponse, DashboardStudent


def _own_students(school: CurrentSchool) -> Select:
    return (
        select(Student)
        .where(Student.school_refer_code == school.refer_code)
        .order_by(Student.created_at, Student.id)
    )


async def get_dashboard(db: AsyncSession, school: CurrentSchool) -> DashboardResponse:
    result = await db.execute(_own_students(school))
    students = [DashboardStudent.model_validate(s) for s in result.scalars().all()]
    paid = sum(1 for s in students if s.payment_status == PaymentStatus.paid)
    return DashboardResponse(
        total_students=len(students),
        paid=paid,
        pending=len(students) - paid,
        students=students,
    )


def _search_statement(school: CurrentSchool, term: str) -> Select:
    # icontains folds both sides in the database: ILIKE on Postgres, lower() LIKE lower() elsewhere
    return _own_students(school).where(
        or_(
            Student.name.icontains(term, autoescape=True),
            Student.email.icontains(term, autoescape=True),
        )
    )


async def search_students(
    db: AsyncSession, school: CurrentSchool, query: str
) -> List[DashboardStudent]:
    """Case-insensitive substring match on name or email within the school's students."""
    term = query.strip()
    if not term:
        raise ValidationError(["query"], "Search query must not be empty")

    result = await db.execute(_search_statement(school, term))
    return [DashboardStudent.model_validate(s) for s in result.scalars().all()]
