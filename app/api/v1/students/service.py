import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import PaymentStatus
from app.core.exceptions import StudentNotFoundError, UnknownReferCodeError
from app.core.models import School, Student

from .schemas import StudentRegisterRequest, StudentResponse

logger = logging.getLogger(__name__)


async def register_student(db: AsyncSession, payload: StudentRegisterRequest) -> StudentResponse:
    """Create a student linked to the school holding the submitted refer code."""
    refer_code = payload.school_refer_code
    result = await db.execute(select(School.id).where(School.refer_code == refer_code))
    if result.scalar_one_or_none() is None:
        raise UnknownReferCodeError()

    student = Student(
        name=payload.name,
        email=payload.email,
        class_label=payload.class_label,
        phone=payload.phone,
        school_refer_code=refer_code,
        payment_status=PaymentStatus.pending.value,
    )
    db.add(student)
    await db.commit()
    await db.refresh(student)

    logger.info("Registered student %s under refer code %s", student.id, refer_code)
    return StudentResponse.model_validate(student)


async def confirm_payment(db: AsyncSession, student_id: UUID) -> StudentResponse:
    """
    Record a confirmed payment: pending -> paid.
    Called by the payment collaborator. Confirming an already paid student is a no-op;
    there is no transition back to pending.
    """
    student = await db.get(Student, student_id)
    if student is None:
        raise StudentNotFoundError()

    if student.payment_status != PaymentStatus.paid.value:
        student.payment_status = PaymentStatus.paid.value
        student.paid_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(student)
        logger.info("Payment confirmed for student %s", student.id)

    return StudentResponse.model_validate(student)
