import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID

from app.core.enums import PaymentStatus
from app.db.session import Base


class Student(Base):
    """
    Student registered against a school's refer code.

    school_refer_code is validated against schools.refer_code at write time but is
    not a foreign key; dashboards aggregate by filtering on it.
    payment_status only moves pending -> paid (see confirm_payment).
    """

    __tablename__ = "students"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    class_label = Column(String(50), nullable=False)
    phone = Column(String(50), nullable=False)
    school_refer_code = Column(String(64), nullable=False, index=True)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.pending.value)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    paid_at = Column(DateTime(timezone=True), nullable=True)
