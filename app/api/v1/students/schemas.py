from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from app.core.enums import PaymentStatus
from app.core.schemas import CamelModel, NonBlankStr


class StudentRegisterRequest(CamelModel):
    name: NonBlankStr = Field(..., max_length=255)
    email: EmailStr
    class_label: NonBlankStr = Field(..., alias="class", max_length=50)
    phone: NonBlankStr = Field(..., max_length=50)
    school_refer_code: NonBlankStr = Field(..., max_length=64)


class StudentResponse(CamelModel):
    id: UUID
    name: str
    email: str
    class_label: str = Field(..., alias="class")
    phone: str
    school_refer_code: str
    payment_status: PaymentStatus
    created_at: datetime
    paid_at: Optional[datetime] = None
