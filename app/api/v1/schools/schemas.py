from typing import List

from pydantic import Field

from app.core.enums import PaymentStatus
from app.core.schemas import CamelModel


class DashboardStudent(CamelModel):
    """Student row as shown to the owning school."""

    name: str
    email: str
    class_label: str = Field(..., alias="class")
    payment_status: PaymentStatus = Field(..., alias="status")


class DashboardResponse(CamelModel):
    total_students: int
    paid: int
    pending: int
    students: List[DashboardStudent] = Field(default_factory=list)
