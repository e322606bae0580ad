from typing import Dict, List, Optional

from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        if code is not None:
            self.code = code

    def to_detail(self) -> Dict:
        return {"code": self.code, "message": self.message}


class ValidationError(ServiceError):
    code = "VALIDATION_ERROR"

    def __init__(self, fields: List[str], message: Optional[str] = None) -> None:
        self.fields = list(fields)
        if message is None:
            message = f"Missing or invalid field(s): {', '.join(self.fields)}"
        super().__init__(message, status.HTTP_400_BAD_REQUEST)

    def to_detail(self) -> Dict:
        detail = super().to_detail()
        detail["fields"] = self.fields
        return detail


class DuplicateEmailError(ServiceError):
    code = "DUPLICATE_EMAIL"

    def __init__(self) -> None:
        super().__init__("Email is already registered", status.HTTP_409_CONFLICT)


class DuplicateReferCodeError(ServiceError):
    """Derived refer code already belongs to another school. Never regenerated."""

    code = "DUPLICATE_REFER_CODE"

    def __init__(self, support_email: str) -> None:
        super().__init__(
            "A school with the same refer code is already registered. "
            f"Please contact support at {support_email}.",
            status.HTTP_409_CONFLICT,
        )


class UnknownReferCodeError(ServiceError):
    code = "UNKNOWN_REFER_CODE"

    def __init__(self) -> None:
        super().__init__("No school is registered with this refer code", status.HTTP_404_NOT_FOUND)


class InvalidCredentialsError(ServiceError):
    code = "INVALID_CREDENTIALS"

    def __init__(self) -> None:
        super().__init__("Invalid credentials", status.HTTP_401_UNAUTHORIZED)


class UnauthenticatedError(ServiceError):
    code = "NOT_LOGGED_IN"

    def __init__(self, message: str = "Not logged in") -> None:
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class TamperedTokenError(ServiceError):
    code = "FORBIDDEN"

    def __init__(self) -> None:
        super().__init__("Token failed integrity check", status.HTTP_403_FORBIDDEN)


class StudentNotFoundError(ServiceError):
    code = "STUDENT_NOT_FOUND"

    def __init__(self) -> None:
        super().__init__("Student not found", status.HTTP_404_NOT_FOUND)
