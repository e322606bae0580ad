import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import validates

from app.db.session import Base


class School(Base):
    """
    School registered on the platform.

    - id: Internal primary key (UUID).
    - refer_code: Public join key students submit at registration. Derived from
      affiliation code, name and pin code; UNIQUE and never changed after insert.
      Students reference it as a plain value, not a foreign key.
    """

    __tablename__ = "schools"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    affiliation_code = Column(String(50), nullable=False)
    phone = Column(String(50), nullable=False)
    # Stored lowercased; unique across all schools
    email = Column(String(255), nullable=False, unique=True, index=True)
    city = Column(String(100), nullable=False)
    pin_code = Column(String(20), nullable=False)
    password_hash = Column(Text, nullable=False)
    refer_code = Column(String(64), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    @validates("refer_code")
    def _refer_code_is_immutable(self, key: str, value: str) -> str:
        # __dict__ holds the loaded value without triggering a lazy load
        current = self.__dict__.get(key)
        if current is not None and value != current:
            raise ValueError("refer_code cannot be changed once assigned")
        return value
