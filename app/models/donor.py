import uuid
from typing import Dict

from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import GUID, Base, TimestampMixin


class Donor(TimestampMixin, Base):
    __tablename__ = "donors"

    id: Mapped[uuid.UUID] = mapped_column(
        GUID(), primary_key=True, default=uuid.uuid4, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    blood_group: Mapped[str] = mapped_column(String(3), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(15), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    age_confirmation: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # The ten questionnaire flags, kept together as one sub-document
    medical_questions: Mapped[Dict[str, bool]] = mapped_column(
        JSON, nullable=False, default=dict
    )

    def __str__(self) -> str:
        return f"{self.name} ({self.blood_group})"
