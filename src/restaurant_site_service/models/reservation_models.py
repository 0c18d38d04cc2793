"""Reservation models.

Reservations are created from the public booking form and only their status is changed
afterwards from the back office.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_serializer

from restaurant_site_service.models.db_models import ReservationModel

MIN_PEOPLE = 1
MAX_PEOPLE = 30
RESERVED_AT_FORMAT = "%Y-%m-%d %H:%M"


class ReservationStatus(str, Enum):
    """Enumeration of reservation status values."""

    NEW = "new"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Reservation(BaseModel):
    """A table reservation."""

    id: int = Field(..., description="Reservation identifier")
    created_at: datetime = Field(..., description="When the reservation was submitted")
    full_name: str = Field(..., description="Guest name")
    phone: str = Field(..., description="Guest phone number")
    people: int = Field(..., description="Party size", ge=MIN_PEOPLE, le=MAX_PEOPLE)
    reserved_at: datetime = Field(..., description="Reserved date and time")
    notes: str | None = Field(None, description="Free text notes")
    status: ReservationStatus = Field(default=ReservationStatus.NEW, description="Status")

    @field_serializer("reserved_at")
    def serialize_reserved_at(self, value: datetime) -> str:
        return value.strftime(RESERVED_AT_FORMAT)

    @classmethod
    def from_model(cls, row: ReservationModel) -> "Reservation":
        """Create a Reservation from its database row.

        Args:
            row: Mapped ``reservations`` row

        Returns:
            Reservation: Parsed model instance
        """
        return cls(
            id=row.id,
            created_at=row.created_at,
            full_name=row.full_name,
            phone=row.phone,
            people=row.people,
            reserved_at=row.reserved_at,
            notes=row.notes,
            status=ReservationStatus(row.status),
        )
