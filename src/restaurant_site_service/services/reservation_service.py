"""Service for table reservations."""

import logging
from datetime import datetime
from typing import Any

from restaurant_site_service.exceptions import NotFoundError, ValidationError
from restaurant_site_service.models.reservation_models import (
    MAX_PEOPLE,
    MIN_PEOPLE,
    Reservation,
    ReservationStatus,
)
from restaurant_site_service.observability.metrics import record_reservation_created
from restaurant_site_service.repositories.site_repositories import ReservationRepository
from restaurant_site_service.services.input_sanitizer import (
    clean_str,
    coerce_int,
    coerce_number,
    parse_id,
)

logger = logging.getLogger(__name__)

DEFAULT_PEOPLE = 2
DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 200

# Booking form input; fields need not be zero-padded ("2024-1-5 8:00")
RESERVED_AT_INPUT_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S")


def parse_reserved_at(date: str, time: str) -> datetime | None:
    """Combine the booking form date and time into a naive timestamp.

    Returns:
        The timestamp, or None when the pair is not a valid date and time
    """
    text = f"{date} {time}"
    for fmt in RESERVED_AT_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text).replace(tzinfo=None)
    except ValueError:
        return None


class ReservationService:
    """Service for reservations submitted from the website."""

    def __init__(self, reservation_repository: ReservationRepository) -> None:
        """Initialize the ReservationService.

        Args:
            reservation_repository: Repository for reservations
        """
        self.reservation_repository = reservation_repository

    async def create_reservation(self, body: dict[str, Any]) -> Reservation:
        """Create a reservation with status ``new``.

        Args:
            body: ``{name, phone, date, time, people, notes}``; people defaults to 2

        Returns:
            Reservation: The stored reservation

        Raises:
            ValidationError: If a required field is missing, people is outside
                [1, 30] or date/time do not form a timestamp
        """
        full_name = clean_str(body.get("name"))
        phone = clean_str(body.get("phone"))
        date = clean_str(body.get("date"))
        time = clean_str(body.get("time"))
        notes = clean_str(body.get("notes")) or None

        if not full_name or not phone or not date or not time:
            raise ValidationError("name, phone, date, time required")

        people = coerce_int(body.get("people") or DEFAULT_PEOPLE)
        if people is None or not MIN_PEOPLE <= people <= MAX_PEOPLE:
            raise ValidationError("people invalid")

        reserved_at = parse_reserved_at(date, time)
        if reserved_at is None:
            raise ValidationError("date or time invalid")

        reservation = self.reservation_repository.create_reservation(
            full_name=full_name,
            phone=phone,
            people=people,
            reserved_at=reserved_at,
            notes=notes,
        )
        record_reservation_created(people)
        logger.info(f"Reservation {reservation.id} created for {people} people at {reserved_at}")
        return reservation

    async def list_reservations(self, raw_limit: str | None) -> list[Reservation]:
        """List recent reservations, newest first.

        Args:
            raw_limit: ``limit`` query parameter (default 50 when absent or not a number,
                capped at 200; an explicit 0 returns nothing)

        Returns:
            list: Reservations
        """
        number = coerce_number(raw_limit or DEFAULT_LIST_LIMIT, DEFAULT_LIST_LIMIT)
        if number is None:
            number = DEFAULT_LIST_LIMIT
        limit = max(0, int(min(number, MAX_LIST_LIMIT)))
        return self.reservation_repository.list_recent(limit)

    async def update_status(self, raw_id: str, body: dict[str, Any]) -> Reservation:
        """Change the status of a reservation.

        Args:
            raw_id: Reservation id taken from the URL
            body: ``{status}`` with one of new, confirmed, cancelled

        Returns:
            Reservation: The reservation after the update

        Raises:
            ValidationError: If the status is not a known value
            NotFoundError: If the reservation does not exist
        """
        try:
            status = ReservationStatus(clean_str(body.get("status")))
        except ValueError as e:
            raise ValidationError("status must be new|confirmed|cancelled") from e

        reservation_id = parse_id(raw_id)
        reservation = (
            self.reservation_repository.update_status(reservation_id, status)
            if reservation_id is not None
            else None
        )
        if reservation is None:
            raise NotFoundError()

        logger.info(f"Reservation {reservation.id} marked {status.value}")
        return reservation
