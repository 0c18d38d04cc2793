"""Reservation routes: public booking form and back-office status updates."""

from typing import Any

from fastapi import APIRouter, Depends

from restaurant_site_service.auth.api_dependencies import require_admin
from restaurant_site_service.handlers.dependencies import (
    as_object,
    get_reservation_service,
    read_json_body,
    require_database,
)
from restaurant_site_service.services.reservation_service import ReservationService

router = APIRouter(tags=["Reservations"], dependencies=[Depends(require_database)])


@router.post("/api/reservations", status_code=201)
async def create_reservation(
    body: Any = Depends(read_json_body),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> dict[str, Any]:
    reservation = await reservation_service.create_reservation(as_object(body))
    return {
        "ok": True,
        "reservation": reservation.model_dump(
            mode="json", include={"id", "created_at", "status", "reserved_at"}
        ),
    }


@router.get("/api/admin/reservations", dependencies=[Depends(require_admin)])
async def list_reservations(
    limit: str | None = None,
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> dict[str, Any]:
    reservations = await reservation_service.list_reservations(limit)
    return {"reservations": [reservation.model_dump(mode="json") for reservation in reservations]}


@router.put("/api/admin/reservations/{reservation_id}", dependencies=[Depends(require_admin)])
async def update_reservation_status(
    reservation_id: str,
    body: Any = Depends(read_json_body),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> dict[str, Any]:
    reservation = await reservation_service.update_status(reservation_id, as_object(body))
    return {
        "ok": True,
        "reservation": reservation.model_dump(mode="json", include={"id", "status"}),
    }
