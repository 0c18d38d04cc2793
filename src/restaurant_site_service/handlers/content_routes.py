"""Content routes: health, booking settings, pages and the photo gallery."""

from typing import Any

from fastapi import APIRouter, Depends

from restaurant_site_service.auth.api_dependencies import require_admin
from restaurant_site_service.exceptions import ValidationError
from restaurant_site_service.handlers.dependencies import (
    as_object,
    get_content_service,
    read_json_body,
    require_database,
)
from restaurant_site_service.services.content_service import ContentService

router = APIRouter(tags=["Content"], dependencies=[Depends(require_database)])


@router.get("/api/health")
async def health_check(
    content_service: ContentService = Depends(get_content_service),
) -> dict[str, bool]:
    """Liveness plus a ``SELECT 1`` check of the database."""
    return {"ok": True, "db": await content_service.check_database()}


@router.get("/api/settings/booking")
async def get_booking_settings(
    content_service: ContentService = Depends(get_content_service),
) -> dict[str, Any]:
    settings = await content_service.get_booking_settings()
    return {"data": settings.model_dump()}


@router.put("/api/admin/settings/booking", dependencies=[Depends(require_admin)])
async def update_booking_settings(
    body: Any = Depends(read_json_body),
    content_service: ContentService = Depends(get_content_service),
) -> dict[str, Any]:
    settings = await content_service.update_booking_settings(as_object(body))
    return {"ok": True, "data": settings.model_dump()}


@router.get("/api/page/{slug}")
async def get_page(
    slug: str,
    content_service: ContentService = Depends(get_content_service),
) -> dict[str, Any]:
    page = await content_service.get_page(slug)
    return page.model_dump(mode="json")


@router.put("/api/admin/page/{slug}", dependencies=[Depends(require_admin)])
async def upsert_page(
    slug: str,
    body: Any = Depends(read_json_body),
    content_service: ContentService = Depends(get_content_service),
) -> dict[str, Any]:
    """Merge page content, adding English translations for new Italian text."""
    if not isinstance(body, dict):
        raise ValidationError("Body must be a JSON object")
    page = await content_service.upsert_page(slug, body)
    return page.model_dump(mode="json")


@router.get("/api/gallery")
async def get_gallery(
    content_service: ContentService = Depends(get_content_service),
) -> dict[str, Any]:
    return {"images": await content_service.get_gallery_images()}


@router.post("/api/admin/gallery", dependencies=[Depends(require_admin)])
async def replace_gallery(
    body: Any = Depends(read_json_body),
    content_service: ContentService = Depends(get_content_service),
) -> dict[str, Any]:
    count = await content_service.replace_gallery(as_object(body))
    return {"ok": True, "count": count}
