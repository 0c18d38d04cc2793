"""Homepage strip routes."""

from typing import Any

from fastapi import APIRouter, Depends

from restaurant_site_service.auth.api_dependencies import require_admin
from restaurant_site_service.exceptions import ValidationError
from restaurant_site_service.handlers.dependencies import (
    as_object,
    get_strip_service,
    read_json_body,
    require_database,
)
from restaurant_site_service.services.strip_service import StripService

router = APIRouter(tags=["Strips"], dependencies=[Depends(require_database)])


@router.get("/api/strip")
async def list_strips(strip_service: StripService = Depends(get_strip_service)) -> dict[str, Any]:
    return {"keys": await strip_service.list_keys()}


@router.get("/api/strip/{key}")
async def get_strip(
    key: str,
    strip_service: StripService = Depends(get_strip_service),
) -> dict[str, Any]:
    return {"data": await strip_service.get_strip(key)}


@router.post("/api/admin/strip/create", status_code=201, dependencies=[Depends(require_admin)])
async def create_strip(
    body: Any = Depends(read_json_body),
    strip_service: StripService = Depends(get_strip_service),
) -> dict[str, Any]:
    page = await strip_service.create_strip(as_object(body))
    return {"ok": True, "slug": page.slug, "data": page.data}


@router.post("/api/admin/strip/items", dependencies=[Depends(require_admin)])
async def add_strip_item(
    body: Any = Depends(read_json_body),
    strip_service: StripService = Depends(get_strip_service),
) -> dict[str, Any]:
    item = await strip_service.add_item(as_object(body))
    return {"ok": True, "item": item.model_dump()}


@router.put("/api/admin/strip/{key}", dependencies=[Depends(require_admin)])
async def update_strip(
    key: str,
    body: Any = Depends(read_json_body),
    strip_service: StripService = Depends(get_strip_service),
) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise ValidationError("Body must be object")
    await strip_service.update_strip(key, body)
    return {"ok": True}


@router.delete("/api/admin/strip/{key}", dependencies=[Depends(require_admin)])
async def delete_strip(
    key: str,
    strip_service: StripService = Depends(get_strip_service),
) -> dict[str, Any]:
    slug = await strip_service.delete_strip(key)
    return {"ok": True, "slug": slug}
