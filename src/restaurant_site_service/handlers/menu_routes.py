"""Menu routes: category order, admin CRUD and the public listing."""

from typing import Any

from fastapi import APIRouter, Depends

from restaurant_site_service.auth.api_dependencies import require_admin
from restaurant_site_service.handlers.dependencies import (
    as_object,
    get_menu_service,
    read_json_body,
    require_database,
)
from restaurant_site_service.services.menu_service import MenuService

router = APIRouter(tags=["Menu"], dependencies=[Depends(require_database)])


@router.get("/api/menu/categories")
async def get_menu_categories(
    menu_service: MenuService = Depends(get_menu_service),
) -> dict[str, Any]:
    categories = await menu_service.get_category_order()
    return {"data": {"categories": [entry.to_document() for entry in categories]}}


# Registered before /api/admin/menu/{item_id} so "categories" is not read as an id
@router.put("/api/admin/menu/categories", dependencies=[Depends(require_admin)])
async def replace_menu_categories(
    body: Any = Depends(read_json_body),
    menu_service: MenuService = Depends(get_menu_service),
) -> dict[str, Any]:
    categories = await menu_service.replace_category_order(as_object(body))
    return {"ok": True, "data": {"categories": [entry.to_document() for entry in categories]}}


@router.post("/api/admin/menu", status_code=201, dependencies=[Depends(require_admin)])
async def create_menu_item(
    body: Any = Depends(read_json_body),
    menu_service: MenuService = Depends(get_menu_service),
) -> dict[str, Any]:
    item = await menu_service.create_item(as_object(body))
    return {"item": item.model_dump(mode="json")}


@router.put("/api/admin/menu/{item_id}", dependencies=[Depends(require_admin)])
async def update_menu_item(
    item_id: str,
    body: Any = Depends(read_json_body),
    menu_service: MenuService = Depends(get_menu_service),
) -> dict[str, Any]:
    item = await menu_service.update_item(item_id, as_object(body))
    return {"item": item.model_dump(mode="json")}


@router.delete("/api/admin/menu/{item_id}", dependencies=[Depends(require_admin)])
async def delete_menu_item(
    item_id: str,
    menu_service: MenuService = Depends(get_menu_service),
) -> dict[str, Any]:
    await menu_service.delete_item(item_id)
    return {"ok": True}


@router.get("/api/menu")
async def list_menu(menu_service: MenuService = Depends(get_menu_service)) -> dict[str, Any]:
    """Public menu with Italian and English fields, in display order."""
    items = await menu_service.list_public_menu()
    return {"items": [item.model_dump(mode="json") for item in items]}
