"""Image routes backed by the object store only (no database needed)."""

import logging

from fastapi import APIRouter, Depends, Request, Response
from starlette.datastructures import UploadFile

from restaurant_site_service.auth.api_dependencies import require_admin
from restaurant_site_service.exceptions import NotFoundError, ValidationError
from restaurant_site_service.handlers.dependencies import require_image_store
from restaurant_site_service.observability.metrics import record_image_upload
from restaurant_site_service.repositories.image_store import (
    IMAGE_CACHE_CONTROL,
    generate_upload_key,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Images"])


@router.get("/img/{key:path}")
async def serve_image(key: str, request: Request) -> Response:
    """Serve a stored image publicly with a one-day cache lifetime."""
    if not key:
        raise NotFoundError()
    store = require_image_store(request)

    image = store.get(key)
    if image is None:
        raise NotFoundError()

    return Response(
        content=image.body,
        media_type=image.content_type,
        headers={"etag": image.etag, "cache-control": IMAGE_CACHE_CONTROL},
    )


@router.post(
    "/api/admin/gallery/upload",
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def upload_image(request: Request) -> dict[str, object]:
    """Upload a gallery image from a multipart form field named ``file``.

    Returns:
        ``{ok, key, url}`` where url is served by this API under ``/img/``
    """
    store = require_image_store(request)

    if "multipart/form-data" not in request.headers.get("content-type", ""):
        raise ValidationError("Use multipart/form-data")

    form = await request.form()
    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        raise ValidationError("file missing")

    key, content_type = generate_upload_key(upload.filename)
    data = await upload.read()
    store.put(key, data, content_type)
    record_image_upload(key.rsplit(".", 1)[-1], len(data))

    url = f"{request.url.scheme}://{request.url.netloc}/img/{key}"
    logger.info(f"Uploaded image {key}")
    return {"ok": True, "key": key, "url": url}
