"""Custom metrics for the restaurant site API."""

from opentelemetry import metrics

# Get meter for the site API
meter = metrics.get_meter("site-api")

translation_counter = meter.create_counter(
    name="page_translation_total",
    description="Auto-translation outcomes for admin page updates",
    unit="1",
)

translated_fields_counter = meter.create_counter(
    name="page_translated_fields_total",
    description="Number of English fields filled in by auto-translation",
    unit="1",
)

page_upsert_counter = meter.create_counter(
    name="page_upsert_total",
    description="Page document writes by kind",
    unit="1",
)

image_upload_counter = meter.create_counter(
    name="image_upload_total",
    description="Images uploaded to the object store by extension",
    unit="1",
)

image_upload_bytes = meter.create_histogram(
    name="image_upload_bytes",
    description="Size of uploaded images",
    unit="By",
)

reservation_counter = meter.create_counter(
    name="reservation_created_total",
    description="Reservations submitted from the website",
    unit="1",
)


def record_translation(success: bool, translated_fields: int) -> None:
    """Record the outcome of an auto-translation pass.

    Args:
        success: Whether the document was translated or stored untranslated
        translated_fields: Number of ``_en`` fields added
    """
    translation_counter.add(1, {"outcome": "success" if success else "fallback"})
    if translated_fields:
        translated_fields_counter.add(translated_fields)


def record_page_upsert(kind: str) -> None:
    """Record a page document write.

    Args:
        kind: Document family (e.g. "page", "strip", "gallery")
    """
    page_upsert_counter.add(1, {"kind": kind})


def record_image_upload(extension: str, size_bytes: int) -> None:
    """Record an image upload.

    Args:
        extension: File extension of the stored image
        size_bytes: Size of the uploaded blob
    """
    image_upload_counter.add(1, {"extension": extension})
    image_upload_bytes.record(size_bytes, {"extension": extension})


def record_reservation_created(people: int) -> None:
    """Record a new reservation.

    Args:
        people: Party size
    """
    reservation_counter.add(1, {"party_size": str(people)})
