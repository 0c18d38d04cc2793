"""Component tests running the site API end to end against in-memory SQLite.

Only the outer collaborators are replaced: the S3 client by an in-memory double and
the translation service by a patched httpx call.
"""

from collections.abc import Iterator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from restaurant_site_service.handlers.api_handler import create_app
from restaurant_site_service.repositories.image_store import ImageStore
from restaurant_site_service.repositories.site_repositories import (
    MenuItemRepository,
    ReservationRepository,
    SitePageRepository,
)
from restaurant_site_service.services.auto_translate import AutoTranslator
from restaurant_site_service.services.content_service import ContentService
from restaurant_site_service.services.menu_service import MenuService
from restaurant_site_service.services.reservation_service import ReservationService
from restaurant_site_service.services.strip_service import StripService
from restaurant_site_service.services.translation_client import TranslationClient


class InMemoryS3:
    """Minimal S3 client double keeping objects in a dict."""

    def __init__(self) -> None:
        self.objects: dict[str, dict[str, Any]] = {}

    def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str) -> dict:  # noqa: N803
        self.objects[Key] = {"Body": Body, "ContentType": ContentType, "ETag": f'"etag-{len(Body)}"'}
        return {}

    def get_object(self, Bucket: str, Key: str) -> dict:  # noqa: N803
        if Key not in self.objects:
            raise ClientError({"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject")
        stored = self.objects[Key]
        body = MagicMock()
        body.read.return_value = stored["Body"]
        return {"Body": body, "ContentType": stored["ContentType"], "ETag": stored["ETag"]}


def translation_response(url: str, headers: dict, json: dict) -> MagicMock:
    """Fake Workers AI answer: prefixes the Italian text with "EN "."""
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = {"result": {"translated_text": f"EN {json['text']}"}}
    return response


@pytest.fixture
def s3() -> InMemoryS3:
    return InMemoryS3()


@pytest.fixture
def client(sqlite_engine: Engine, s3: InMemoryS3, admin_token: str) -> Iterator[TestClient]:
    """Application wired with real services and repositories."""
    page_repository = SitePageRepository(engine=sqlite_engine)
    translator = AutoTranslator(
        translation_client=TranslationClient(account_id="acct", api_token="token")
    )
    app = create_app(
        content_service=ContentService(page_repository=page_repository, auto_translator=translator),
        strip_service=StripService(page_repository=page_repository),
        menu_service=MenuService(
            menu_repository=MenuItemRepository(engine=sqlite_engine),
            page_repository=page_repository,
        ),
        reservation_service=ReservationService(
            reservation_repository=ReservationRepository(engine=sqlite_engine)
        ),
        image_store=ImageStore(s3_client=s3, bucket_name="site-images"),  # type: ignore[arg-type]
        admin_token=admin_token,
    )
    with TestClient(app) as test_client:
        yield test_client


@pytest.mark.component
class TestHealth:
    """Health check against a live database."""

    def test_health_reports_database(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "db": True}


@pytest.mark.component
class TestMenuFlow:
    """Menu administration and public listing."""

    def test_category_order_round_trip(
        self, client: TestClient, admin_headers: dict, mock_categories: list[dict]
    ) -> None:
        put = client.put(
            "/api/admin/menu/categories", json={"categories": mock_categories}, headers=admin_headers
        )
        get = client.get("/api/menu/categories")

        assert put.status_code == 200
        assert get.json() == {"data": {"categories": mock_categories}}

    def test_update_unknown_item_returns_404(self, client: TestClient, admin_headers: dict) -> None:
        response = client.put("/api/admin/menu/5", json={}, headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    def test_menu_lifecycle(
        self, client: TestClient, admin_headers: dict, mock_categories: list[dict]
    ) -> None:
        client.put(
            "/api/admin/menu/categories", json={"categories": mock_categories}, headers=admin_headers
        )

        created = client.post(
            "/api/admin/menu",
            json={
                "name": "Margherita",
                "price_cents": 800,
                "category": "Pizze",
                "allergens": ["latte", "glutine", "pomodoro"],
            },
            headers=admin_headers,
        )
        assert created.status_code == 201
        pizza = created.json()["item"]
        assert pizza["allergens"] == ["glutine", "latte"]

        starter = client.post(
            "/api/admin/menu",
            json={"name": "Bruschetta", "price_cents": 450, "category": "Antipasti"},
            headers=admin_headers,
        ).json()["item"]

        unchanged = client.put(f"/api/admin/menu/{pizza['id']}", json={}, headers=admin_headers)
        assert unchanged.status_code == 200
        assert unchanged.json() == {"item": pizza}

        listing = client.get("/api/menu").json()["items"]
        assert [entry["id"] for entry in listing] == [starter["id"], pizza["id"]]

        client.put(
            f"/api/admin/menu/{starter['id']}", json={"is_available": "false"}, headers=admin_headers
        )
        assert [entry["id"] for entry in client.get("/api/menu").json()["items"]] == [pizza["id"]]

        deleted = client.delete(f"/api/admin/menu/{pizza['id']}", headers=admin_headers)
        assert deleted.json() == {"ok": True}
        assert client.delete(f"/api/admin/menu/{pizza['id']}", headers=admin_headers).status_code == 404

    def test_create_item_validation(self, client: TestClient, admin_headers: dict) -> None:
        response = client.post("/api/admin/menu", json={"name": "Senza prezzo"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "name and price_cents required"}


@pytest.mark.component
class TestReservationFlow:
    """Public booking and back-office handling."""

    def test_reservation_lifecycle(self, client: TestClient, admin_headers: dict) -> None:
        created = client.post(
            "/api/reservations",
            json={
                "name": "Anna Rossi",
                "phone": "333 1234567",
                "date": "2024-01-01",
                "time": "20:00",
                "people": 4,
            },
        )

        assert created.status_code == 201
        reservation = created.json()["reservation"]
        assert reservation["status"] == "new"
        assert reservation["reserved_at"] == "2024-01-01 20:00"

        listed = client.get("/api/admin/reservations", headers=admin_headers).json()["reservations"]
        assert [entry["id"] for entry in listed] == [reservation["id"]]
        empty = client.get("/api/admin/reservations?limit=0", headers=admin_headers)
        assert empty.json() == {"reservations": []}
        assert listed[0]["people"] == 4
        assert listed[0]["full_name"] == "Anna Rossi"

        updated = client.put(
            f"/api/admin/reservations/{reservation['id']}",
            json={"status": "confirmed"},
            headers=admin_headers,
        )
        assert updated.json() == {
            "ok": True,
            "reservation": {"id": reservation["id"], "status": "confirmed"},
        }

    def test_invalid_reservations(self, client: TestClient, admin_headers: dict) -> None:
        missing = client.post("/api/reservations", json={"name": "Anna"})
        crowd = client.post(
            "/api/reservations",
            json={"name": "A", "phone": "1", "date": "2024-01-01", "time": "20:00", "people": 31},
        )
        bad_status = client.put(
            "/api/admin/reservations/1", json={"status": "seated"}, headers=admin_headers
        )

        assert missing.json() == {"error": "name, phone, date, time required"}
        assert crowd.json() == {"error": "people invalid"}
        assert bad_status.status_code == 400
        assert bad_status.json() == {"error": "status must be new|confirmed|cancelled"}


@pytest.mark.component
class TestPageFlow:
    """Page upserts with automatic translation."""

    def test_page_is_translated_and_merged(self, client: TestClient, admin_headers: dict) -> None:
        with patch(
            "httpx.AsyncClient.post", new_callable=AsyncMock, side_effect=translation_response
        ) as mock_post:
            first = client.put(
                "/api/admin/page/home",
                json={"hero": {"title": "Benvenuti", "image": "https://cdn.example.com/a.jpg"}},
                headers=admin_headers,
            )
            second = client.put(
                "/api/admin/page/home",
                json={"phone": "081 123456", "about": "La nostra storia"},
                headers=admin_headers,
            )

        assert first.status_code == 200
        assert first.json()["data"]["hero"] == {
            "title": "Benvenuti",
            "title_en": "EN Benvenuti",
            "image": "https://cdn.example.com/a.jpg",
        }
        assert mock_post.await_count == 2
        assert second.json()["data"] == {
            "hero": {
                "title": "Benvenuti",
                "title_en": "EN Benvenuti",
                "image": "https://cdn.example.com/a.jpg",
            },
            "phone": "081 123456",
            "about": "La nostra storia",
            "about_en": "EN La nostra storia",
        }

        page = client.get("/api/page/home").json()
        assert page["slug"] == "home"
        assert page["data"] == second.json()["data"]
        assert page["updated_at"] is not None

    @pytest.mark.parametrize(
        "failure",
        [httpx.ConnectError("unreachable"), httpx.InvalidURL("bad"), RuntimeError("boom")],
    )
    def test_translation_outage_stores_original(
        self, client: TestClient, admin_headers: dict, failure: Exception
    ) -> None:
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock, side_effect=failure):
            response = client.put(
                "/api/admin/page/about", json={"title": "Chi siamo"}, headers=admin_headers
            )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.json()["data"] == {"title": "Chi siamo"}
        assert client.get("/api/page/about").json()["data"] == {"title": "Chi siamo"}

    def test_missing_page_is_empty(self, client: TestClient) -> None:
        assert client.get("/api/page/nowhere").json() == {
            "slug": "nowhere",
            "data": {},
            "updated_at": None,
        }


@pytest.mark.component
class TestStripAndGalleryFlow:
    """Homepage strips, booking settings and gallery."""

    def test_strip_lifecycle(self, client: TestClient, admin_headers: dict) -> None:
        created = client.post(
            "/api/admin/strip/create", json={"key": "pizze", "title": "Le pizze"}, headers=admin_headers
        )
        duplicate = client.post(
            "/api/admin/strip/create", json={"key": "pizze"}, headers=admin_headers
        )
        item = client.post(
            "/api/admin/strip/items",
            json={"key": "pizze", "name": "Margherita", "image_url": "/img/a.jpg"},
            headers=admin_headers,
        )
        client.post("/api/admin/strip/create", json={"key": "dolci"}, headers=admin_headers)
        client.put("/api/admin/strip/dolci", json={"order": 1}, headers=admin_headers)

        assert created.status_code == 201
        assert duplicate.status_code == 409
        assert duplicate.json() == {"error": "Strip category already exists"}
        assert item.json()["item"]["name"] == "Margherita"
        assert client.get("/api/strip").json() == {"keys": ["dolci", "pizze"]}

        data = client.get("/api/strip/pizze").json()["data"]
        assert data["title"] == "Le pizze"
        assert [entry["name"] for entry in data["items"]] == ["Margherita"]

        deleted = client.delete("/api/admin/strip/pizze", headers=admin_headers)
        assert deleted.json() == {"ok": True, "slug": "strip_pizze"}
        assert client.get("/api/strip/pizze").json() == {"data": None}
        assert client.delete("/api/admin/strip/pizze", headers=admin_headers).status_code == 404

    def test_booking_settings(self, client: TestClient, admin_headers: dict) -> None:
        assert client.get("/api/settings/booking").json() == {
            "data": {"enabled": True, "whatsapp": ""}
        }

        client.put(
            "/api/admin/settings/booking",
            json={"enabled": False, "whatsapp": "+39 333"},
            headers=admin_headers,
        )

        assert client.get("/api/settings/booking").json() == {
            "data": {"enabled": False, "whatsapp": "+39 333"}
        }

    def test_gallery(self, client: TestClient, admin_headers: dict) -> None:
        assert client.get("/api/gallery").json() == {"images": []}

        response = client.post(
            "/api/admin/gallery", json={"images": ["/img/a.jpg", " "]}, headers=admin_headers
        )

        assert response.json() == {"ok": True, "count": 1}
        assert client.get("/api/gallery").json() == {"images": ["/img/a.jpg"]}


@pytest.mark.component
class TestImageFlow:
    """Upload to and serve from the object store."""

    def test_upload_then_serve(self, client: TestClient, admin_headers: dict) -> None:
        uploaded = client.post(
            "/api/admin/gallery/upload",
            files={"file": ("sala.webp", b"RIFF-webp", "image/webp")},
            headers=admin_headers,
        )

        assert uploaded.status_code == 201
        key = uploaded.json()["key"]

        served = client.get(f"/img/{key}")

        assert served.status_code == 200
        assert served.content == b"RIFF-webp"
        assert served.headers["content-type"] == "image/webp"
        assert served.headers["cache-control"] == "public, max-age=86400"
        assert served.headers["etag"] == '"etag-9"'

    def test_missing_image(self, client: TestClient) -> None:
        response = client.get("/img/missing.jpg")

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}
