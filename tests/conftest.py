"""Shared pytest fixtures and configuration for all tests."""

import os

# Keep entry point modules from building the real application during collection
os.environ.setdefault("ENVIRONMENT", "test")

from collections.abc import Iterator  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from restaurant_site_service.repositories.database import create_schema  # noqa: E402


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    """Fixture providing an in-memory SQLite engine with the site schema."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def admin_token() -> str:
    """Fixture providing the admin bearer secret used by API tests."""
    return "test-admin-token"


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    """Fixture providing a valid admin Authorization header."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def mock_page_document() -> dict:
    """Fixture providing a sample Italian page document."""
    return {
        "hero": {
            "title": "Benvenuti da Mario",
            "subtitle": "Pizza napoletana dal 1985",
            "image": "https://cdn.example.com/hero.jpg",
            "cta": {"label": "Prenota", "href": "/prenota"},
        },
        "phone": "+39 081 123456",
        "sections": [
            {"id": "storia", "text": "La nostra storia"},
            {"id": "forno", "text": "Forno a legna", "text_en": "Wood-fired oven"},
        ],
    }


@pytest.fixture
def mock_categories() -> list[dict]:
    """Fixture providing a sample menu category order."""
    return [
        {"name": "Antipasti", "order": 1},
        {"name": "Pizze", "order": 2},
        {"name": "Dolci", "order": 3},
    ]
