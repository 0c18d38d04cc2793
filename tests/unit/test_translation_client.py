"""Unit tests for TranslationClient."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from restaurant_site_service.exceptions import TranslationError
from restaurant_site_service.services.translation_client import (
    DEFAULT_TRANSLATION_MODEL,
    TranslationClient,
)


@pytest.mark.unit
class TestTranslationClient:
    """Test suite for TranslationClient."""

    @pytest.fixture
    def client(self) -> TranslationClient:
        """Create a TranslationClient with test configuration."""
        return TranslationClient(
            account_id="acct_123",
            api_token="test-api-token",
            base_url="https://api.test.com/client/v4/",
        )

    def test_client_initialization(self, client: TranslationClient) -> None:
        """Test that client initializes with correct configuration."""
        assert client.account_id == "acct_123"
        assert client.api_token == "test-api-token"
        assert client.model == DEFAULT_TRANSLATION_MODEL
        assert client.base_url == "https://api.test.com/client/v4"

    @pytest.mark.asyncio
    async def test_translate_success(self, client: TranslationClient) -> None:
        """Test that the model answer is returned and the request is well formed."""
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = {
            "result": {"translated_text": "Wood-fired oven"},
            "success": True,
        }

        with patch(
            "httpx.AsyncClient.post", new_callable=AsyncMock, return_value=mock_response
        ) as mock_post:
            result = await client.translate_to_en("  Forno a legna ")

        assert result == "Wood-fired oven"
        mock_post.assert_called_once_with(
            f"https://api.test.com/client/v4/accounts/acct_123/ai/run/{DEFAULT_TRANSLATION_MODEL}",
            headers={"Authorization": "Bearer test-api-token"},
            json={"text": "Forno a legna", "source_lang": "it", "target_lang": "en"},
        )

    @pytest.mark.asyncio
    async def test_blank_text_skips_request(self, client: TranslationClient) -> None:
        """Test that blank input returns an empty string without calling the service."""
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            result = await client.translate_to_en("   ")

        assert result == ""
        mock_post.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_translated_text_returns_empty(self, client: TranslationClient) -> None:
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = {"result": {}}

        with patch("httpx.AsyncClient.post", new_callable=AsyncMock, return_value=mock_response):
            result = await client.translate_to_en("Ciao")

        assert result == ""

    @pytest.mark.asyncio
    async def test_http_error_raises_translation_error(self, client: TranslationClient) -> None:
        """Test that error status codes are reported as TranslationError."""
        mock_response = MagicMock()
        mock_response.status_code = 500
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Server error", request=MagicMock(), response=MagicMock()
        )

        with patch("httpx.AsyncClient.post", new_callable=AsyncMock, return_value=mock_response):
            with pytest.raises(TranslationError):
                await client.translate_to_en("Ciao")

    @pytest.mark.asyncio
    async def test_network_error_raises_translation_error(self, client: TranslationClient) -> None:
        with patch(
            "httpx.AsyncClient.post",
            new_callable=AsyncMock,
            side_effect=httpx.ConnectError("Connection refused"),
        ):
            with pytest.raises(TranslationError):
                await client.translate_to_en("Ciao")

    @pytest.mark.asyncio
    async def test_invalid_json_raises_translation_error(self, client: TranslationClient) -> None:
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.side_effect = ValueError("Expecting value")

        with patch("httpx.AsyncClient.post", new_callable=AsyncMock, return_value=mock_response):
            with pytest.raises(TranslationError, match="Invalid translation response"):
                await client.translate_to_en("Ciao")

    @pytest.mark.asyncio
    async def test_invalid_url_raises_translation_error(self, client: TranslationClient) -> None:
        with patch(
            "httpx.AsyncClient.post",
            new_callable=AsyncMock,
            side_effect=httpx.InvalidURL("bad"),
        ):
            with pytest.raises(TranslationError):
                await client.translate_to_en("Ciao")
