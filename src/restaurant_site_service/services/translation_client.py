"""Client for the machine translation service (Cloudflare Workers AI)."""

import logging

import httpx

from restaurant_site_service.exceptions import TranslationError
from restaurant_site_service.observability.decorators import traced

logger = logging.getLogger(__name__)

DEFAULT_TRANSLATION_MODEL = "@cf/meta/m2m100-1.2b"
DEFAULT_BASE_URL = "https://api.cloudflare.com/client/v4"


class TranslationClient:
    """HTTP client translating Italian site text to English.

    Calls the Workers AI REST endpoint ``/accounts/{account_id}/ai/run/{model}`` with a
    bearer API token.
    """

    def __init__(
        self,
        account_id: str,
        api_token: str,
        model: str = DEFAULT_TRANSLATION_MODEL,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        """Initialize the translation client.

        Args:
            account_id: Cloudflare account identifier
            api_token: API token allowed to run Workers AI models
            model: Translation model name
            base_url: Base URL of the Cloudflare API
        """
        self.account_id = account_id
        self.api_token = api_token
        self.model = model
        self.base_url = base_url.rstrip("/")

    @traced("translate_to_en", service_name="site-api")
    async def translate_to_en(self, text: str) -> str:
        """Translate Italian text to English.

        Args:
            text: Italian source text

        Returns:
            The English translation, or "" for blank input or an empty model answer

        Raises:
            TranslationError: If the service cannot be reached or answers with an error
        """
        source = (text or "").strip()
        if not source:
            return ""

        url = f"{self.base_url}/accounts/{self.account_id}/ai/run/{self.model}"
        headers = {"Authorization": f"Bearer {self.api_token}"}
        payload = {"text": source, "source_lang": "it", "target_lang": "en"}

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(url, headers=headers, json=payload)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Translation request failed: {e}")
            raise TranslationError(str(e)) from e
        except ValueError as e:
            raise TranslationError(f"Invalid translation response: {e}") from e

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, dict):
            return ""
        return result.get("translated_text") or ""
