"""Automatic English enrichment of admin-edited page documents.

Page documents are arbitrary JSON. For every human readable Italian string ``key`` the
walker fills a sibling ``key_en`` through the translation client, never overwriting an
existing non-blank translation and never touching structural fields (links, images,
phone numbers, flags, ids).
"""

import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Union

from restaurant_site_service.exceptions import TranslationError
from restaurant_site_service.observability.decorators import traced
from restaurant_site_service.services.translation_client import TranslationClient

logger = logging.getLogger(__name__)

JsonValue = Union[None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]]

# (parent object being built, key, string value)
StringVisitor = Callable[[dict[str, JsonValue], str, str], Awaitable[None]]


async def visit_json(
    value: JsonValue,
    skip_key: Callable[[str], bool],
    on_string: StringVisitor,
) -> JsonValue:
    """Walk a JSON value depth-first and return a rebuilt copy.

    Lists are mapped element by element (order and length preserved). Objects are
    copied; keys accepted by ``skip_key`` are left as they are, nested objects and lists
    are walked, and string values are handed to ``on_string`` together with the copy
    under construction so it can add sibling keys. Scalars are returned unchanged.

    Args:
        value: Parsed JSON value
        skip_key: Predicate selecting object keys that must not be visited
        on_string: Coroutine called for every visited string leaf

    Returns:
        The rebuilt value
    """
    if isinstance(value, list):
        return [await visit_json(element, skip_key, on_string) for element in value]

    if not isinstance(value, dict):
        return value

    out: dict[str, JsonValue] = dict(value)
    for key, child in value.items():
        if skip_key(key):
            continue
        if isinstance(child, (dict, list)):
            out[key] = await visit_json(child, skip_key, on_string)
        elif isinstance(child, str):
            await on_string(out, key, child)
    return out


@dataclass(frozen=True)
class TranslationRules:
    """Which keys, strings and pages the auto-translation leaves alone."""

    english_suffix: str = "_en"
    ignore_keys: frozenset[str] = frozenset(
        {"href", "url", "image", "image_url", "images", "phone", "whatsapp", "enabled", "id"}
    )
    skip_slugs: frozenset[str] = frozenset({"gallery", "covers"})
    untranslatable_patterns: tuple[re.Pattern[str], ...] = field(
        default=(
            re.compile(r"^https?://", re.IGNORECASE),
            re.compile(r"^/[a-z0-9/_-]*$", re.IGNORECASE),
        )
    )

    def skips_key(self, key: str) -> bool:
        return key.endswith(self.english_suffix) or key in self.ignore_keys

    def english_key(self, key: str) -> str:
        return f"{key}{self.english_suffix}"

    def is_translatable(self, text: str) -> bool:
        """Blank strings, absolute URLs and site paths are not translated."""
        stripped = text.strip()
        if not stripped:
            return False
        return not any(pattern.match(stripped) for pattern in self.untranslatable_patterns)


@dataclass
class AutoTranslateResult:
    """Result of enriching a document with English fields.

    Attributes:
        success: Whether every needed translation was obtained
        document: The enriched document, or the untouched input on failure
        translated_fields: Number of ``_en`` fields filled in
        error_message: Why the enrichment failed, None on success
    """

    success: bool
    document: JsonValue
    translated_fields: int = 0
    error_message: str | None = None


class AutoTranslator:
    """Fills missing ``_en`` siblings of Italian text fields."""

    def __init__(
        self,
        translation_client: TranslationClient | None,
        rules: TranslationRules | None = None,
    ) -> None:
        """Initialize the translator.

        Args:
            translation_client: Translation adapter, None when no service is configured
            rules: Key and string skip rules
        """
        self.translation_client = translation_client
        self.rules = rules or TranslationRules()

    def applies_to(self, slug: str) -> bool:
        """Whether documents stored under ``slug`` are translated at all."""
        return slug not in self.rules.skip_slugs

    @traced("auto_translate_document", service_name="site-api")
    async def enrich(self, document: JsonValue) -> AutoTranslateResult:
        """Add English translations for every untranslated text field.

        Existing non-blank ``_en`` values are kept, so running this on an already
        enriched document changes nothing.

        Args:
            document: Parsed JSON document

        Returns:
            AutoTranslateResult with the enriched document, or the original one on failure
        """
        client = self.translation_client
        if client is None:
            return AutoTranslateResult(
                success=False,
                document=document,
                error_message="Translation service not configured",
            )

        rules = self.rules
        translated = 0

        async def fill_english(out: dict[str, JsonValue], key: str, text: str) -> None:
            nonlocal translated
            if not rules.is_translatable(text):
                return
            english_key = rules.english_key(key)
            existing = out.get(english_key)
            if existing is not None and str(existing).strip():
                return
            out[english_key] = await client.translate_to_en(text.strip())
            translated += 1

        try:
            enriched = await visit_json(document, rules.skips_key, fill_english)
        except TranslationError as e:
            logger.warning(f"Auto-translation failed: {e}")
            return AutoTranslateResult(success=False, document=document, error_message=str(e))
        except Exception as e:
            # Any failure of the walk falls back to the untranslated document
            logger.exception(f"Unexpected auto-translation failure: {e}")
            return AutoTranslateResult(success=False, document=document, error_message=str(e))

        return AutoTranslateResult(success=True, document=enriched, translated_fields=translated)
