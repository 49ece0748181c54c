"""Generation adapter: feature requests in, decoded results or safe errors out.

Every failure is caught here, classified, and re-raised as one
``IslamicAIError`` subclass whose message can be shown to the user as is.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from islamic_ai.config import Config
from islamic_ai.errors import (
    ConfigurationError,
    DuaExhausted,
    MalformedResponse,
    ProviderError,
)
from islamic_ai.request import GenerationRequest, build_provider_request
from islamic_ai.result import decode_dua

if TYPE_CHECKING:
    from collections.abc import Sequence

    from islamic_ai.providers.base import Provider
    from islamic_ai.providers.models import ProviderResponse
    from islamic_ai.types import DuaRecord

logger = logging.getLogger(__name__)

ANSWER_FAILED = "Failed to get an answer from the AI. Please try again."
EXPLAIN_FAILED = "Failed to get a verse explanation from the AI. Please try again."
DUA_FAILED = "Failed to get a dua from the AI. Please try again."
DUA_MALFORMED = "Received an invalid format from the AI. Please try again."


class GenerationAdapter:
    """Single entry point for the answer, explain and dua features.

    The provider is built on first use from ``config`` unless one is
    injected, then reused for the adapter's lifetime. A missing API key
    therefore fails each call with ``ConfigurationError`` rather than
    failing construction.

    Example:
        adapter = GenerationAdapter(Config())
        answer = await adapter.answer_question("What is the significance of Ramadan?")
    """

    def __init__(
        self, config: Config | None = None, provider: Provider | None = None
    ) -> None:
        self.config = config if config is not None else Config()
        self._provider = provider
        self._owns_provider = provider is None

    def _get_provider(self) -> Provider:
        """Build the Gemini provider once; raise ConfigurationError without a key."""
        if self._provider is None:
            from islamic_ai.providers.gemini import GeminiProvider

            self._provider = GeminiProvider(self.config.require_api_key())
        return self._provider

    async def answer_question(self, question: str) -> str:
        """Answer a free-text question; the reply is returned verbatim."""
        response = await self._call(GenerationRequest.answer(question), ANSWER_FAILED)
        return response.text

    async def explain_verse(self, surah: str, ayah: str) -> str:
        """Explain a Quran verse given as (surah, ayah) exactly as typed."""
        request = GenerationRequest.explain(surah, ayah)
        response = await self._call(request, EXPLAIN_FAILED)
        return response.text

    async def fetch_daily_dua(self, recent_history: Sequence[str]) -> DuaRecord:
        """Fetch one dua the user has not seen yet.

        Raises:
            DuaExhausted: The model reports the history covers nearly all duas.
            MalformedResponse: The reply was not a complete dua object.
            ProviderError: The call itself failed.
            ConfigurationError: No API key is configured.
        """
        request = GenerationRequest.dua(recent_history)
        response = await self._call(request, DUA_FAILED)
        outcome = decode_dua(response.text)

        if outcome.status == "exhausted":
            logger.info("Dua history exhausted after %d ids", len(request.payload))
            raise DuaExhausted(outcome.detail)

        if outcome.status == "malformed" or outcome.record is None:
            logger.error(
                "Malformed dua response (%s): %.200r", outcome.detail, response.text
            )
            raise MalformedResponse(
                DUA_MALFORMED, hint=outcome.detail, raw_text=response.text
            )

        record = outcome.record
        if record.id in request.payload:
            logger.warning("Model repeated dua id %r despite history", record.id)
        return record

    async def aclose(self) -> None:
        """Close a provider this adapter built itself."""
        if not self._owns_provider or self._provider is None:
            return
        provider, self._provider = self._provider, None
        aclose = getattr(provider, "aclose", None)
        if callable(aclose):
            try:
                await aclose()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                # Cleanup should never mask the primary failure.
                logger.warning("Provider cleanup failed: %s", exc)

    async def _call(
        self, request: GenerationRequest, failure_message: str
    ) -> ProviderResponse:
        """Run one provider call, mapping every failure to a user-safe error."""
        try:
            provider = self._get_provider()
        except ConfigurationError as exc:
            logger.error("Assistant is not configured: %s", exc)
            raise

        provider_request = build_provider_request(request, self.config)
        logger.debug(
            "Calling %s for %s request", provider_request.model, request.kind.value
        )
        try:
            return await provider.generate(provider_request)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.error("%s request failed: %s", request.kind.value, exc)
            raise ProviderError(
                failure_message,
                hint=getattr(exc, "hint", None),
                retryable=getattr(exc, "retryable", None),
                status_code=getattr(exc, "status_code", None),
                provider=getattr(exc, "provider", None),
                phase=getattr(exc, "phase", None),
            ) from exc
