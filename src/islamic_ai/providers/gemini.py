"""Gemini provider implementation."""

from __future__ import annotations

import asyncio
from typing import Any

from islamic_ai.errors import ConfigurationError, ProviderError
from islamic_ai.providers._errors import wrap_provider_error
from islamic_ai.providers.models import ProviderRequest, ProviderResponse


class GeminiProvider:
    """Google Gemini API provider."""

    def __init__(self, api_key: str) -> None:
        """Create provider with an API key."""
        if not api_key:
            raise ConfigurationError(
                "The API key is not configured. Please set GEMINI_API_KEY and try again.",
                hint="Set GEMINI_API_KEY or pass Config(api_key=...).",
            )
        self.api_key = api_key
        self._client: Any = None

    def _get_client(self) -> Any:
        """Lazy-initialize the Gemini client."""
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(self, request: ProviderRequest) -> ProviderResponse:
        """Generate content from the Gemini model."""
        client = self._get_client()
        from google.genai import types

        config_kwargs: dict[str, Any] = {}
        if request.system_instruction is not None:
            config_kwargs["system_instruction"] = request.system_instruction
        if request.response_schema is not None:
            config_kwargs["response_mime_type"] = "application/json"
            config_kwargs["response_json_schema"] = request.response_schema

        try:
            response = await client.aio.models.generate_content(
                model=request.model,
                contents=request.contents,
                config=types.GenerateContentConfig(**config_kwargs),
            )

            if not response:
                raise ProviderError("Gemini returned an empty response.")

            return self._parse_response(response)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise wrap_provider_error(
                e,
                provider="gemini",
                phase="generate",
                message="Gemini generate failed",
            ) from e

    async def aclose(self) -> None:
        """Release the underlying HTTP client, if one was created."""
        client, self._client = self._client, None
        if client is None:
            return
        aclose = getattr(getattr(client, "aio", None), "aclose", None)
        if callable(aclose):
            await aclose()

    def _parse_response(self, response: Any) -> ProviderResponse:
        """Parse Gemini response into a ProviderResponse."""
        text = ""
        try:
            if hasattr(response, "text"):
                text = response.text or ""
        except Exception:
            # .text raises when the candidate was blocked; treat as empty.
            text = ""

        usage = {}
        um = getattr(response, "usage_metadata", None)
        if um is not None:
            # Gemini SDK attrs → provider-agnostic keys
            usage = {
                "input_tokens": getattr(um, "prompt_token_count", 0) or 0,
                "output_tokens": getattr(um, "candidates_token_count", 0) or 0,
                "total_tokens": getattr(um, "total_token_count", 0) or 0,
            }

        return ProviderResponse(text=text, usage=usage)
