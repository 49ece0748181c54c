"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: it exists to prevent test suites from
growing lots of one-off provider classes as coverage expands.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any

from islamic_ai.providers.models import ProviderRequest, ProviderResponse


def dua_json(**overrides: Any) -> str:
    """Return a complete dua object as JSON text."""
    payload: dict[str, Any] = {
        "id": "dua_003",
        "arabic": "رَبَّنَا آتِنَا فِي الدُّنْيَا حَسَنَةً",
        "transliteration": "Rabbana atina fid-dunya hasanah",
        "translation": "Our Lord, give us good in this world.",
        "source": "Quran (2:201)",
        "tip": "Recite in the morning.",
    }
    payload.update(overrides)
    return json.dumps(payload, ensure_ascii=False)


@dataclass
class CaptureProvider:
    """Provider double that records requests and echoes the contents."""

    requests: list[ProviderRequest] = field(default_factory=list)

    @property
    def generate_calls(self) -> int:
        return len(self.requests)

    async def generate(self, request: ProviderRequest) -> ProviderResponse:
        self.requests.append(request)
        return ProviderResponse(text=f"ok:{request.contents}", usage={"total_tokens": 1})


@dataclass
class ScriptedProvider(CaptureProvider):
    """Provider double that returns a scripted sequence of texts/exceptions."""

    script: list[str | ProviderResponse | BaseException] = field(default_factory=list)

    async def generate(self, request: ProviderRequest) -> ProviderResponse:
        self.requests.append(request)
        if not self.script:
            return ProviderResponse(text="ok", usage={"total_tokens": 1})
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, ProviderResponse):
            return item
        return ProviderResponse(text=item)
