"""Provider protocol: minimal interface for completion providers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from islamic_ai.providers.models import ProviderRequest, ProviderResponse


@runtime_checkable
class Provider(Protocol):
    """Minimal provider protocol: a single text/JSON generation call."""

    async def generate(self, request: ProviderRequest) -> ProviderResponse:
        """Generate content from the model."""
        ...
