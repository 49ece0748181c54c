"""Provider implementations."""

from .base import Provider
from .gemini import GeminiProvider
from .models import ProviderRequest, ProviderResponse

__all__ = [
    "GeminiProvider",
    "Provider",
    "ProviderRequest",
    "ProviderResponse",
]
