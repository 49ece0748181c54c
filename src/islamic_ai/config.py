"""Configuration: frozen Config with lazy credential checks."""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

from islamic_ai.errors import ConfigurationError

load_dotenv()

# Checked in order; the first non-empty value wins.
API_KEY_ENV_VARS: tuple[str, ...] = ("GEMINI_API_KEY", "API_KEY")

DEFAULT_ANSWER_MODEL = "gemini-2.5-pro"
DEFAULT_EXPLAIN_MODEL = "gemini-2.5-pro"
DEFAULT_DUA_MODEL = "gemini-2.5-flash"
DEFAULT_HISTORY_LIMIT = 200


def resolve_api_key() -> str | None:
    """Return the first configured API key from the environment, if any."""
    for env_var in API_KEY_ENV_VARS:
        value = os.environ.get(env_var)
        if value:
            return value
    return None


@dataclass(frozen=True)
class Config:
    """Immutable configuration for the assistant.

    A missing API key does not fail construction: the application must
    start in environments where the credential arrives later.
    ``require_api_key`` resolves it again at first use and raises
    ``ConfigurationError`` only if it is still missing.

    Example:
        config = Config()
        # API key is resolved from GEMINI_API_KEY (or API_KEY)
    """

    #: Auto-resolved from ``GEMINI_API_KEY`` or ``API_KEY`` when *None*.
    api_key: str | None = None
    answer_model: str = DEFAULT_ANSWER_MODEL
    explain_model: str = DEFAULT_EXPLAIN_MODEL
    dua_model: str = DEFAULT_DUA_MODEL
    #: Most recent dua ids kept in the novelty history; *None* keeps all.
    history_limit: int | None = DEFAULT_HISTORY_LIMIT

    def __post_init__(self) -> None:
        """Auto-resolve API key and validate configuration."""
        for name in ("answer_model", "explain_model", "dua_model"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(
                    f"{name} must be a non-empty model id",
                    hint="Pass a Gemini model id such as 'gemini-2.5-flash'.",
                )

        if self.history_limit is not None and self.history_limit < 1:
            raise ConfigurationError(
                f"history_limit must be ≥ 1 or None, got {self.history_limit}",
                hint="This controls how many recent dua ids are remembered.",
            )

        if self.api_key is None:
            object.__setattr__(self, "api_key", resolve_api_key())

    def require_api_key(self) -> str:
        """Return the API key or raise a user-facing ConfigurationError.

        An unset key is looked up in the environment again, so a credential
        exported after construction is still found.
        """
        api_key = self.api_key if self.api_key is not None else resolve_api_key()
        if not api_key:
            raise ConfigurationError(
                "The API key is not configured. Please set GEMINI_API_KEY and try again.",
                hint="Set GEMINI_API_KEY in the environment or a .env file, "
                "or pass Config(api_key=...).",
            )
        return api_key

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(api_key={'[REDACTED]' if self.api_key else None}, "
            f"answer_model={self.answer_model!r}, "
            f"explain_model={self.explain_model!r}, "
            f"dua_model={self.dua_model!r}, "
            f"history_limit={self.history_limit!r})"
        )

    __repr__ = __str__
