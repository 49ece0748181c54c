"""Exception hierarchy for the Islamic AI assistant."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class IslamicAIError(Exception):
    """Base exception for all assistant errors.

    The message is always safe to show to an end user; provider details
    stay on ``__cause__``.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    @property
    def message(self) -> str:
        """The user-facing message."""
        return str(self)


class ConfigurationError(IslamicAIError):
    """Configuration validation or credential resolution failed."""


class ProviderError(IslamicAIError):
    """The outbound provider call failed.

    ``retryable`` is informational only; nothing in this package retries.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        retryable: bool | None = None,
        status_code: int | None = None,
        provider: str | None = None,
        phase: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.retryable = retryable
        self.status_code = status_code
        self.provider = provider
        self.phase = phase


class MalformedResponse(IslamicAIError):
    """The provider answered, but not in the agreed shape."""

    def __init__(
        self, message: str, *, hint: str | None = None, raw_text: str | None = None
    ) -> None:
        super().__init__(message, hint=hint)
        self.raw_text = raw_text


class StorageError(IslamicAIError):
    """The novelty history could not be persisted."""


class DuaExhausted(IslamicAIError):
    """The provider reports no further novel duas for this history.

    A legitimate outcome of the dua flow, not a defect.
    """


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)
