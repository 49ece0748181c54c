"""Request construction: one GenerationRequest per user action."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from islamic_ai import prompts
from islamic_ai.providers.models import ProviderRequest
from islamic_ai.types import RequestKind, VerseRef

if TYPE_CHECKING:
    from collections.abc import Iterable

    from islamic_ai.config import Config

Payload = str | VerseRef | tuple[str, ...]


@dataclass(frozen=True)
class GenerationRequest:
    """An immutable request for one of the three features.

    Use the ``answer``/``explain``/``dua`` constructors; they pin the
    payload type to the kind.
    """

    kind: RequestKind
    payload: Payload

    def __post_init__(self) -> None:
        expected = {
            RequestKind.ANSWER: str,
            RequestKind.EXPLAIN: VerseRef,
            RequestKind.DUA: tuple,
        }[self.kind]
        if not isinstance(self.payload, expected):
            raise TypeError(
                f"{self.kind.value} request expects a {expected.__name__} payload, "
                f"got {type(self.payload).__name__}",
            )

    @classmethod
    def answer(cls, question: str) -> GenerationRequest:
        return cls(RequestKind.ANSWER, question)

    @classmethod
    def explain(cls, surah: str, ayah: str) -> GenerationRequest:
        return cls(RequestKind.EXPLAIN, VerseRef(surah=surah, ayah=ayah))

    @classmethod
    def dua(cls, recent_history: Iterable[str]) -> GenerationRequest:
        return cls(RequestKind.DUA, tuple(recent_history))


def build_provider_request(
    request: GenerationRequest, config: Config
) -> ProviderRequest:
    """Translate a GenerationRequest into the provider call it stands for.

    Args:
        request: The feature request.
        config: Supplies the model id for each feature.

    Returns:
        ProviderRequest with persona instruction, contents and, for duas,
        the structured-output schema.
    """
    if request.kind is RequestKind.ANSWER:
        return ProviderRequest(
            model=config.answer_model,
            contents=cast("str", request.payload),
            system_instruction=prompts.SCHOLAR_INSTRUCTION,
        )

    if request.kind is RequestKind.EXPLAIN:
        return ProviderRequest(
            model=config.explain_model,
            contents=prompts.explain_prompt(cast("VerseRef", request.payload)),
            system_instruction=prompts.TAFSIR_INSTRUCTION,
        )

    return ProviderRequest(
        model=config.dua_model,
        contents=prompts.dua_prompt(cast("tuple[str, ...]", request.payload)),
        system_instruction=prompts.DUA_INSTRUCTION,
        response_schema=prompts.dua_response_schema(),
    )
