"""Response normalization and dua decoding.

Decoding never raises: it returns a tagged ``DecodeOutcome`` and the
adapter decides which error, if any, the caller sees.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import re
from typing import Literal

from pydantic import ValidationError

from islamic_ai.types import EXHAUSTED_ID, DuaRecord

EXHAUSTED_FALLBACK_MESSAGE = (
    "You have seen most of the available duas! Try exploring specific categories."
)

_FENCED_RE = re.compile(
    r"^```[\w+-]*[ \t]*\n?(?P<body>.*?)\n?[ \t]*```$",
    re.DOTALL,
)
_OPEN_FENCE_RE = re.compile(r"^```[\w+-]*")

DecodeStatus = Literal["ok", "malformed", "exhausted"]


def strip_code_fence(text: str) -> str:
    """Return *text* trimmed and without a surrounding markdown code fence.

    Handles a plain body, a language-tagged fence (three backticks followed
    by e.g. "json") and a bare fence, with or without newlines around the
    body.

    A fence that is opened but never closed loses only its opening marker.
    """
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped
    match = _FENCED_RE.match(stripped)
    if match:
        return match.group("body").strip()
    return _OPEN_FENCE_RE.sub("", stripped, count=1).strip()


@dataclass(frozen=True)
class DecodeOutcome:
    """Result of decoding one dua response."""

    status: DecodeStatus
    record: DuaRecord | None = None
    #: Exhaustion hint, or a short description of what was malformed.
    detail: str = ""

    @classmethod
    def ok(cls, record: DuaRecord) -> DecodeOutcome:
        return cls("ok", record=record)

    @classmethod
    def malformed(cls, detail: str) -> DecodeOutcome:
        return cls("malformed", detail=detail)

    @classmethod
    def exhausted(cls, tip: str) -> DecodeOutcome:
        return cls("exhausted", detail=tip)


def decode_dua(text: str) -> DecodeOutcome:
    """Decode a raw provider reply into a dua outcome.

    Steps: trim, strip fence, parse one JSON object, check the exhaustion
    sentinel, then validate every required field.
    """
    body = strip_code_fence(text)
    try:
        data = json.loads(body)
    except ValueError as exc:
        return DecodeOutcome.malformed(f"invalid JSON: {exc}")

    if not isinstance(data, dict):
        return DecodeOutcome.malformed(
            f"expected a JSON object, got {type(data).__name__}"
        )

    # The sentinel may omit the other fields, so check before validation.
    if data.get("id") == EXHAUSTED_ID:
        tip = data.get("tip")
        if isinstance(tip, str) and tip.strip():
            return DecodeOutcome.exhausted(tip.strip())
        return DecodeOutcome.exhausted(EXHAUSTED_FALLBACK_MESSAGE)

    try:
        record = DuaRecord.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(p) for p in err["loc"]) or "<root>" for err in exc.errors()
        )
        return DecodeOutcome.malformed(f"invalid fields: {fields}")

    return DecodeOutcome.ok(record)
