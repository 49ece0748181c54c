"""Public data types shared by the adapter, the tracker and callers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

#: ``id`` value the model uses to say it has run out of novel duas.
EXHAUSTED_ID = "error_exhausted"


class RequestKind(str, Enum):
    """The three features the assistant offers."""

    ANSWER = "answer"
    EXPLAIN = "explain"
    DUA = "dua"


@dataclass(frozen=True)
class VerseRef:
    """A Quran reference as typed by the user.

    Neither field is checked against the mushaf; ``surah`` may be a name
    ("Al-Fatihah") or a number ("1").
    """

    surah: str
    ayah: str

    def __str__(self) -> str:
        return f"{self.surah}:{self.ayah}"


class DuaRecord(BaseModel):
    """One supplication as returned by the dua flow."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(
        min_length=1,
        description='A unique short ID for the dua, e.g., "dua_001".',
    )
    arabic: str = Field(
        description="The dua in its original Arabic script (max 3 lines).",
    )
    transliteration: str = Field(
        description="The phonetic transliteration of the Arabic text.",
    )
    translation: str = Field(
        description="A short, one-sentence English translation of the dua.",
    )
    source: str = Field(
        description="The source of the dua, e.g., Quran (2:201) or Sahih al-Bukhari.",
    )
    tip: str = Field(
        description="A one-line tip on when to recite the dua or its context.",
    )
