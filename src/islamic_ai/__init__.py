"""Islamic AI assistant: question answering, verse explanation and daily duas.

Public API:
    - GenerationAdapter: answer_question(), explain_verse(), fetch_daily_dua()
    - NoveltyTracker: persisted history of seen dua ids
    - DuaSession: adapter + tracker for the daily dua flow
    - Config: Configuration dataclass
"""

from __future__ import annotations

import logging

from islamic_ai.adapter import GenerationAdapter
from islamic_ai.config import Config
from islamic_ai.errors import (
    ConfigurationError,
    DuaExhausted,
    IslamicAIError,
    MalformedResponse,
    ProviderError,
    StorageError,
)
from islamic_ai.history import (
    HISTORY_KEY,
    JSONFileStore,
    KeyValueStore,
    MemoryStore,
    NoveltyTracker,
)
from islamic_ai.request import GenerationRequest
from islamic_ai.result import strip_code_fence
from islamic_ai.session import DuaSession
from islamic_ai.types import EXHAUSTED_ID, DuaRecord, RequestKind, VerseRef

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("islamic-ai")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("islamic_ai").addHandler(logging.NullHandler())

__all__ = [
    "EXHAUSTED_ID",
    "HISTORY_KEY",
    "Config",
    "ConfigurationError",
    "DuaExhausted",
    "DuaRecord",
    "DuaSession",
    "GenerationAdapter",
    "GenerationRequest",
    "IslamicAIError",
    "JSONFileStore",
    "KeyValueStore",
    "MalformedResponse",
    "MemoryStore",
    "NoveltyTracker",
    "ProviderError",
    "RequestKind",
    "StorageError",
    "VerseRef",
    "strip_code_fence",
]
