"""Daily dua session: the adapter plus the novelty history it feeds on."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from islamic_ai.adapter import GenerationAdapter
    from islamic_ai.history import NoveltyTracker
    from islamic_ai.types import DuaRecord


class DuaSession:
    """Fetch duas and remember which ones the user has seen.

    History is loaded once, when the session starts. An id is recorded
    only after a fetch succeeds; failures leave the history untouched.
    """

    def __init__(self, adapter: GenerationAdapter, tracker: NoveltyTracker) -> None:
        self.adapter = adapter
        self.tracker = tracker
        self.tracker.load()

    @property
    def history(self) -> list[str]:
        return self.tracker.history

    async def next_dua(self) -> DuaRecord:
        record = await self.adapter.fetch_daily_dua(self.tracker.history)
        self.tracker.record(record.id)
        return record
