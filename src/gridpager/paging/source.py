"""Page sources: the asynchronous backends a coordinator fetches from."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any, Protocol

from gridpager.paging.models import PageResult

logger = logging.getLogger(__name__)


class PageSource(Protocol):
    """Protocol for an asynchronous, paginated record source."""

    async def fetch(self, start_index: int, end_index: int) -> PageResult:
        """Fetch records in ``[start_index, end_index)``.

        Args:
            start_index: First index (inclusive)
            end_index: Last index (exclusive)

        Returns:
            PageResult with the records in dataset order

        Raises:
            Exception: Any failure; the coordinator reports ``str(exc)``
        """
        ...

    async def count(self) -> int:
        """Return the current number of records."""
        ...


class InMemoryPageSource:
    """Page source backed by an in-memory sequence.

    Optionally sleeps before answering to simulate a slow backend.
    """

    def __init__(self, records: Sequence[Any], delay_seconds: float = 0.0):
        """Initialize in-memory source.

        Args:
            records: Dataset in display order
            delay_seconds: Simulated latency applied to every fetch
        """
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {delay_seconds}")
        self._records = list(records)
        self._delay_seconds = delay_seconds

    async def fetch(self, start_index: int, end_index: int) -> PageResult:
        if self._delay_seconds:
            await asyncio.sleep(self._delay_seconds)

        total = len(self._records)
        end_index = min(end_index, total)
        logger.debug(f"Serving records [{start_index}, {end_index}) of {total}")
        return PageResult(records=self._records[start_index:end_index], total_count=total)

    async def count(self) -> int:
        return len(self._records)
