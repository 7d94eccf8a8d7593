"""Data models for paged fetching."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FetchPhase(str, Enum):
    """Lifecycle phase of a fetch coordinator."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class PageRequest:
    """Half-open index range ``[start_index, end_index)`` into a dataset."""

    start_index: int
    end_index: int

    def __post_init__(self):
        """Validate range bounds."""
        if self.start_index < 0:
            raise ValueError(f"start_index must be >= 0, got {self.start_index}")
        if self.end_index < self.start_index:
            raise ValueError(
                f"end_index ({self.end_index}) must be >= start_index ({self.start_index})"
            )

    @property
    def size(self) -> int:
        """Number of indices covered by the range."""
        return self.end_index - self.start_index


@dataclass(frozen=True)
class PageResult:
    """Records returned by a page source for one range.

    Attributes:
        records: Records in dataset order
        total_count: Source's current record count, or None if not reported
    """

    records: Sequence[Any]
    total_count: int | None = None


@dataclass(frozen=True)
class Idle:
    """No fetch outstanding and nothing loaded yet (or last fetch cancelled)."""

    phase: FetchPhase = field(default=FetchPhase.IDLE, init=False)


@dataclass(frozen=True)
class Loading:
    """A fetch has been dispatched and has not resolved."""

    request_id: int
    request: PageRequest
    phase: FetchPhase = field(default=FetchPhase.LOADING, init=False)


@dataclass(frozen=True)
class Loaded:
    """The most recent fetch resolved successfully."""

    request_id: int
    request: PageRequest
    records: tuple[Any, ...]
    phase: FetchPhase = field(default=FetchPhase.LOADED, init=False)


@dataclass(frozen=True)
class Failed:
    """The most recent fetch failed; previously loaded rows are kept."""

    request_id: int
    request: PageRequest
    reason: str
    phase: FetchPhase = field(default=FetchPhase.FAILED, init=False)


FetchState = Idle | Loading | Loaded | Failed
