"""Single-flight coordinator for asynchronous page fetches."""

import asyncio
import functools
import itertools
import logging
from dataclasses import dataclass
from typing import Any

from gridpager.exceptions import PageSourceError
from gridpager.paging.models import (
    Failed,
    FetchState,
    Idle,
    Loaded,
    Loading,
    PageRequest,
)
from gridpager.paging.notifier import StateListener, StateNotifier, Subscription
from gridpager.paging.page_math import compute_page_range
from gridpager.paging.source import PageSource

logger = logging.getLogger(__name__)


@dataclass
class _InflightFetch:
    """Handle to the one outstanding fetch."""

    request_id: int
    request: PageRequest
    task: asyncio.Task | None = None
    cancelled: bool = False


class FetchCoordinator:
    """Turns page-change requests into bounded, single-flight fetches.

    At most one fetch is outstanding at a time. A request made while a fetch
    is in flight is rejected (not queued); the caller retries on a later
    user action. Every fetch is tagged with a request id, and a resolution is
    applied only if its id is still the outstanding one, so results of a
    cancelled fetch are discarded.

    State transitions are published to subscribers:
    ``Idle -> Loading -> Loaded | Failed``. A failed fetch keeps the rows of
    the last successful one.

    Example:
        >>> coordinator = FetchCoordinator(InMemoryPageSource(rows), total_count=len(rows))
        >>> coordinator.subscribe(lambda state: print(state.phase.value))
        >>> coordinator.request_page(0, 1, rows_per_page=10)  # inside a running loop
        loading
        True
        >>> await coordinator.wait_settled()
        loaded
        >>> coordinator.current_rows  # rows 10..19

    Concurrency:
        Not thread-safe. Drive a coordinator from a single asyncio event loop.
    """

    def __init__(self, source: PageSource, total_count: int = 0):
        """Initialize fetch coordinator.

        Args:
            source: Backend that serves record ranges
            total_count: Initial number of records (upper bound on indices)
        """
        if total_count < 0:
            raise ValueError(f"total_count must be >= 0, got {total_count}")
        self._source = source
        self._total_count = total_count
        self._rows: tuple[Any, ...] = ()
        self._state: FetchState = Idle()
        self._notifier = StateNotifier()
        self._inflight: _InflightFetch | None = None
        self._request_ids = itertools.count(1)
        self._closed = False

    @property
    def current_rows(self) -> tuple[Any, ...]:
        """Records of the last successful fetch."""
        return self._rows

    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def is_fetching(self) -> bool:
        """True from dispatch until the outstanding fetch has ended."""
        return self._inflight is not None

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def outstanding_request_id(self) -> int | None:
        """Id of the fetch whose result will be applied, if any."""
        if self._inflight is None or self._inflight.cancelled:
            return None
        return self._inflight.request_id

    def subscribe(self, listener: StateListener) -> Subscription:
        """Observe state transitions.

        Args:
            listener: Called with every new FetchState

        Returns:
            Subscription handle; call ``cancel()`` to stop observing
        """
        return self._notifier.subscribe(listener)

    def request_page(self, old_page_index: int, new_page_index: int, rows_per_page: int) -> bool:
        """Dispatch a fetch for a page unless one is already outstanding.

        Must be called from a running event loop. Returns as soon as the
        fetch is scheduled; its outcome is reported to subscribers.

        Args:
            old_page_index: Page shown before the change (logged only)
            new_page_index: Page to show; past-the-end pages are re-anchored
            rows_per_page: Page size

        Returns:
            True if a fetch was dispatched, False if rejected because a fetch
            is outstanding or the coordinator is closed

        Raises:
            ValueError: If new_page_index is negative or rows_per_page is not
                positive
        """
        if self._closed:
            logger.info(f"Ignoring page {new_page_index} request: coordinator is closed")
            return False

        if self._inflight is not None:
            logger.info(
                f"Rejecting page change {old_page_index} -> {new_page_index}: "
                f"fetch #{self._inflight.request_id} still in flight"
            )
            return False

        request = compute_page_range(new_page_index, rows_per_page, self._total_count)
        loop = asyncio.get_running_loop()

        inflight = _InflightFetch(request_id=next(self._request_ids), request=request)
        self._inflight = inflight
        inflight.task = loop.create_task(
            self._run_fetch(inflight), name=f"gridpager-fetch-{inflight.request_id}"
        )
        inflight.task.add_done_callback(functools.partial(self._on_fetch_done, inflight))

        logger.debug(
            f"Fetch #{inflight.request_id}: page {old_page_index} -> {new_page_index}, "
            f"range [{request.start_index}, {request.end_index}) of {self._total_count}"
        )
        self._set_state(Loading(request_id=inflight.request_id, request=request))
        return True

    def cancel_outstanding(self) -> None:
        """Abandon the outstanding fetch without waiting for it.

        The fetch task is cancelled and any result it still produces is
        discarded. ``is_fetching`` stays true until the task has actually
        ended, after which ``Idle`` is published.
        """
        inflight = self._inflight
        if inflight is None or inflight.cancelled:
            return

        inflight.cancelled = True
        if inflight.task is not None:
            inflight.task.cancel()
        logger.info(f"Cancelled fetch #{inflight.request_id}")

    def close(self) -> None:
        """Tear down: cancel outstanding work and drop all subscribers.

        Later requests are rejected. Safe to call more than once.
        """
        if self._closed:
            return
        self._closed = True
        self.cancel_outstanding()
        self._notifier.clear()
        logger.debug("Fetch coordinator closed")

    async def wait_settled(self) -> None:
        """Wait until the outstanding fetch (if any) has ended."""
        inflight = self._inflight
        if inflight is None or inflight.task is None:
            return
        # asyncio.wait does not re-raise the task's cancellation
        await asyncio.wait({inflight.task})

    async def refresh_total_count(self) -> int:
        """Ask the source for its record count and store it.

        Returns:
            The refreshed total count

        Raises:
            Exception: Whatever the source raises
        """
        total = await self._source.count()
        self.update_total_count(total)
        return total

    def update_total_count(self, total_count: int) -> None:
        """Replace the known record count.

        Args:
            total_count: New record count

        Raises:
            ValueError: If total_count is negative
        """
        if total_count < 0:
            raise ValueError(f"total_count must be >= 0, got {total_count}")
        if total_count != self._total_count:
            logger.debug(f"Total count changed: {self._total_count} -> {total_count}")
        self._total_count = total_count

    async def _run_fetch(self, inflight: _InflightFetch) -> None:
        request = inflight.request
        try:
            result = await self._source.fetch(request.start_index, request.end_index)
            rows = tuple(result.records)
            total_count = result.total_count
            if total_count is not None and total_count < 0:
                raise PageSourceError(f"Source reported a negative total count: {total_count}")
        except asyncio.CancelledError:
            logger.debug(f"Fetch #{inflight.request_id} interrupted")
            raise
        except Exception as e:
            reason = str(e) or type(e).__name__
            if not self._is_current(inflight):
                logger.debug(f"Discarding failure of stale fetch #{inflight.request_id}: {reason}")
                return
            logger.warning(
                f"Fetch #{inflight.request_id} for [{request.start_index}, "
                f"{request.end_index}) failed: {reason}"
            )
            self._inflight = None
            self._set_state(Failed(request_id=inflight.request_id, request=request, reason=reason))
        else:
            if not self._is_current(inflight):
                logger.debug(f"Discarding result of stale fetch #{inflight.request_id}")
                return
            self._rows = rows
            if total_count is not None:
                self.update_total_count(total_count)
            self._inflight = None
            logger.debug(f"Fetch #{inflight.request_id} loaded {len(self._rows)} records")
            self._set_state(
                Loaded(request_id=inflight.request_id, request=request, records=self._rows)
            )

    def _on_fetch_done(self, inflight: _InflightFetch, task: asyncio.Task) -> None:
        # Still registered here only when the fetch was cancelled, including
        # a task cancelled before it started running
        if self._inflight is not inflight:
            return
        self._inflight = None
        if not self._closed:
            self._set_state(Idle())

    def _is_current(self, inflight: _InflightFetch) -> bool:
        return self._inflight is inflight and not inflight.cancelled

    def _set_state(self, state: FetchState) -> None:
        self._state = state
        self._notifier.publish(state)
