"""Shared pytest fixtures and factory functions for gridpager tests.

This module provides reusable datasets and controllable page sources so
tests can decide exactly when a fetch resolves.
"""

import asyncio

import pytest

from gridpager.exceptions import FetchFailed
from gridpager.paging.models import PageResult
from gridpager.records import Employee

NAMES = ["Alice Johnson", "Bob Smith", "Charlie Brown", "David Wilson", "Emma Davis"]
DESIGNATIONS = ["Software Engineer", "Project Manager", "QA Engineer", "Technical Lead"]


def make_employees(start: int, end: int) -> list[Employee]:
    """Build employees whose ids are their dataset index plus one."""
    return [
        Employee(
            id=index + 1,
            name=NAMES[index % len(NAMES)],
            designation=DESIGNATIONS[index % len(DESIGNATIONS)],
            salary=3000 + index * 10,
        )
        for index in range(start, end)
    ]


class ControlledPageSource:
    """Page source whose fetches stay pending until a test resolves them."""

    def __init__(self, total: int = 60):
        self.total = total
        self.calls: list[tuple[int, int]] = []
        self._pending: list[asyncio.Future] = []

    async def fetch(self, start_index: int, end_index: int) -> PageResult:
        self.calls.append((start_index, end_index))
        future = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    async def count(self) -> int:
        return self.total

    def resolve(self, records=None, total_count=None, index: int = -1) -> None:
        """Complete a pending fetch with records (defaults to the requested range)."""
        start, end = self.calls[index]
        if records is None:
            records = make_employees(start, end)
        self._pending[index].set_result(PageResult(records=records, total_count=total_count))

    def fail(self, error: Exception | str = "backend unavailable", index: int = -1) -> None:
        """Fail a pending fetch."""
        if isinstance(error, str):
            error = FetchFailed(error)
        self._pending[index].set_exception(error)


class StubbornPageSource(ControlledPageSource):
    """Page source that ignores cancellation and resolves only when released."""

    def __init__(self, total: int = 60):
        super().__init__(total)
        self.release = asyncio.Event()

    async def fetch(self, start_index: int, end_index: int) -> PageResult:
        self.calls.append((start_index, end_index))
        while True:
            try:
                await self.release.wait()
                break
            except asyncio.CancelledError:
                continue
        return PageResult(records=make_employees(start_index, end_index))


async def let_fetch_start() -> None:
    """Yield to the event loop so a freshly scheduled fetch reaches its source."""
    await asyncio.sleep(0)


#
# Dataset Fixtures
#


@pytest.fixture
def employees() -> list[Employee]:
    """Sixty employees, as in the original grid example.

    Returns:
        list[Employee]: Employees with ids 1..60.
    """
    return make_employees(0, 60)


@pytest.fixture
def controlled_source() -> ControlledPageSource:
    """Page source resolved manually by the test.

    Returns:
        ControlledPageSource: Source reporting 60 records.
    """
    return ControlledPageSource(total=60)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove gridpager environment variables for test isolation."""
    for name in (
        "GRIDPAGER_CONFIG",
        "GRIDPAGER_ROWS_PER_PAGE",
        "GRIDPAGER_DATA_PATH",
        "GRIDPAGER_FETCH_DELAY",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
