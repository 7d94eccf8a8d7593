"""Page navigation state on top of a fetch coordinator."""

import logging
from collections.abc import Sequence

from gridpager.constants import DEFAULT_AVAILABLE_ROWS_PER_PAGE, DEFAULT_ROWS_PER_PAGE
from gridpager.paging.coordinator import FetchCoordinator
from gridpager.paging.page_math import clamp_page_index, page_count

logger = logging.getLogger(__name__)


class Pager:
    """Tracks the current page and page size, and requests pages.

    The page index only moves when the coordinator accepts the request; a
    request rejected because a fetch is outstanding leaves it unchanged.
    """

    def __init__(
        self,
        coordinator: FetchCoordinator,
        rows_per_page: int = DEFAULT_ROWS_PER_PAGE,
        available_rows_per_page: Sequence[int] = DEFAULT_AVAILABLE_ROWS_PER_PAGE,
    ):
        """Initialize pager.

        Args:
            coordinator: Coordinator that performs the fetches
            rows_per_page: Initial page size
            available_rows_per_page: Page sizes the user may switch between

        Raises:
            ValueError: If rows_per_page is not one of available_rows_per_page
        """
        self.available_rows_per_page = tuple(available_rows_per_page)
        if rows_per_page not in self.available_rows_per_page:
            raise ValueError(
                f"rows_per_page {rows_per_page} not in {list(self.available_rows_per_page)}"
            )
        self._coordinator = coordinator
        self._rows_per_page = rows_per_page
        self._page_index = 0

    @property
    def coordinator(self) -> FetchCoordinator:
        return self._coordinator

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def rows_per_page(self) -> int:
        return self._rows_per_page

    @property
    def page_count(self) -> int:
        return page_count(self._coordinator.total_count, self._rows_per_page)

    def go_to(self, page_index: int) -> bool:
        """Request a page.

        Args:
            page_index: Zero-based page index; past-the-end pages resolve to
                the last page

        Returns:
            True if the fetch was dispatched

        Raises:
            ValueError: If page_index is negative
        """
        if page_index < 0:
            raise ValueError(f"page_index must be >= 0, got {page_index}")
        accepted = self._coordinator.request_page(
            self._page_index, page_index, self._rows_per_page
        )
        if accepted:
            self._page_index = clamp_page_index(
                page_index, self._coordinator.total_count, self._rows_per_page
            )
        return accepted

    def reload(self) -> bool:
        return self.go_to(self._page_index)

    def next_page(self) -> bool:
        if self._page_index + 1 >= self.page_count:
            return False
        return self.go_to(self._page_index + 1)

    def previous_page(self) -> bool:
        if self._page_index == 0:
            return False
        return self.go_to(self._page_index - 1)

    def first_page(self) -> bool:
        return self.go_to(0)

    def last_page(self) -> bool:
        return self.go_to(max(self.page_count - 1, 0))

    def change_rows_per_page(self, rows_per_page: int) -> bool:
        """Switch page size and reload the page at the new size.

        The current page index is kept where possible and clamped when the
        new size yields fewer pages.

        Args:
            rows_per_page: One of ``available_rows_per_page``

        Returns:
            True if the reload was dispatched

        Raises:
            ValueError: If rows_per_page is not an available page size
        """
        if rows_per_page not in self.available_rows_per_page:
            raise ValueError(
                f"rows_per_page {rows_per_page} not in {list(self.available_rows_per_page)}"
            )
        if self._coordinator.is_fetching:
            logger.info("Page size change ignored: fetch in flight")
            return False

        logger.debug(f"Rows per page: {self._rows_per_page} -> {rows_per_page}")
        self._rows_per_page = rows_per_page
        self._page_index = clamp_page_index(
            self._page_index, self._coordinator.total_count, rows_per_page
        )
        return self.reload()
