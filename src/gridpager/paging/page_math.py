"""Page index arithmetic: range computation, clamping, and page counts."""

from gridpager.paging.models import PageRequest


def _check_sizes(rows_per_page: int, total_count: int) -> None:
    if rows_per_page <= 0:
        raise ValueError(f"rows_per_page must be > 0, got {rows_per_page}")
    if total_count < 0:
        raise ValueError(f"total_count must be >= 0, got {total_count}")


def compute_page_range(new_page_index: int, rows_per_page: int, total_count: int) -> PageRequest:
    """Compute the bounded index range for a page.

    A page that starts at or past the end of the dataset is re-anchored so
    that it covers the last ``rows_per_page`` records (or all of them when
    fewer exist). The result always satisfies
    ``0 <= start_index <= end_index <= total_count``.

    Args:
        new_page_index: Zero-based page index (may be past the last page)
        rows_per_page: Page size
        total_count: Number of records in the dataset

    Returns:
        PageRequest for the page

    Raises:
        ValueError: If new_page_index is negative, rows_per_page is not
            positive, or total_count is negative

    Example:
        >>> compute_page_range(7, 10, 60)
        PageRequest(start_index=50, end_index=60)
    """
    if new_page_index < 0:
        raise ValueError(f"new_page_index must be >= 0, got {new_page_index}")
    _check_sizes(rows_per_page, total_count)

    start_index = new_page_index * rows_per_page
    if start_index >= total_count:
        start_index = max(0, total_count - rows_per_page)
    end_index = min(start_index + rows_per_page, total_count)

    return PageRequest(start_index=start_index, end_index=end_index)


def page_count(total_count: int, rows_per_page: int) -> int:
    """Number of pages needed to show ``total_count`` records.

    Args:
        total_count: Number of records
        rows_per_page: Page size

    Returns:
        ceil(total_count / rows_per_page); 0 for an empty dataset
    """
    _check_sizes(rows_per_page, total_count)
    return -(-total_count // rows_per_page)


def clamp_page_index(page_index: int, total_count: int, rows_per_page: int) -> int:
    """Clamp a page index into the valid range for the dataset.

    Args:
        page_index: Requested page index
        total_count: Number of records
        rows_per_page: Page size

    Returns:
        Index in ``[0, max(page_count - 1, 0)]``
    """
    last_page = max(page_count(total_count, rows_per_page) - 1, 0)
    return max(0, min(page_index, last_page))
