"""Output formatting utilities for CLI commands."""

import json
from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.table import Table

from gridpager.records import record_to_dict


def format_json(data: Any) -> str:
    """
    Format data as JSON string.

    Args:
        data: Data to format (must be JSON-serializable)

    Returns:
        Pretty-printed JSON string
    """
    return json.dumps(data, indent=2, default=str)


def build_page_table(
    rows: Sequence[Any],
    page_index: int,
    page_count: int,
    total_count: int,
) -> Table:
    """
    Build a Rich table for one page of records.

    Columns come from the fields of the first record.

    Args:
        rows: Records on the page
        page_index: Zero-based index of the page
        page_count: Number of pages in the dataset
        total_count: Number of records in the dataset

    Returns:
        Rich Table ready to print
    """
    shown_page = page_index + 1 if page_count else 0
    table = Table(
        title=f"Page {shown_page} of {page_count}",
        caption=f"{len(rows)} of {total_count} records",
        show_header=True,
        header_style="bold",
    )

    dicts = [record_to_dict(row) for row in rows]
    headers = list(dicts[0].keys()) if dicts else []
    for header in headers:
        table.add_column(header.replace("_", " ").title(), justify="center")

    for row in dicts:
        table.add_row(*(str(row.get(header, "")) for header in headers))

    return table


def format_page_table(
    rows: Sequence[Any],
    page_index: int,
    page_count: int,
    total_count: int,
    console: Console | None = None,
) -> None:
    """
    Print one page of records as a table.

    Args:
        rows: Records on the page
        page_index: Zero-based index of the page
        page_count: Number of pages in the dataset
        total_count: Number of records in the dataset
        console: Optional console (stdout if None)
    """
    console = console or Console()
    if not rows:
        console.print("[dim]No records[/dim]")
        return
    console.print(build_page_table(rows, page_index, page_count, total_count))


def format_page_json(
    rows: Sequence[Any],
    page_index: int,
    page_count: int,
    total_count: int,
    rows_per_page: int,
) -> str:
    """
    Format one page of records as JSON.

    Args:
        rows: Records on the page
        page_index: Zero-based index of the page
        page_count: Number of pages in the dataset
        total_count: Number of records in the dataset
        rows_per_page: Page size

    Returns:
        JSON string
    """
    return format_json(
        {
            "page_index": page_index,
            "page_count": page_count,
            "rows_per_page": rows_per_page,
            "total_count": total_count,
            "records": [record_to_dict(row) for row in rows],
        }
    )
