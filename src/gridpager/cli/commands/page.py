"""Page command implementation: fetch and print a single page."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from gridpager.cli.output import format_page_json, format_page_table
from gridpager.cli.rich_logging import (
    configure_rich_logging,
    get_console,
    log_level_for,
    print_error,
)
from gridpager.config.loader import load_config
from gridpager.constants import (
    EXIT_CONFIG_ERROR,
    EXIT_FETCH_FAILED,
    EXIT_INTERRUPTED,
)
from gridpager.exceptions import ConfigError, DatasetError
from gridpager.paging.coordinator import FetchCoordinator
from gridpager.paging.models import Failed, FetchState
from gridpager.paging.pager import Pager
from gridpager.paging.source import InMemoryPageSource, PageSource
from gridpager.records import load_records

logger = logging.getLogger(__name__)


@dataclass
class PageOutcome:
    """Settled result of a one-shot page fetch."""

    state: FetchState
    rows: Sequence[Any]
    page_index: int
    page_count: int
    total_count: int
    rows_per_page: int


async def fetch_single_page(
    source: PageSource,
    page_index: int,
    rows_per_page: int,
    available_rows_per_page: Sequence[int],
) -> PageOutcome:
    """Fetch one page through a coordinator and wait for it to settle.

    Args:
        source: Page source to read from
        page_index: Zero-based page to fetch
        rows_per_page: Page size
        available_rows_per_page: Page sizes offered by the pager

    Returns:
        PageOutcome with the final state and rows
    """
    coordinator = FetchCoordinator(source)
    try:
        await coordinator.refresh_total_count()
        sizes = sorted(set(available_rows_per_page) | {rows_per_page})
        pager = Pager(coordinator, rows_per_page=rows_per_page, available_rows_per_page=sizes)
        pager.go_to(page_index)
        await coordinator.wait_settled()
        return PageOutcome(
            state=coordinator.state,
            rows=coordinator.current_rows,
            page_index=pager.page_index,
            page_count=pager.page_count,
            total_count=coordinator.total_count,
            rows_per_page=pager.rows_per_page,
        )
    finally:
        coordinator.close()


def run(
    page: int,
    data: Path | None = None,
    rows: int | None = None,
    output: str | None = None,
    config: Path | None = None,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    """Fetch one page from a dataset file and print it.

    Args:
        page: One-based page number
        data: Dataset file (overrides configuration)
        rows: Rows per page (overrides configuration)
        output: Output format ("table" or "json")
        config: Optional path to config file
        verbose: Enable verbose logging
        debug: Enable debug logging
    """
    configure_rich_logging(
        level=log_level_for(verbose, debug),
        show_time=debug,
        show_path=debug,
        enable_link_path=debug,
    )

    try:
        cfg = load_config(config)

        data_path = data or cfg.source.data_path
        if data_path is None:
            print_error("No dataset given: pass --data or set GRIDPAGER_DATA_PATH")
            raise typer.Exit(EXIT_CONFIG_ERROR)

        records = load_records(Path(data_path))
        rows_per_page = rows or cfg.pager.rows_per_page
        output_format = output or cfg.output.default_format

        source = InMemoryPageSource(records, delay_seconds=cfg.source.delay_seconds)
        outcome = asyncio.run(
            fetch_single_page(
                source,
                page_index=max(page - 1, 0),
                rows_per_page=rows_per_page,
                available_rows_per_page=cfg.pager.available_rows_per_page,
            )
        )

        if isinstance(outcome.state, Failed):
            print_error(f"Fetch failed: {outcome.state.reason}")
            raise typer.Exit(EXIT_FETCH_FAILED)

        if output_format == "json":
            # Use print() for JSON to ensure it goes to stdout
            print(
                format_page_json(
                    outcome.rows,
                    outcome.page_index,
                    outcome.page_count,
                    outcome.total_count,
                    outcome.rows_per_page,
                )
            )
        else:
            format_page_table(
                outcome.rows,
                outcome.page_index,
                outcome.page_count,
                outcome.total_count,
                console=get_console(color=cfg.output.color_enabled),
            )

    except typer.Exit:
        raise
    except (ConfigError, DatasetError) as e:
        print_error(str(e))
        raise typer.Exit(EXIT_CONFIG_ERROR) from None
    except KeyboardInterrupt:
        print_error("Interrupted by user")
        raise typer.Exit(EXIT_INTERRUPTED) from None
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(EXIT_FETCH_FAILED) from None
