"""Browse command implementation: interactive paging session."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

import typer
from rich.console import Console
from rich.status import Status

from gridpager.cli.output import format_page_table
from gridpager.cli.rich_logging import (
    configure_rich_logging,
    get_console,
    log_level_for,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from gridpager.config.loader import load_config
from gridpager.constants import EXIT_CONFIG_ERROR, EXIT_FETCH_FAILED, EXIT_INTERRUPTED
from gridpager.exceptions import ConfigError, DatasetError
from gridpager.paging.coordinator import FetchCoordinator
from gridpager.paging.models import Failed, FetchState, Loaded, Loading
from gridpager.paging.pager import Pager
from gridpager.paging.source import InMemoryPageSource
from gridpager.records import load_records

logger = logging.getLogger(__name__)

HELP_TEXT = "n next · p previous · f first · l last · g <page> go to · r <rows> page size · q quit"

CommandReader = Callable[[], Awaitable[str]]


class BrowseSession:
    """Terminal rendering layer driving a Pager.

    Shows a spinner while a fetch is loading and redraws the page after it
    settles. A failed fetch prints the reason and keeps the previous rows.
    """

    def __init__(self, pager: Pager, console: Console):
        self.pager = pager
        self.console = console
        self._status: Status | None = None
        self._subscription = pager.coordinator.subscribe(self._on_state)

    def _on_state(self, state: FetchState) -> None:
        if isinstance(state, Loading):
            if self._status is None:
                self._status = self.console.status(
                    f"Loading records {state.request.start_index + 1}-{state.request.end_index}..."
                )
                self._status.start()
            return

        self._stop_status()
        if isinstance(state, Failed):
            print_error(f"Fetch failed: {state.reason}", self.console)

    def _stop_status(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def render(self) -> None:
        coordinator = self.pager.coordinator
        format_page_table(
            coordinator.current_rows,
            self.pager.page_index,
            self.pager.page_count,
            coordinator.total_count,
            console=self.console,
        )

    async def _settle_and_render(self, accepted: bool, reason: str) -> None:
        if not accepted:
            print_warning(reason, self.console)
            return
        await self.pager.coordinator.wait_settled()
        self.render()

    async def handle(self, line: str) -> bool:
        """Apply one user command.

        Args:
            line: Raw command line

        Returns:
            False when the session should end
        """
        parts = line.strip().split()
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command in ("q", "quit", "exit"):
            return False

        if command in ("n", "next"):
            await self._settle_and_render(self.pager.next_page(), "Already on the last page")
        elif command in ("p", "prev", "previous"):
            await self._settle_and_render(self.pager.previous_page(), "Already on the first page")
        elif command in ("f", "first"):
            await self._settle_and_render(self.pager.first_page(), "A fetch is in progress")
        elif command in ("l", "last"):
            await self._settle_and_render(self.pager.last_page(), "A fetch is in progress")
        elif command in ("g", "go") and len(args) == 1 and args[0].isdigit() and int(args[0]) >= 1:
            await self._settle_and_render(
                self.pager.go_to(int(args[0]) - 1), "A fetch is in progress"
            )
        elif command in ("r", "rows") and len(args) == 1 and args[0].isdigit():
            try:
                accepted = self.pager.change_rows_per_page(int(args[0]))
            except ValueError:
                sizes = ", ".join(str(size) for size in self.pager.available_rows_per_page)
                print_warning(f"Page size must be one of: {sizes}", self.console)
                return True
            await self._settle_and_render(accepted, "A fetch is in progress")
            if accepted and isinstance(self.pager.coordinator.state, Loaded):
                print_success(f"Showing {self.pager.rows_per_page} rows per page", self.console)
        elif command in ("h", "help", "?"):
            print_info(HELP_TEXT, self.console)
        else:
            print_warning(f"Unknown command: {line.strip()}", self.console)
            print_info(HELP_TEXT, self.console)
        return True

    async def run(self, read_command: CommandReader) -> None:
        """Load the first page, then process commands until quit or EOF.

        Args:
            read_command: Coroutine function returning the next command line
        """
        try:
            await self.pager.coordinator.refresh_total_count()
            print_info(HELP_TEXT, self.console)
            await self._settle_and_render(self.pager.first_page(), "A fetch is in progress")

            while True:
                try:
                    line = await read_command()
                except EOFError:
                    break
                if not await self.handle(line):
                    break
        finally:
            self.close()

    def close(self) -> None:
        self._subscription.cancel()
        self._stop_status()
        self.pager.coordinator.close()


def _stdin_reader(console: Console) -> CommandReader:
    async def read() -> str:
        return await asyncio.to_thread(console.input, "[bold]page>[/bold] ")

    return read


def run(
    data: Path | None = None,
    rows: int | None = None,
    config: Path | None = None,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    """Start an interactive paging session over a dataset file.

    Args:
        data: Dataset file (overrides configuration)
        rows: Initial rows per page (overrides configuration)
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
        if rows_per_page not in cfg.pager.available_rows_per_page:
            sizes = ", ".join(str(size) for size in cfg.pager.available_rows_per_page)
            print_error(f"--rows must be one of: {sizes}")
            raise typer.Exit(EXIT_CONFIG_ERROR)

        source = InMemoryPageSource(records, delay_seconds=cfg.source.delay_seconds)
        coordinator = FetchCoordinator(source)
        pager = Pager(
            coordinator,
            rows_per_page=rows_per_page,
            available_rows_per_page=cfg.pager.available_rows_per_page,
        )
        output_console = get_console(color=cfg.output.color_enabled)
        session = BrowseSession(pager, output_console)
        asyncio.run(session.run(_stdin_reader(output_console)))

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
