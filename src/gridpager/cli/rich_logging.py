"""Rich logging utilities for CLI output."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme

GRIDPAGER_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "dim": "dim",
        "highlight": "bold magenta",
    }
)

# Global console instance with custom theme
console = Console(theme=GRIDPAGER_THEME, stderr=True)


def configure_rich_logging(
    level: int = logging.WARNING,
    show_time: bool = True,
    show_path: bool = False,
    enable_link_path: bool = False,
) -> None:
    """Configure rich logging handler for log output.

    Args:
        level: Logging level (logging.DEBUG, logging.INFO, etc.)
        show_time: Show timestamp in log output
        show_path: Show file path in log output
        enable_link_path: Enable clickable file paths in log output
    """
    logging.root.handlers.clear()

    rich_handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        enable_link_path=enable_link_path,
        rich_tracebacks=True,
        markup=False,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logging.basicConfig(
        level=level,
        handlers=[rich_handler],
        force=True,
    )


def log_level_for(verbose: bool, debug: bool) -> int:
    """Map CLI verbosity flags to a logging level."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def get_console(color: bool = True) -> Console:
    """Get a Rich Console instance for stdout.

    Args:
        color: Emit colors and styles (``output.color_enabled``)

    Returns:
        Rich Console instance
    """
    return Console(theme=GRIDPAGER_THEME, no_color=not color)


def print_error(message: str, console_obj: Console | None = None) -> None:
    """Print error message in red.

    Args:
        message: Error message to print
        console_obj: Optional console instance (uses global if None)
    """
    c = console_obj or console
    c.print(f"[error]✗ {escape(message)}[/error]")


def print_success(message: str, console_obj: Console | None = None) -> None:
    """Print success message in green.

    Args:
        message: Success message to print
        console_obj: Optional console instance (uses global if None)
    """
    c = console_obj or console
    c.print(f"[success]✓ {escape(message)}[/success]")


def print_warning(message: str, console_obj: Console | None = None) -> None:
    """Print warning message in yellow.

    Args:
        message: Warning message to print
        console_obj: Optional console instance (uses global if None)
    """
    c = console_obj or console
    c.print(f"[warning]⚠ {escape(message)}[/warning]")


def print_info(message: str, console_obj: Console | None = None) -> None:
    """Print info message in cyan."""
    c = console_obj or console
    c.print(f"[info]{escape(message)}[/info]")
