"""gridpager - Single-flight asynchronous paging for data grids."""

__version__ = "0.1.0"


def main() -> None:
    """Main entry point for the CLI."""
    from gridpager.cli.main import app

    app()
