"""Custom exception classes for gridpager."""


class GridPagerError(Exception):
    """Base exception for all gridpager errors."""

    pass


class ConfigError(GridPagerError):
    """Exception raised for configuration errors."""

    pass


class DatasetError(GridPagerError):
    """Exception raised when a dataset file cannot be loaded."""

    pass


class PageSourceError(GridPagerError):
    """Exception raised by a page source while serving a range."""

    pass


class FetchFailed(PageSourceError):
    """Exception raised when a page fetch fails.

    The coordinator forwards ``reason`` to observers without interpreting it.
    """

    def __init__(self, reason: str):
        """Initialize fetch failure.

        Args:
            reason: Human-readable description of the failure
        """
        self.reason = reason
        super().__init__(reason)
