"""Numeric defaults used throughout the gridpager codebase."""

# Page sizing
DEFAULT_ROWS_PER_PAGE = 10
DEFAULT_AVAILABLE_ROWS_PER_PAGE = (10, 20, 30)

# Simulated source latency (seconds)
DEFAULT_FETCH_DELAY_SECONDS = 0.0
MAX_FETCH_DELAY_SECONDS = 60.0

# Exit codes shared by CLI commands
EXIT_FETCH_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130
