"""Pydantic models for configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from gridpager.constants import (
    DEFAULT_AVAILABLE_ROWS_PER_PAGE,
    DEFAULT_FETCH_DELAY_SECONDS,
    DEFAULT_ROWS_PER_PAGE,
    MAX_FETCH_DELAY_SECONDS,
)


class PagerConfig(BaseModel):
    """Page sizing preferences.

    Examples:
        >>> PagerConfig()
        PagerConfig(rows_per_page=10, available_rows_per_page=[10, 20, 30])

        >>> PagerConfig(rows_per_page=25, available_rows_per_page=[25, 50])
    """

    rows_per_page: int = Field(default=DEFAULT_ROWS_PER_PAGE, gt=0)
    available_rows_per_page: list[int] = Field(
        default_factory=lambda: list(DEFAULT_AVAILABLE_ROWS_PER_PAGE),
        min_length=1,
        description="Page sizes offered by the pager",
    )

    @model_validator(mode="after")
    def validate_page_sizes(self) -> "PagerConfig":
        """Ensure page sizes are positive and include rows_per_page.

        Returns:
            Validated PagerConfig instance

        Raises:
            ValueError: If a size is not positive or rows_per_page is not offered
        """
        if any(size <= 0 for size in self.available_rows_per_page):
            raise ValueError(
                f"available_rows_per_page must be positive, got {self.available_rows_per_page}"
            )
        if self.rows_per_page not in self.available_rows_per_page:
            raise ValueError(
                f"rows_per_page ({self.rows_per_page}) must be one of "
                f"available_rows_per_page {self.available_rows_per_page}"
            )
        return self


class SourceConfig(BaseModel):
    """Dataset source settings."""

    data_path: Path | None = None
    delay_seconds: float = Field(
        default=DEFAULT_FETCH_DELAY_SECONDS,
        ge=0,
        le=MAX_FETCH_DELAY_SECONDS,
        description="Simulated latency for every page fetch",
    )


class OutputConfig(BaseModel):
    """Output formatting preferences for CLI commands."""

    default_format: Literal["table", "json"] = "table"
    color_enabled: bool = True


class Configuration(BaseModel):
    """Complete gridpager configuration."""

    config_version: str = "1.0"
    pager: PagerConfig = PagerConfig()
    source: SourceConfig = SourceConfig()
    output: OutputConfig = OutputConfig()
