from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

DEFAULT_CHROME_ARGUMENTS = [
    "--start-maximized",
    "--disable-dev-shm-usage",
    "--no-sandbox",
    "--disable-gpu",
]


class WorkbookConfig(BaseModel):
    path: Path = Field(..., description="Path to the .xlsx workbook with one sheet per weekday")
    path_env: Optional[str] = Field(
        None,
        description="Optional environment variable that overrides the workbook path",
    )
    header_row: int = Field(
        0,
        ge=0,
        description="0-based index of the header row; rows up to and including it are skipped",
    )
    keyword_column: int = Field(1, ge=0, description="0-based column holding the keyword")
    longest_column: int = Field(
        2, ge=0, description="0-based column receiving the longest suggestion"
    )
    shortest_column: int = Field(
        3, ge=0, description="0-based column receiving the shortest suggestion"
    )

    @model_validator(mode="after")
    def _validate_columns(self) -> "WorkbookConfig":
        outputs = {self.longest_column, self.shortest_column}
        if len(outputs) != 2:
            raise ValueError("longest_column and shortest_column must differ")
        if self.keyword_column in outputs:
            raise ValueError("Output columns must not overwrite the keyword column")
        return self

    @property
    def resolved_path(self) -> Path:
        if self.path_env:
            override = os.getenv(self.path_env)
            if override:
                return Path(override).expanduser().resolve()
        return self.path.expanduser().resolve()


class BrowserConfig(BaseModel):
    home_url: str = Field(
        "https://www.google.com",
        description="Search engine home page loaded before every keyword",
    )
    search_input_name: str = Field("q", description="Name attribute of the search input")
    suggestion_container_css: str = Field(
        "ul[role='listbox']",
        description="CSS selector of the autocomplete list container",
    )
    suggestion_item_css: str = Field(
        "ul[role='listbox'] li",
        description="CSS selector matching every autocomplete item",
    )
    wait_timeout: float = Field(
        10.0,
        gt=0,
        description="Seconds to wait for the search input and the suggestion list",
    )
    chrome_arguments: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CHROME_ARGUMENTS),
        description="Command line switches passed to Chrome",
    )
    headless: bool = Field(False, description="Run Chrome without a visible window")
    driver_path: Optional[Path] = Field(
        None,
        description="Explicit chromedriver executable; Selenium Manager is used when unset",
    )
    driver_path_env: Optional[str] = Field(
        "CHROMEDRIVER_PATH",
        description="Environment variable with the chromedriver path",
    )

    @property
    def resolved_driver_path(self) -> Path | None:
        if self.driver_path is not None:
            return self.driver_path.expanduser().resolve()
        if self.driver_path_env:
            value = os.getenv(self.driver_path_env)
            if value:
                return Path(value).expanduser().resolve()
        return None


class PacingConfig(BaseModel):
    """Bounds, in milliseconds, for the randomized delays."""

    keystroke_delay_ms: Tuple[float, float] = Field(
        (200.0, 500.0),
        description="Delay after each typed character",
    )
    keyword_delay_ms: Tuple[float, float] = Field(
        (3000.0, 7000.0),
        description="Delay after each processed keyword",
    )

    @field_validator("keystroke_delay_ms", "keyword_delay_ms")
    @classmethod
    def _validate_bounds(cls, value: Tuple[float, float]) -> Tuple[float, float]:
        low, high = value
        if low < 0 or high < low:
            raise ValueError("Delay bounds must satisfy 0 <= low <= high")
        return value


class AppConfig(BaseModel):
    workbook: WorkbookConfig
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    pacing: PacingConfig = Field(default_factory=PacingConfig)


def load_config(path: str | Path) -> AppConfig:
    """Load configuration from a YAML file and return a validated object."""

    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if data is None:
        msg = f"Configuration file is empty: {config_path}"
        raise ValueError(msg)

    # Relative workbook paths are anchored at the config file location.
    workbook_section = data.get("workbook") if isinstance(data, dict) else None
    if isinstance(workbook_section, dict) and workbook_section.get("path"):
        workbook_path = Path(str(workbook_section["path"])).expanduser()
        if not workbook_path.is_absolute():
            workbook_section["path"] = str(config_path.parent / workbook_path)

    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:  # pragma: no cover - passthrough for readability
        raise ValueError(f"Invalid configuration: {exc}") from exc
