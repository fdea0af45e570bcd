"""Configuration for the Drive-to-Sheets sync job."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# Drive rejects pageSize values above this
MAX_PAGE_SIZE = 1000

ENV_PREFIX = "DRIVESHEET_"


def parse_bool(value: Any) -> bool:
    """Interpret YAML booleans and env strings such as "false" or "1"."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class TieBreak(str, Enum):
    """How to pick a spreadsheet when several share the configured name."""

    FIRST = "first"  # Whatever Drive returns first
    SMALLEST_ID = "smallest_id"  # Stable regardless of provider ordering


@dataclass
class SyncConfig:
    """Settings passed explicitly to every sync component."""

    application_name: str = "Google Drive Assistant"
    sink_name: str = "AllFilesSpreadsheet"
    credentials_path: str = "credentials.json"
    token_path: str = "user-token.json"
    poll_interval: float = 15 * 60  # seconds
    page_size: int = 10
    tie_break: TieBreak = TieBreak.FIRST
    continue_on_error: bool = False

    def __post_init__(self) -> None:
        self.tie_break = TieBreak(self.tie_break)
        self.validate()

    def validate(self) -> None:
        """Raise ValueError on settings the remote APIs would reject."""
        if not self.sink_name:
            raise ValueError("sink_name must not be empty")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {self.page_size}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncConfig":
        """Create from dictionary, falling back to defaults for missing keys."""
        defaults = cls.__dataclass_fields__
        return cls(
            application_name=data.get("application_name", defaults["application_name"].default),
            sink_name=data.get("sink_name", defaults["sink_name"].default),
            credentials_path=data.get("credentials_path", defaults["credentials_path"].default),
            token_path=data.get("token_path", defaults["token_path"].default),
            poll_interval=float(data.get("poll_interval", defaults["poll_interval"].default)),
            page_size=int(data.get("page_size", defaults["page_size"].default)),
            tie_break=data.get("tie_break", defaults["tie_break"].default),
            continue_on_error=parse_bool(data.get("continue_on_error", False)),
        )

    @classmethod
    def load(cls, config_path: Path | None = None) -> "SyncConfig":
        """Load configuration from YAML (if present) and environment overrides.

        Environment variables (also read from a ``.env`` file) take
        precedence over the YAML file:
        DRIVESHEET_APPLICATION_NAME, DRIVESHEET_SINK_NAME,
        DRIVESHEET_CREDENTIALS_PATH, DRIVESHEET_TOKEN_PATH,
        DRIVESHEET_POLL_INTERVAL, DRIVESHEET_PAGE_SIZE, DRIVESHEET_TIE_BREAK,
        DRIVESHEET_CONTINUE_ON_ERROR.
        """
        load_dotenv()

        data: dict[str, Any] = {}
        if config_path is not None and Path(config_path).exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}

        for key in (
            "application_name",
            "sink_name",
            "credentials_path",
            "token_path",
            "poll_interval",
            "page_size",
            "tie_break",
            "continue_on_error",
        ):
            value = os.getenv(ENV_PREFIX + key.upper())
            if value:
                data[key] = value

        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        return {
            "application_name": self.application_name,
            "sink_name": self.sink_name,
            "credentials_path": self.credentials_path,
            "token_path": self.token_path,
            "poll_interval": self.poll_interval,
            "page_size": self.page_size,
            "tie_break": self.tie_break.value,
            "continue_on_error": self.continue_on_error,
        }

    def save(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
