"""Data models for the sync job."""

from .config import MAX_PAGE_SIZE, SyncConfig, TieBreak
from .resources import (
    SPREADSHEET_MIME_TYPE,
    ListPage,
    RemoteItem,
    Row,
    TargetResource,
    parse_rfc3339,
)

__all__ = [
    "MAX_PAGE_SIZE",
    "SPREADSHEET_MIME_TYPE",
    "ListPage",
    "RemoteItem",
    "Row",
    "SyncConfig",
    "TargetResource",
    "TieBreak",
    "parse_rfc3339",
]
