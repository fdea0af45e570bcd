"""Remote items and sink resources exchanged between sync components."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

Row = list[str]

SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"


def parse_rfc3339(value: str) -> datetime:
    """Parse a Drive RFC 3339 timestamp (e.g. 2023-01-01T10:00:00.000Z)."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class RemoteItem:
    """Snapshot of one non-trashed Drive item."""

    name: str
    created_at: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RemoteItem":
        """Create from a Drive ``files`` resource."""
        return cls(
            name=data.get("name", ""),
            created_at=parse_rfc3339(data["createdTime"]),
        )

    def created_date(self) -> str:
        """Creation date as YYYY-MM-DD in UTC."""
        created = self.created_at
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return created.astimezone(timezone.utc).strftime("%Y-%m-%d")


@dataclass(frozen=True)
class TargetResource:
    """The spreadsheet that receives synchronized rows."""

    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TargetResource":
        """Create from a Drive ``files`` resource."""
        return cls(id=data["id"], name=data.get("name", ""))


@dataclass
class ListPage:
    """One page of a Drive listing."""

    items: list[RemoteItem] = field(default_factory=list)
    next_page_token: str | None = None

    @property
    def is_last(self) -> bool:
        return not self.next_page_token
