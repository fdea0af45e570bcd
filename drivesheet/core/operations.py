"""A single sync cycle: list Drive, resolve the sheet, write rows."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from ..models.config import SyncConfig
from ..models.resources import TargetResource
from .client import WorkspaceClient
from .lister import RemoteLister
from .resolver import SinkResolver
from .writer import SinkWriter

logger = logging.getLogger(__name__)


@dataclass
class CycleResult:
    """Result of one sync cycle."""

    spreadsheet: TargetResource
    item_count: int
    updated_cells: int
    created: bool
    started_at: datetime
    finished_at: datetime

    @property
    def duration(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()


class SyncOperations:
    """Wires the lister, resolver and writer into one cycle."""

    def __init__(
        self,
        config: SyncConfig,
        client: WorkspaceClient,
        lister: RemoteLister | None = None,
        resolver: SinkResolver | None = None,
        writer: SinkWriter | None = None,
    ) -> None:
        """Initialize sync operations.

        Args:
            config: Sync configuration
            client: Authorized WorkspaceClient shared by all components
            lister: RemoteLister (created from client if not provided)
            resolver: SinkResolver (created from client if not provided)
            writer: SinkWriter (created from client if not provided)
        """
        self.config = config
        self.client = client
        self.lister = lister or RemoteLister(client, config)
        self.resolver = resolver or SinkResolver(client, config)
        self.writer = writer or SinkWriter(client)

    def run_cycle(self) -> CycleResult:
        """List, resolve and write. Any remote error propagates."""
        started_at = datetime.now(timezone.utc)

        items = self.lister.list_all()
        spreadsheet, created = self.resolver.resolve(self.config.sink_name)
        updated_cells = self.writer.write_rows(spreadsheet, items)

        finished_at = datetime.now(timezone.utc)
        logger.info("Spreadsheet updated at %s", finished_at.astimezone().strftime("%I:%M:%S %p"))

        return CycleResult(
            spreadsheet=spreadsheet,
            item_count=len(items),
            updated_cells=updated_cells,
            created=created,
            started_at=started_at,
            finished_at=finished_at,
        )
