"""Write Drive item rows into the target spreadsheet."""

import logging
from collections.abc import Iterable

from ..models.resources import RemoteItem, Row, TargetResource
from .client import WorkspaceClient

logger = logging.getLogger(__name__)


def to_row(item: RemoteItem) -> Row:
    """Convert an item to a ``[name, YYYY-MM-DD]`` row."""
    return [item.name, item.created_date()]


class SinkWriter:
    """Overwrites the sheet from A1 and resizes the name column."""

    ANCHOR = "A1"
    SHEET_ID = 0  # First (default) sheet of the spreadsheet
    VALUE_INPUT_OPTION = "RAW"

    def __init__(self, client: WorkspaceClient) -> None:
        self.client = client

    def write_rows(self, target: TargetResource, items: Iterable[RemoteItem]) -> int:
        """Write one row per item and return the updated cell count.

        Rows left over from an earlier, longer write are not cleared. If the
        resize request fails the written values stay in place.
        """
        rows = [to_row(item) for item in items]
        updated_cells = self.client.update_values(
            target.id,
            self.ANCHOR,
            rows,
            value_input_option=self.VALUE_INPUT_OPTION,
        )
        logger.info("Spreadsheet updated: %d cells updated.", updated_cells)

        self.client.auto_resize_columns(target.id, sheet_id=self.SHEET_ID, start_index=0, end_index=1)
        return updated_cells
