"""Find or create the spreadsheet that receives synchronized rows."""

import logging

from ..models.config import SyncConfig, TieBreak
from ..models.resources import TargetResource
from .client import WorkspaceClient

logger = logging.getLogger(__name__)


def choose_match(matches: list[TargetResource], policy: TieBreak) -> TargetResource:
    """Pick one spreadsheet out of several with the same name."""
    if policy is TieBreak.FIRST:
        return matches[0]
    return min(matches, key=lambda m: m.id)


class SinkResolver:
    """Resolves the configured spreadsheet name to a single target."""

    def __init__(self, client: WorkspaceClient, config: SyncConfig) -> None:
        self.client = client
        self.tie_break = config.tie_break

    def resolve(self, name: str) -> tuple[TargetResource, bool]:
        """Return the target spreadsheet and whether it was created by this call.

        There is no lock around the lookup and creation: another writer
        creating the same name in between results in two spreadsheets.
        """
        matches = self.client.find_by_name(name)

        if not matches:
            spreadsheet_id = self.client.create_spreadsheet(name)
            target = self.client.get_file(spreadsheet_id)
            logger.info("Spreadsheet created: %s (%s)", target.name, target.id)
            return target, True

        if len(matches) > 1:
            logger.warning(
                "Found %d spreadsheets named %r, using %s policy",
                len(matches),
                name,
                self.tie_break.value,
            )
        target = choose_match(matches, self.tie_break)
        logger.info("Spreadsheet found: %s (%s)", target.name, target.id)
        return target, False

    def get_or_create(self, name: str) -> TargetResource:
        """Return the spreadsheet named ``name``, creating it if absent."""
        target, _ = self.resolve(name)
        return target
