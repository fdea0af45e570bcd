"""Exhaustive listing of Drive items via page-token pagination."""

import logging
from collections.abc import Iterator

from ..models.config import SyncConfig
from ..models.resources import ListPage, RemoteItem
from .client import WorkspaceClient

logger = logging.getLogger(__name__)

NOT_TRASHED = "trashed = false"


class RemoteLister:
    """Enumerates every item visible under a Drive query."""

    def __init__(self, client: WorkspaceClient, config: SyncConfig) -> None:
        self.client = client
        self.page_size = config.page_size

    def iter_pages(self, query: str = NOT_TRASHED) -> Iterator[ListPage]:
        """Yield pages until Drive stops returning a continuation token.

        Each token is resubmitted verbatim. Errors propagate immediately.
        """
        page_token: str | None = None
        page_number = 0
        while True:
            page = self.client.list_files(query, self.page_size, page_token)
            page_number += 1
            logger.debug("Fetched page %d with %d items", page_number, len(page.items))
            yield page
            if page.is_last:
                break
            page_token = page.next_page_token

    def list_all(self, query: str = NOT_TRASHED) -> list[RemoteItem]:
        """Return all items in provider order."""
        items: list[RemoteItem] = []
        for page in self.iter_pages(query):
            items.extend(page.items)
        logger.info("Listed %d items from Drive", len(items))
        return items
