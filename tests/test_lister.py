"""Tests for paginated Drive listing."""

import pytest

from drivesheet.core.client import TransportError
from drivesheet.core.lister import NOT_TRASHED, RemoteLister
from drivesheet.models.resources import ListPage

from .fakes import FakeWorkspaceClient, item


class TestRemoteLister:
    """Tests for RemoteLister."""

    def test_concatenates_pages_in_order(self, config) -> None:
        pages = [
            ListPage(items=[item("a", 2023, 1, 1), item("b", 2023, 1, 2)], next_page_token="t1"),
            ListPage(items=[item("c", 2023, 1, 3)], next_page_token="t2"),
            ListPage(items=[item("d", 2023, 1, 4)], next_page_token=None),
        ]
        client = FakeWorkspaceClient(pages)

        items = RemoteLister(client, config).list_all()

        assert [i.name for i in items] == ["a", "b", "c", "d"]
        assert len(client.list_tokens) == 3

    def test_tokens_resubmitted_verbatim(self, config) -> None:
        pages = [
            ListPage(items=[item("a", 2023, 1, 1)], next_page_token="opaque/token==1"),
            ListPage(items=[item("b", 2023, 1, 2)], next_page_token="opaque/token==2"),
            ListPage(items=[], next_page_token=None),
        ]
        client = FakeWorkspaceClient(pages)

        RemoteLister(client, config).list_all()

        assert client.list_tokens == [None, "opaque/token==1", "opaque/token==2"]

    def test_single_page(self, config, fake_client) -> None:
        fake_client.pages = [ListPage(items=[item("only", 2023, 5, 5)])]

        items = RemoteLister(fake_client, config).list_all()

        assert [i.name for i in items] == ["only"]
        assert len(fake_client.list_tokens) == 1

    def test_empty_listing(self, config, fake_client) -> None:
        assert RemoteLister(fake_client, config).list_all() == []

    def test_empty_string_token_ends_listing(self, config) -> None:
        client = FakeWorkspaceClient([ListPage(items=[item("a", 2023, 1, 1)], next_page_token="")])

        RemoteLister(client, config).list_all()

        assert len(client.list_tokens) == 1

    def test_uses_page_size_and_trash_filter(self, config, fake_client) -> None:
        config.page_size = 25

        RemoteLister(fake_client, config).list_all()

        _, query, page_size, _ = fake_client.calls[0]
        assert query == NOT_TRASHED
        assert page_size == 25

    def test_preserves_provider_order(self, config) -> None:
        client = FakeWorkspaceClient([ListPage(items=[item("z", 2023, 1, 1), item("a", 2022, 1, 1)])])

        items = RemoteLister(client, config).list_all()

        assert [i.name for i in items] == ["z", "a"]

    def test_error_aborts_listing(self, config) -> None:
        class FailingClient(FakeWorkspaceClient):
            def list_files(self, query, page_size, page_token=None, fields=None):
                if page_token == "t1":
                    raise TransportError("connection reset")
                return super().list_files(query, page_size, page_token, fields)

        client = FailingClient([ListPage(items=[item("a", 2023, 1, 1)], next_page_token="t1")])

        with pytest.raises(TransportError, match="connection reset"):
            RemoteLister(client, config).list_all()

    def test_iter_pages_yields_each_page(self, config) -> None:
        pages = [
            ListPage(items=[item("a", 2023, 1, 1)], next_page_token="t1"),
            ListPage(items=[item("b", 2023, 1, 2)]),
        ]
        client = FakeWorkspaceClient(pages)

        yielded = list(RemoteLister(client, config).iter_pages())

        assert yielded == pages
