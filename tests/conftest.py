"""Shared fixtures."""

import pytest

from drivesheet.models.config import SyncConfig

from .fakes import FakeWorkspaceClient


@pytest.fixture
def config() -> SyncConfig:
    return SyncConfig(sink_name="AllFilesSpreadsheet", page_size=10)


@pytest.fixture
def fake_client() -> FakeWorkspaceClient:
    return FakeWorkspaceClient()
