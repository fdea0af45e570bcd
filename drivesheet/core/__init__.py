"""Core sync functionality."""

from .auth import CredentialsError, GoogleAuth
from .client import AuthError, DriveSheetAPIError, TransportError, WorkspaceClient
from .lister import RemoteLister
from .operations import CycleResult, SyncOperations
from .resolver import SinkResolver
from .scheduler import SyncScheduler
from .writer import SinkWriter, to_row

__all__ = [
    "AuthError",
    "CredentialsError",
    "CycleResult",
    "DriveSheetAPIError",
    "GoogleAuth",
    "RemoteLister",
    "SinkResolver",
    "SinkWriter",
    "SyncOperations",
    "SyncScheduler",
    "TransportError",
    "WorkspaceClient",
    "to_row",
]
