"""Google Drive and Sheets client wrapper used by the sync components."""

import json
import logging
from typing import Any

import httplib2
from google.auth.credentials import Credentials
from google.auth.exceptions import RefreshError
from google.auth.exceptions import TransportError as GoogleTransportError
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import set_user_agent

from ..models.config import MAX_PAGE_SIZE
from ..models.resources import SPREADSHEET_MIME_TYPE, ListPage, RemoteItem, Row, TargetResource

logger = logging.getLogger(__name__)


class DriveSheetAPIError(Exception):
    """Exception raised for Drive or Sheets API errors."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class TransportError(DriveSheetAPIError):
    """The provider could not be reached or is temporarily unavailable."""


class AuthError(DriveSheetAPIError):
    """Credentials were rejected or could not be refreshed."""


# 403 reasons that mean "slow down", not "not allowed"
RATE_LIMIT_REASONS = frozenset({
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
    "quotaExceeded",
})


def error_reasons(error: HttpError) -> set[str]:
    """Collect the machine-readable reasons from an API error body."""
    data = error.content
    if not isinstance(data, dict):
        try:
            data = json.loads(data)
        except (TypeError, ValueError):
            return set()
    if not isinstance(data, dict) or not isinstance(data.get("error"), dict):
        return set()
    reasons = set()
    for key in ("errors", "details"):
        for detail in data["error"].get(key) or []:
            if isinstance(detail, dict) and detail.get("reason"):
                reasons.add(detail["reason"])
    return reasons


def escape_query_value(value: str) -> str:
    """Escape a string literal for the Drive query language."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


class WorkspaceClient:
    """Drive v3 + Sheets v4 operations needed by the sync job."""

    LIST_FIELDS = "nextPageToken, files(name, createdTime)"
    RESOURCE_FIELDS = "id, name"

    def __init__(
        self,
        drive_service: Any = None,
        sheets_service: Any = None,
        credentials: Credentials | None = None,
        application_name: str | None = None,
    ) -> None:
        """Initialize with prebuilt services or credentials to build them.

        Args:
            drive_service: Drive v3 discovery resource
            sheets_service: Sheets v4 discovery resource
            credentials: Authorized credentials, used when a service is not given
            application_name: Sent as the User-Agent of every request
        """
        if drive_service is None or sheets_service is None:
            if credentials is None:
                raise ValueError("Either both services or credentials must be provided")
            http = AuthorizedHttp(credentials, http=httplib2.Http())
            if application_name:
                http = set_user_agent(http, application_name)
            drive_service = drive_service or build("drive", "v3", http=http, cache_discovery=False)
            sheets_service = sheets_service or build("sheets", "v4", http=http, cache_discovery=False)
        self.drive = drive_service
        self.sheets = sheets_service

    @classmethod
    def from_credentials(cls, credentials: Credentials, application_name: str | None = None) -> "WorkspaceClient":
        """Build both services from authorized credentials."""
        return cls(credentials=credentials, application_name=application_name)

    def _execute(self, request: Any, operation: str) -> dict[str, Any]:
        """Execute an API request, mapping library errors to DriveSheetAPIError.

        Raises:
            AuthError: On 401, 403 (other than rate limits) or token refresh failure
            TransportError: On network failure, 429, rate-limit 403 or 5xx
            DriveSheetAPIError: On any other API error
        """
        try:
            response = request.execute()
        except HttpError as e:
            status = e.resp.status if e.resp is not None else None
            message = f"{operation} failed with {status}: {e}"
            if status == 403 and error_reasons(e) & RATE_LIMIT_REASONS:
                raise TransportError(message, status, e) from e
            if status in (401, 403):
                raise AuthError(message, status, e) from e
            if status is not None and (status == 429 or status >= 500):
                raise TransportError(message, status, e) from e
            raise DriveSheetAPIError(message, status, e) from e
        except RefreshError as e:
            raise AuthError(f"{operation} failed: token refresh rejected: {e}") from e
        except (GoogleTransportError, httplib2.HttpLib2Error, OSError) as e:
            raise TransportError(f"{operation} failed: {e}") from e

        return response or {}

    # -------------------------------------------------------------------------
    # Drive Operations
    # -------------------------------------------------------------------------

    def list_files(
        self,
        query: str,
        page_size: int,
        page_token: str | None = None,
        fields: str = LIST_FIELDS,
    ) -> ListPage:
        """Fetch one page of files matching a Drive query.

        Args:
            query: Drive query expression (e.g. "trashed = false")
            page_size: Maximum number of files in the page
            page_token: Continuation token from the previous page
            fields: Partial response field mask

        Returns:
            ListPage with parsed items and the next page token (None on the last page)
        """
        response = self._execute(
            self.drive.files().list(
                q=query,
                pageSize=page_size,
                pageToken=page_token,
                fields=fields,
            ),
            "files.list",
        )
        items = [RemoteItem.from_dict(f) for f in response.get("files", [])]
        return ListPage(items=items, next_page_token=response.get("nextPageToken") or None)

    def find_by_name(self, name: str) -> list[TargetResource]:
        """Find non-trashed spreadsheets whose name equals ``name`` exactly, across all pages."""
        query = (
            f"name = '{escape_query_value(name)}' "
            f"and mimeType = '{SPREADSHEET_MIME_TYPE}' "
            "and trashed = false"
        )
        matches: list[TargetResource] = []
        page_token: str | None = None
        while True:
            response = self._execute(
                self.drive.files().list(
                    q=query,
                    pageSize=MAX_PAGE_SIZE,
                    pageToken=page_token,
                    fields=f"nextPageToken, files({self.RESOURCE_FIELDS})",
                ),
                "files.list",
            )
            matches.extend(TargetResource.from_dict(f) for f in response.get("files", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                break
        return matches

    def get_file(self, file_id: str) -> TargetResource:
        """Get Drive metadata for a file by id."""
        response = self._execute(
            self.drive.files().get(fileId=file_id, fields=self.RESOURCE_FIELDS),
            "files.get",
        )
        return TargetResource.from_dict(response)

    # -------------------------------------------------------------------------
    # Sheets Operations
    # -------------------------------------------------------------------------

    def create_spreadsheet(self, title: str) -> str:
        """Create an empty spreadsheet and return its id."""
        response = self._execute(
            self.sheets.spreadsheets().create(
                body={"properties": {"title": title}},
                fields="spreadsheetId",
            ),
            "spreadsheets.create",
        )
        return response["spreadsheetId"]

    def update_values(
        self,
        spreadsheet_id: str,
        range_: str,
        rows: list[Row],
        value_input_option: str = "RAW",
    ) -> int:
        """Overwrite a range with rows and return the updated cell count."""
        response = self._execute(
            self.sheets.spreadsheets().values().update(
                spreadsheetId=spreadsheet_id,
                range=range_,
                valueInputOption=value_input_option,
                body={"values": rows},
            ),
            "spreadsheets.values.update",
        )
        # Sheets omits updatedCells when nothing was written
        return int(response.get("updatedCells", 0))

    def auto_resize_columns(
        self,
        spreadsheet_id: str,
        sheet_id: int = 0,
        start_index: int = 0,
        end_index: int = 1,
    ) -> None:
        """Auto-resize a column range of one sheet to fit its content."""
        body = {
            "requests": [
                {
                    "autoResizeDimensions": {
                        "dimensions": {
                            "sheetId": sheet_id,
                            "dimension": "COLUMNS",
                            "startIndex": start_index,
                            "endIndex": end_index,
                        }
                    }
                }
            ]
        }
        self._execute(
            self.sheets.spreadsheets().batchUpdate(spreadsheetId=spreadsheet_id, body=body),
            "spreadsheets.batchUpdate",
        )

    # -------------------------------------------------------------------------
    # Health Check
    # -------------------------------------------------------------------------

    def verify_connection(self) -> str:
        """Verify API connectivity and authentication.

        Returns:
            Email address of the authorized user

        Raises:
            DriveSheetAPIError: On connection or auth failure
        """
        response = self._execute(
            self.drive.about().get(fields="user(displayName, emailAddress)"),
            "about.get",
        )
        return response.get("user", {}).get("emailAddress", "")
