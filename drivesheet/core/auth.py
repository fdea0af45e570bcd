"""OAuth user credentials for the Drive and Sheets APIs."""

import logging
from pathlib import Path

from google.auth.exceptions import RefreshError
from google.auth.exceptions import TransportError as GoogleTransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from .client import AuthError, TransportError

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/spreadsheets",
]


class CredentialsError(ValueError):
    """Raised when the OAuth client secrets cannot be used."""


class GoogleAuth:
    """Loads, refreshes and stores user credentials for the sync job."""

    def __init__(
        self,
        credentials_path: str | Path = "credentials.json",
        token_path: str | Path = "user-token.json",
        scopes: list[str] | None = None,
    ) -> None:
        """Initialize with the client secrets file and token store.

        Args:
            credentials_path: OAuth client secrets downloaded from Google Cloud Console
            token_path: Where the authorized user token is cached between runs
            scopes: OAuth scopes (defaults to Drive + Sheets)
        """
        self.credentials_path = Path(credentials_path)
        self.token_path = Path(token_path)
        self.scopes = scopes or list(SCOPES)

    def _load_token(self) -> Credentials | None:
        """Load cached credentials from the token store, if any."""
        if not self.token_path.exists():
            return None
        return Credentials.from_authorized_user_file(str(self.token_path), self.scopes)

    def _save_token(self, creds: Credentials) -> None:
        """Persist credentials so the consent flow runs only once."""
        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        self.token_path.write_text(creds.to_json())

    def _run_consent_flow(self) -> Credentials:
        """Run the interactive browser consent flow."""
        if not self.credentials_path.exists():
            raise CredentialsError(
                f"OAuth client secrets not found: {self.credentials_path}. "
                "Create a desktop OAuth client in Google Cloud Console and "
                "download its JSON to this path."
            )
        try:
            flow = InstalledAppFlow.from_client_secrets_file(str(self.credentials_path), self.scopes)
        except ValueError as e:
            raise CredentialsError(f"Invalid client secrets file {self.credentials_path}: {e}") from e
        logger.info("Starting OAuth consent flow in the browser")
        return flow.run_local_server(port=0)

    def get_credentials(self) -> Credentials:
        """Return valid credentials, refreshing or re-authorizing as needed."""
        creds = self._load_token()

        if creds and creds.valid:
            return creds

        if creds and creds.expired and creds.refresh_token:
            logger.debug("Refreshing expired token from %s", self.token_path)
            try:
                creds.refresh(Request())
            except RefreshError as e:
                raise AuthError(f"Token refresh rejected, delete {self.token_path} to re-authorize: {e}") from e
            except GoogleTransportError as e:
                raise TransportError(f"Token refresh failed: {e}") from e
        else:
            creds = self._run_consent_flow()

        self._save_token(creds)
        return creds

    def has_token(self) -> bool:
        """Check whether a token has been stored (does not validate it)."""
        return self.token_path.exists()
