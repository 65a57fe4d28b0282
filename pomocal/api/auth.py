import datetime
import json
import logging
import os
from datetime import timezone

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from pomocal.core.config import CREDENTIALS_FILE, SCOPES, TOKEN_FILE, TOKEN_REFRESH_BUFFER

logger = logging.getLogger(__name__)


class AuthManager:
    """Handles Google OAuth credentials for the calendar API.

    Stored tokens are loaded and refreshed silently. The browser consent flow
    only runs from authorize(), i.e. when the user asks for calendar access.
    """

    def __init__(self, token_file=TOKEN_FILE, credentials_file=CREDENTIALS_FILE):
        """Initialize the authentication manager."""
        self.token_file = token_file
        self.credentials_file = credentials_file
        self.creds = None
        self.refresh_buffer = TOKEN_REFRESH_BUFFER
        self.services = {}
        self.load_credentials()

    @property
    def has_credentials(self):
        return bool(self.creds and self.creds.valid)

    def load_credentials(self):
        """Load credentials from the token file, refreshing them if expired."""
        if not os.path.exists(self.token_file):
            logger.info("No Google token at %s; calendar access not granted yet", self.token_file)
            return
        try:
            with open(self.token_file, 'r', encoding='utf-8') as f:
                self.creds = Credentials.from_authorized_user_info(json.load(f), SCOPES)
        except (OSError, ValueError):
            logger.exception("Could not read token file %s", self.token_file)
            self.creds = None
            return

        if not self.creds.valid:
            self.refresh_token()

    def refresh_token_if_needed(self):
        """Refresh the token when it expires within the refresh buffer. Returns True if refreshed."""
        if not self.creds or not self.creds.expiry:
            return False

        expiry = self.creds.expiry
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        time_until_expiry = (expiry - datetime.datetime.now(timezone.utc)).total_seconds()

        if time_until_expiry < self.refresh_buffer:
            return self.refresh_token()
        return False

    def refresh_token(self):
        """Refresh stored credentials without user interaction."""
        if not (self.creds and self.creds.refresh_token):
            return False
        try:
            self.creds.refresh(Request())
        except GoogleAuthError:
            logger.exception("Error refreshing Google token")
            return False
        self._save_token()
        self.services = {}
        return True

    def authorize(self):
        """Run the installed-app consent flow in the browser."""
        if self.refresh_token() and self.has_credentials:
            return True
        if not os.path.exists(self.credentials_file):
            logger.error("Missing OAuth client file %s", self.credentials_file)
            return False
        try:
            flow = InstalledAppFlow.from_client_secrets_file(self.credentials_file, SCOPES)
            self.creds = flow.run_local_server(port=0)
        except Exception:
            logger.exception("Google authorization failed")
            return False
        self._save_token()
        self.services = {}
        return True

    def _save_token(self):
        os.makedirs(os.path.dirname(self.token_file) or '.', exist_ok=True)
        with open(self.token_file, 'w', encoding='utf-8') as token:
            token.write(self.creds.to_json())

    def get_service(self, service_name, version):
        """Get an authenticated service instance with caching."""
        self.refresh_token_if_needed()
        if not self.has_credentials:
            return None

        cache_key = f"{service_name}_{version}"
        if cache_key in self.services:
            return self.services[cache_key]

        from googleapiclient.discovery import build
        service = build(service_name, version, credentials=self.creds, cache_discovery=False)
        self.services[cache_key] = service
        return service

    def get_calendar_service(self):
        """Get an authenticated calendar service instance."""
        return self.get_service('calendar', 'v3')
