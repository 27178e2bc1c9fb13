"""
Service-account credential helper for the Business Communications API.

Credentials are read from a service-account JSON key file and validated with
a token handshake before being handed out. Nothing is persisted or cached
here; caching lives in bizcomms.google_factory.

Usage:
    from google_auth import load_service_account_credentials
    creds = load_service_account_credentials()
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from bizcomms.errors import AuthenticationError

logger = logging.getLogger(__name__)

# Relative paths resolve against the working directory, not the install location
load_dotenv(Path.cwd() / ".env")

SCOPES: list[str] = [
    "https://www.googleapis.com/auth/businesscommunications",
]

DEFAULT_SERVICE_ACCOUNT_FILE = "resources/bc-agent-service-account-credentials.json"

_REQUIRED_KEYS = ("client_email", "private_key", "token_uri")


def default_service_account_file() -> str:
    """Credentials path from BC_SERVICE_ACCOUNT_FILE, else resources/ under the working directory."""
    path = os.environ.get("BC_SERVICE_ACCOUNT_FILE") or DEFAULT_SERVICE_ACCOUNT_FILE
    return str(Path.cwd() / Path(path).expanduser())


def _read_key_file(path: Path) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            info = json.load(f)
    except FileNotFoundError as exc:
        raise AuthenticationError(f"Service account file not found: {path}") from exc
    except (OSError, ValueError) as exc:
        raise AuthenticationError(f"Unreadable service account file {path}: {exc}") from exc

    if not isinstance(info, dict):
        raise AuthenticationError(f"Service account file {path} is not a JSON object")
    missing = [k for k in _REQUIRED_KEYS if not info.get(k)]
    if missing:
        raise AuthenticationError(
            f"Service account file {path} is missing {', '.join(missing)}"
        )
    return info


def load_service_account_credentials(
    path: Union[str, Path, None] = None,
    scopes: Optional[list[str]] = None,
) -> service_account.Credentials:
    """
    Load service-account credentials and authorize them against Google.

    The handshake (a token refresh) runs before returning, so a returned
    credential is known to be accepted. Any failure raises AuthenticationError.
    """
    key_path = Path(path or default_service_account_file()).expanduser()
    info = _read_key_file(key_path)

    try:
        creds = service_account.Credentials.from_service_account_info(
            info, scopes=scopes or SCOPES
        )
    except ValueError as exc:
        raise AuthenticationError(f"Malformed service account key in {key_path}: {exc}") from exc

    try:
        creds.refresh(Request())
    except GoogleAuthError as exc:
        logger.error("Error initializing library: handshake for %s rejected: %s",
                     info["client_email"], exc)
        raise AuthenticationError(
            f"Authorization rejected for {info['client_email']}"
        ) from exc

    logger.debug("Authorized service account %s", info["client_email"])
    return creds
