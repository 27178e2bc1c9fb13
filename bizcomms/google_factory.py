"""
BusinessCommunicationsFactory — one service-account client shared by all resource clients.

The authorized credentials and the Business Communications service object are
built together, at most once per factory, and cached. Construct the factory
once at process start and pass it to every client:

Usage:
    factory = BusinessCommunicationsFactory()

    handle = factory.acquire()       # handshake on first call, cached after
    svc    = factory.service         # same as factory.acquire().service

    from bizcomms.brands_client import BrandsClient
    brands = BrandsClient(factory)
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error

from google_auth import SCOPES, load_service_account_credentials

from .errors import RemoteOperationError

logger = logging.getLogger(__name__)

API_NAME = "businesscommunications"
API_VERSION = "v1"
DISCOVERY_URL = "https://businesscommunications.googleapis.com/$discovery/rest?version=v1"


@dataclass(frozen=True)
class ClientHandle:
    """Authorized credentials paired with the bound API surface."""

    credentials: Any
    service: Any


class BusinessCommunicationsFactory:
    """
    Builds and caches the authenticated Business Communications client.

    Initialization is single-flight: concurrent first callers wait on one
    handshake instead of each starting their own. A failed attempt is not
    cached, so the next call starts over.
    """

    def __init__(
        self,
        credentials_file: Union[str, Path, None] = None,
        scopes: Optional[list[str]] = None,
    ) -> None:
        self._credentials_file = credentials_file
        self._scopes: list[str] = scopes or SCOPES
        self._handle: Optional[ClientHandle] = None
        self._lock = threading.Lock()

    # ── Handle ────────────────────────────────────────────────────────────────

    @property
    def is_initialized(self) -> bool:
        return self._handle is not None

    def acquire(self, credentials_file: Union[str, Path, None] = None) -> ClientHandle:
        """
        Return the cached handle, authorizing on first use.

        credentials_file overrides the path given at construction. It only
        matters for the call that actually performs the handshake.
        """
        handle = self._handle
        if handle is not None:
            return handle

        with self._lock:
            if self._handle is None:
                self._handle = self._connect(credentials_file or self._credentials_file)
            return self._handle

    def _connect(self, credentials_file: Union[str, Path, None]) -> ClientHandle:
        creds = load_service_account_credentials(credentials_file, self._scopes)
        try:
            service = build(
                API_NAME, API_VERSION,
                credentials=creds,
                discoveryServiceUrl=DISCOVERY_URL,
                static_discovery=False,
                cache_discovery=False,
            )
        except (HttpError, HttpLib2Error, OSError) as exc:
            logger.error("Could not load the %s %s discovery document: %s",
                         API_NAME, API_VERSION, exc)
            raise RemoteOperationError("discovery.get", DISCOVERY_URL, exc) from exc
        logger.info("Business Communications client ready (%s %s)", API_NAME, API_VERSION)
        return ClientHandle(credentials=creds, service=service)

    # ── Service property ──────────────────────────────────────────────────────

    @property
    def service(self) -> Any:
        """Business Communications API v1 service object."""
        return self.acquire().service
