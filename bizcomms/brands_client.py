"""
BrandsClient — typed wrapper around the brands collection of the
Business Communications API v1.

Deleting a brand also deletes its agents. Only brands without verified
agents can be deleted.
"""
from __future__ import annotations

import logging
from typing import Iterable, Union

from .errors import execute
from .field_mask import FieldMask
from .google_factory import BusinessCommunicationsFactory
from .models import Brand, validate_brand_name
from .patching import PatchRequest, submit_patch

logger = logging.getLogger(__name__)


class BrandsClient:
    """
    Create, read, update, list and delete brands.

    Usage:
        factory = BusinessCommunicationsFactory()
        brands  = BrandsClient(factory)

        brand = brands.create_brand("Test Brand")
        brand = brands.update_display_name(brand.name, "An Updated Test Brand")
    """

    def __init__(self, factory: BusinessCommunicationsFactory) -> None:
        self._svc = factory.service

    # ── Create ────────────────────────────────────────────────────────────────

    def create_brand(self, display_name: str) -> Brand:
        raw = execute(
            self._svc.brands().create(body={"displayName": display_name}),
            "brands.create", display_name,
        )
        brand = _parse_brand(raw)
        logger.info("Created brand %s: %s", brand.name, brand.display_name)
        return brand

    # ── Read ──────────────────────────────────────────────────────────────────

    def get_brand(self, name: str) -> Brand:
        """Fetch a brand by resource name ('brands/BRAND_ID')."""
        validate_brand_name(name)
        raw = execute(self._svc.brands().get(name=name), "brands.get", name)
        return _parse_brand(raw)

    def list_brands(self, page_size: int = 100) -> list[Brand]:
        """Return every brand visible to the service account, following pages."""
        brands: list[Brand] = []
        page_token = None
        while True:
            kwargs: dict = {"pageSize": page_size}
            if page_token:
                kwargs["pageToken"] = page_token
            resp = execute(self._svc.brands().list(**kwargs), "brands.list", "brands")
            brands.extend(_parse_brand(b) for b in resp.get("brands", []))
            page_token = resp.get("nextPageToken")
            if not page_token:
                return brands

    # ── Update ────────────────────────────────────────────────────────────────

    def update_brand(
        self,
        name: str,
        partial: dict,
        update_mask: Union[str, Iterable[str], FieldMask],
    ) -> Brand:
        """Apply the masked fields of partial and return the full updated brand."""
        request = PatchRequest.build(validate_brand_name(name), partial, update_mask)
        raw = submit_patch(self._svc.brands(), request, "brands.patch")
        return _parse_brand(raw)

    def update_display_name(self, name: str, display_name: str) -> Brand:
        return self.update_brand(name, {"displayName": display_name}, "displayName")

    # ── Delete ────────────────────────────────────────────────────────────────

    def delete_brand(self, name: str) -> None:
        validate_brand_name(name)
        execute(self._svc.brands().delete(name=name), "brands.delete", name)
        logger.info("Deleted brand %s", name)


# ── Parser ────────────────────────────────────────────────────────────────────

def _parse_brand(raw: dict) -> Brand:
    return Brand(
        name=raw.get("name", ""),
        display_name=raw.get("displayName", ""),
        raw=raw,
    )
