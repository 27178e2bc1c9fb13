"""
LocationsClient — typed wrapper around brands.locations in the Business Communications API v1.

A location ties a Google Maps place (placeId) to the agent that answers
conversations started from it.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from .errors import execute
from .field_mask import FieldMask
from .google_factory import BusinessCommunicationsFactory
from .models import (
    Location,
    brand_name_of,
    validate_agent_name,
    validate_brand_name,
    validate_location_name,
)
from .patching import PatchRequest, submit_patch

logger = logging.getLogger(__name__)


class LocationsClient:
    """
    High-level location operations.

    Usage:
        factory   = BusinessCommunicationsFactory()
        locations = LocationsClient(factory)

        loc = locations.create_location("brands/abc123", {
            "placeId": "ChIJj61dQgK6j4AR4GeTYWZsKWw",
            "agent": "brands/abc123/agents/xyz789",
            "defaultLocale": "en",
        })
    """

    def __init__(self, factory: BusinessCommunicationsFactory) -> None:
        self._svc = factory.service

    # ── Create ────────────────────────────────────────────────────────────────

    def create_location(self, brand_name: str, location: dict) -> Location:
        validate_brand_name(brand_name)
        raw = execute(
            self._svc.brands().locations().create(parent=brand_name, body=location),
            "locations.create", brand_name,
        )
        created = _parse_location(raw)
        logger.info("Created location %s for place %s", created.name, created.place_id)
        return created

    # ── Read ──────────────────────────────────────────────────────────────────

    def get_location(self, name: str) -> Location:
        """Fetch a location by 'brands/BRAND_ID/locations/LOCATION_ID'."""
        validate_location_name(name)
        raw = execute(
            self._svc.brands().locations().get(name=name), "locations.get", name
        )
        return _parse_location(raw)

    def list_locations(
        self,
        brand_name: str,
        agent_name: Optional[str] = None,
        page_size: int = 100,
    ) -> list[Location]:
        """
        Return the locations of a brand.

        Args:
            brand_name: Parent brand.
            agent_name: If given, keep only locations routed to this agent.
            page_size:  Page size per request; all pages are fetched.
        """
        validate_brand_name(brand_name)
        locations: list[Location] = []
        page_token = None
        while True:
            kwargs: dict = {"parent": brand_name, "pageSize": page_size}
            if page_token:
                kwargs["pageToken"] = page_token
            resp = execute(
                self._svc.brands().locations().list(**kwargs),
                "locations.list", brand_name,
            )
            locations.extend(_parse_location(item) for item in resp.get("locations", []))
            page_token = resp.get("nextPageToken")
            if not page_token:
                break

        if agent_name:
            locations = [loc for loc in locations if loc.agent == agent_name]
        return locations

    # ── Update ────────────────────────────────────────────────────────────────

    def update_location(
        self,
        name: str,
        partial: dict,
        update_mask: Union[str, Iterable[str], FieldMask],
    ) -> Location:
        request = PatchRequest.build(validate_location_name(name), partial, update_mask)
        raw = submit_patch(self._svc.brands().locations(), request, "locations.patch")
        return _parse_location(raw)

    def update_agent(self, name: str, agent_name: str) -> Location:
        """Route a location to another agent of the same brand."""
        validate_location_name(name)
        validate_agent_name(agent_name)
        if brand_name_of(agent_name) != brand_name_of(name):
            logger.warning("Agent %s belongs to a different brand than %s", agent_name, name)
        return self.update_location(name, {"agent": agent_name}, "agent")

    # ── Delete ────────────────────────────────────────────────────────────────

    def delete_location(self, name: str) -> None:
        validate_location_name(name)
        execute(
            self._svc.brands().locations().delete(name=name), "locations.delete", name
        )
        logger.info("Deleted location %s", name)


# ── Parser ────────────────────────────────────────────────────────────────────

def _parse_location(raw: dict) -> Location:
    return Location(
        name=raw.get("name", ""),
        place_id=raw.get("placeId", ""),
        agent=raw.get("agent", ""),
        default_locale=raw.get("defaultLocale", ""),
        listing_id=str(raw.get("listingId", "")),
        raw=raw,
    )
