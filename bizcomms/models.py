"""
Typed data models for Business Communications resources.

Plain dataclasses parsed from the API dicts. Each keeps the full raw
resource in `raw`, since nested settings (conversational settings, survey
config, entry points) are passed through as dicts rather than modelled.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

_BRAND_RE = re.compile(r"^brands/[^/\s]+$")
_AGENT_RE = re.compile(r"^brands/[^/\s]+/agents/[^/\s]+$")
_LOCATION_RE = re.compile(r"^brands/[^/\s]+/locations/[^/\s]+$")


# ── Resource names ────────────────────────────────────────────────────────────

def validate_brand_name(name: str) -> str:
    """Return name if it looks like 'brands/BRAND_ID', else raise ValueError."""
    if not _BRAND_RE.match(name or ""):
        raise ValueError(f"Expected a brand name like 'brands/BRAND_ID', got {name!r}")
    return name


def validate_agent_name(name: str) -> str:
    """Return name if it looks like 'brands/BRAND_ID/agents/AGENT_ID'."""
    if not _AGENT_RE.match(name or ""):
        raise ValueError(
            f"Expected an agent name like 'brands/BRAND_ID/agents/AGENT_ID', got {name!r}"
        )
    return name


def validate_location_name(name: str) -> str:
    """Return name if it looks like 'brands/BRAND_ID/locations/LOCATION_ID'."""
    if not _LOCATION_RE.match(name or ""):
        raise ValueError(
            "Expected a location name like 'brands/BRAND_ID/locations/LOCATION_ID', "
            f"got {name!r}"
        )
    return name


def brand_name_of(resource_name: str) -> str:
    """'brands/b1/agents/a1' -> 'brands/b1'."""
    parts = resource_name.split("/")
    if len(parts) < 2 or parts[0] != "brands" or not parts[1]:
        raise ValueError(f"Not a brand-scoped resource name: {resource_name!r}")
    return "/".join(parts[:2])


def _short_id(name: str) -> str:
    return name.split("/")[-1] if "/" in name else name


# ── Brand ─────────────────────────────────────────────────────────────────────

@dataclass
class Brand:
    """A business represented by one or more agents and locations."""

    name: str               # resource name: "brands/abc123"
    display_name: str
    raw: dict = field(default_factory=dict, repr=False)

    @property
    def brand_id(self) -> str:
        return _short_id(self.name)


# ── Agent ─────────────────────────────────────────────────────────────────────

@dataclass
class Agent:
    """A conversational entity that represents a brand."""

    name: str               # resource name: "brands/abc123/agents/xyz789"
    display_name: str
    default_locale: str = ""
    logo_url: str = ""
    custom_agent_id: str = ""
    raw: dict = field(default_factory=dict, repr=False)

    @property
    def agent_id(self) -> str:
        return _short_id(self.name)

    @property
    def brand_name(self) -> str:
        return brand_name_of(self.name)

    @property
    def business_messages_agent(self) -> dict:
        return self.raw.get("businessMessagesAgent", {})

    @property
    def conversational_settings(self) -> dict:
        return self.business_messages_agent.get("conversationalSettings", {})

    @property
    def survey_config(self) -> Optional[dict]:
        return self.business_messages_agent.get("surveyConfig")


# ── Location ──────────────────────────────────────────────────────────────────

@dataclass
class Location:
    """A physical place of a brand, routed to one agent."""

    name: str               # resource name: "brands/abc123/locations/loc456"
    place_id: str
    agent: str = ""         # agent resource name handling this location
    default_locale: str = ""
    listing_id: str = ""
    raw: dict = field(default_factory=dict, repr=False)

    @property
    def location_id(self) -> str:
        return _short_id(self.name)

    @property
    def brand_name(self) -> str:
        return brand_name_of(self.name)

    @property
    def entry_points(self) -> list[str]:
        return [
            cfg.get("allowedEntryPoint", "")
            for cfg in self.raw.get("locationEntryPointConfigs", [])
        ]
