"""
AgentsClient — typed wrapper around brands.agents in the Business Communications API v1.

Agents are created under a brand. The convenience updaters each send one
partial agent with the matching field mask:

    update_display_name            displayName
    update_logo                    businessMessagesAgent.logoUrl
    update_conversational_settings businessMessagesAgent.conversationalSettings.<locale>
    update_survey_config           businessMessagesAgent.surveyConfig

Only non-verified agents can be deleted.
"""
from __future__ import annotations

import logging
from typing import Iterable, Union

from .errors import execute
from .field_mask import FieldMask
from .google_factory import BusinessCommunicationsFactory
from .models import Agent, validate_agent_name, validate_brand_name
from .patching import PatchRequest, submit_patch

logger = logging.getLogger(__name__)


class AgentsClient:
    """
    High-level agent operations.

    Usage:
        factory = BusinessCommunicationsFactory()
        agents  = AgentsClient(factory)

        agent = agents.create_agent("brands/abc123", {"displayName": "A Test Agent", ...})
        agents.update_logo(agent.name, "https://example.com/logo.png")
    """

    def __init__(self, factory: BusinessCommunicationsFactory) -> None:
        self._svc = factory.service

    # ── Create ────────────────────────────────────────────────────────────────

    def create_agent(self, brand_name: str, agent: dict) -> Agent:
        """
        Create an agent under brand_name and return it as stored by the service.

        Args:
            brand_name: Parent brand ('brands/BRAND_ID').
            agent:      Agent resource dict. businessMessagesAgent.defaultLocale
                        must match one of its conversationalSettings locales.
        """
        validate_brand_name(brand_name)
        raw = execute(
            self._svc.brands().agents().create(parent=brand_name, body=agent),
            "agents.create", brand_name,
        )
        created = _parse_agent(raw)
        logger.info("Created agent %s: %s", created.name, created.display_name)
        return created

    # ── Read ──────────────────────────────────────────────────────────────────

    def get_agent(self, name: str) -> Agent:
        validate_agent_name(name)
        raw = execute(self._svc.brands().agents().get(name=name), "agents.get", name)
        return _parse_agent(raw)

    def list_agents(self, brand_name: str, page_size: int = 100) -> list[Agent]:
        """Return all agents of a brand."""
        validate_brand_name(brand_name)
        agents: list[Agent] = []
        page_token = None
        while True:
            kwargs: dict = {"parent": brand_name, "pageSize": page_size}
            if page_token:
                kwargs["pageToken"] = page_token
            resp = execute(
                self._svc.brands().agents().list(**kwargs), "agents.list", brand_name
            )
            agents.extend(_parse_agent(a) for a in resp.get("agents", []))
            page_token = resp.get("nextPageToken")
            if not page_token:
                return agents

    # ── Update ────────────────────────────────────────────────────────────────

    def update_agent(
        self,
        name: str,
        partial: dict,
        update_mask: Union[str, Iterable[str], FieldMask],
    ) -> Agent:
        """
        Patch the fields named in update_mask and return the full updated agent.

        Args:
            name:        Agent resource name.
            partial:     Agent dict holding only the changed subtree.
            update_mask: Comma-separated dotted paths (or a list / FieldMask).
        """
        request = PatchRequest.build(validate_agent_name(name), partial, update_mask)
        raw = submit_patch(self._svc.brands().agents(), request, "agents.patch")
        return _parse_agent(raw)

    def update_display_name(self, name: str, display_name: str) -> Agent:
        return self.update_agent(name, {"displayName": display_name}, "displayName")

    def update_logo(self, name: str, logo_url: str) -> Agent:
        return self.update_agent(
            name,
            {"businessMessagesAgent": {"logoUrl": logo_url}},
            "businessMessagesAgent.logoUrl",
        )

    def update_conversational_settings(
        self, name: str, locale: str, settings: dict
    ) -> Agent:
        """Replace the conversational settings of a single locale."""
        return self.update_agent(
            name,
            {"businessMessagesAgent": {"conversationalSettings": {locale: settings}}},
            f"businessMessagesAgent.conversationalSettings.{locale}",
        )

    def update_survey_config(self, name: str, survey_config: dict) -> Agent:
        return self.update_agent(
            name,
            {"businessMessagesAgent": {"surveyConfig": survey_config}},
            "businessMessagesAgent.surveyConfig",
        )

    # ── Delete ────────────────────────────────────────────────────────────────

    def delete_agent(self, name: str) -> None:
        validate_agent_name(name)
        execute(self._svc.brands().agents().delete(name=name), "agents.delete", name)
        logger.info("Deleted agent %s", name)


# ── Parser ────────────────────────────────────────────────────────────────────

def _parse_agent(raw: dict) -> Agent:
    bma = raw.get("businessMessagesAgent", {})
    return Agent(
        name=raw.get("name", ""),
        display_name=raw.get("displayName", ""),
        default_locale=bma.get("defaultLocale", ""),
        logo_url=bma.get("logoUrl", ""),
        custom_agent_id=bma.get("customAgentId", ""),
        raw=raw,
    )
