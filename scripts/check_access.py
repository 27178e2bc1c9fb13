"""
check_access.py — verify the service account can reach the Business Communications API.

Authorizes with the service-account key, lists the brands it can see and,
with --brand, the agents and locations of that brand. Emits a JSON summary.

Usage:
    python scripts/check_access.py
    python scripts/check_access.py --credentials ~/keys/bc-agent.json
    python scripts/check_access.py --brand brands/abc123 --debug

Output (JSON to stdout):
    {
        "service_account": "...@....iam.gserviceaccount.com",
        "brand_count": int,
        "brands": [ { name, display_name } ],
        "brand": {                       // only with --brand
            "name": "...",
            "agents": [ { name, display_name, default_locale } ],
            "locations": [ { name, place_id, agent } ]
        }
    }
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional

# Make the repo root importable when run as a plain script
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from bizcomms.agents_client import AgentsClient
from bizcomms.base import BaseScript
from bizcomms.brands_client import BrandsClient
from bizcomms.google_factory import BusinessCommunicationsFactory
from bizcomms.locations_client import LocationsClient
from bizcomms.models import validate_brand_name


class CheckAccess(BaseScript):
    """Verify service-account access to the Business Communications API."""

    def __init__(
        self,
        log_level: int = logging.INFO,
        credentials_file: Optional[str] = None,
        brand_name: Optional[str] = None,
        factory: Optional[BusinessCommunicationsFactory] = None,
    ) -> None:
        super().__init__(log_level=log_level)
        self.brand_name = validate_brand_name(brand_name) if brand_name else None
        self._factory = factory or BusinessCommunicationsFactory(credentials_file)

    # ── run() ─────────────────────────────────────────────────────────────────

    def run(self) -> dict[str, Any]:
        handle = self._factory.acquire()
        account = getattr(handle.credentials, "service_account_email", "")
        self.logger.info("Authorized as %s", account or "(unknown account)")

        brands = BrandsClient(self._factory).list_brands()
        self.logger.info("%d brand(s) visible", len(brands))

        summary: dict[str, Any] = {
            "service_account": account,
            "brand_count": len(brands),
            "brands": [{"name": b.name, "display_name": b.display_name} for b in brands],
        }

        if self.brand_name:
            agents = AgentsClient(self._factory).list_agents(self.brand_name)
            locations = LocationsClient(self._factory).list_locations(self.brand_name)
            self.logger.info(
                "%s: %d agent(s), %d location(s)",
                self.brand_name, len(agents), len(locations),
            )
            summary["brand"] = {
                "name": self.brand_name,
                "agents": [
                    {"name": a.name, "display_name": a.display_name,
                     "default_locale": a.default_locale}
                    for a in agents
                ],
                "locations": [
                    {"name": loc.name, "place_id": loc.place_id, "agent": loc.agent}
                    for loc in locations
                ],
            }
        return summary

    # ── CLI entrypoint ────────────────────────────────────────────────────────

    @classmethod
    def build_parser(cls) -> argparse.ArgumentParser:
        parser = super().build_parser()
        parser.add_argument(
            "--credentials", metavar="PATH", default=None,
            help="Service account key file (default: BC_SERVICE_ACCOUNT_FILE or ./resources/)",
        )
        parser.add_argument(
            "--brand", metavar="BRAND_NAME", default=None,
            help="Also list agents and locations of this brand (brands/BRAND_ID)",
        )
        return parser

    @classmethod
    def from_args(cls, args: argparse.Namespace, log_level: int) -> CheckAccess:
        return cls(
            log_level=log_level,
            credentials_file=args.credentials,
            brand_name=args.brand,
        )


if __name__ == "__main__":
    CheckAccess.main()
