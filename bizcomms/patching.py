"""
Partial updates against a Business Communications collection.

Callers send only the changed subtree plus a field mask naming the paths to
change. The service applies those paths and answers with the full resource,
which is what submit_patch() returns.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Union

from .errors import execute
from .field_mask import FieldMask

logger = logging.getLogger(__name__)


@dataclass
class PatchRequest:
    """Target resource name, partial resource, and the mask to apply."""

    name: str
    resource: dict
    update_mask: FieldMask

    @classmethod
    def build(
        cls,
        name: str,
        resource: dict,
        update_mask: Union[str, Iterable[str], FieldMask],
    ) -> PatchRequest:
        return cls(name=name, resource=resource, update_mask=FieldMask.coerce(update_mask))

    def unpopulated_paths(self) -> list[str]:
        return self.update_mask.missing_paths(self.resource)

    def params(self) -> dict[str, Any]:
        """Keyword arguments for a googleapiclient patch() call."""
        return {
            "name": self.name,
            "body": self.resource,
            "updateMask": str(self.update_mask),
        }


def submit_patch(collection: Any, request: PatchRequest, operation: str) -> dict:
    """
    Send request to collection.patch() and return the full updated resource.

    Mask paths missing from the partial resource are logged but still sent;
    the service decides whether to accept them.
    """
    missing = request.unpopulated_paths()
    if missing:
        logger.warning(
            "%s %s: mask paths not set in the partial resource: %s",
            operation, request.name, ", ".join(missing),
        )
    raw = execute(collection.patch(**request.params()), operation, request.name)
    logger.info("Updated %s: %s", request.name, request.update_mask)
    return raw
