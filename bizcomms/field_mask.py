"""
Field masks for partial updates.

A mask is a list of dotted paths ("displayName",
"businessMessagesAgent.logoUrl"). On the wire it is a single comma-separated
string passed as the updateMask query parameter.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Iterable, Union

_MISSING = object()


def _lookup(obj: Any, path: str) -> Any:
    node = obj
    for part in path.split("."):
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node


@dataclass(frozen=True)
class FieldMask:
    """An ordered, de-duplicated set of dotted field paths."""

    paths: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.paths:
            raise ValueError("A field mask needs at least one path")
        for path in self.paths:
            if not path or any(not part for part in path.split(".")):
                raise ValueError(f"Invalid field mask path: {path!r}")

    @classmethod
    def parse(cls, mask: str) -> FieldMask:
        """Parse 'a.b, c' into FieldMask(('a.b', 'c'))."""
        return cls.from_paths(p.strip() for p in mask.split(",") if p.strip())

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> FieldMask:
        return cls(tuple(dict.fromkeys(paths)))

    @classmethod
    def coerce(cls, mask: Union[str, Iterable[str], FieldMask]) -> FieldMask:
        if isinstance(mask, FieldMask):
            return mask
        if isinstance(mask, str):
            return cls.parse(mask)
        return cls.from_paths(mask)

    def __str__(self) -> str:
        return ",".join(self.paths)

    # ── Checks ────────────────────────────────────────────────────────────────

    def missing_paths(self, partial: dict) -> list[str]:
        """Paths that do not resolve to a populated field in partial."""
        return [p for p in self.paths if _lookup(partial, p) is _MISSING]

    def covers(self, partial: dict) -> bool:
        return not self.missing_paths(partial)

    # ── Application ───────────────────────────────────────────────────────────

    def apply(self, target: dict, partial: dict) -> dict:
        """
        Return a deep copy of target with the masked paths taken from partial.

        Each masked subtree replaces the target's subtree wholesale. A masked
        path absent from partial clears that field. Unmasked fields are kept.
        """
        result = copy.deepcopy(target)
        for path in self.paths:
            *parents, leaf = path.split(".")
            value = _lookup(partial, path)

            node = result
            for part in parents:
                child = node.get(part)
                if not isinstance(child, dict):
                    if value is _MISSING:
                        node = None
                        break
                    child = node[part] = {}
                node = child
            if node is None:
                continue

            if value is _MISSING:
                node.pop(leaf, None)
            else:
                node[leaf] = copy.deepcopy(value)
        return result
