from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class CaseContext:
    """Read-only evaluation input shared by every check."""

    targets: tuple[str, ...] = ()
    context: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_payload(cls, payload: Any) -> CaseContext:
        if not isinstance(payload, Mapping):
            return cls()

        context = payload.get("context")
        if not isinstance(context, Mapping):
            context = {}

        targets: list[str] = []
        for candidate in (context.get("target"), payload.get("target")):
            if not isinstance(candidate, str):
                continue
            name = candidate.strip()
            if name and name not in targets:
                targets.append(name)

        return cls(targets=tuple(targets), context=MappingProxyType(dict(context)))

    def get(self, *path: str) -> Any:
        node: Any = self.context
        for key in path:
            if not isinstance(node, Mapping):
                return None
            node = node.get(key)
        return node

    def text(self, *path: str) -> str | None:
        value = self.get(*path)
        return value if isinstance(value, str) else None

    @property
    def single_source_procurement(self) -> bool:
        return self.get("procurement", "singleSource") is True

    @property
    def industry(self) -> str | None:
        return self.text("project", "industry")

    @property
    def region(self) -> str | None:
        return self.text("project", "region")
