from __future__ import annotations

from typing import Protocol

HIGH_IMPACT_INDUSTRIES = ("mining", "oil", "gas", "chemical", "timber")
ELEVATED_RISK_REGIONS = ("conflict", "frontier")
CONSTRUCTION_SECTOR = ("construction",)


class SignalSource(Protocol):
    def detect(self, text: str | None) -> str | None:
        """Return the matched signal label, or None when the text carries none."""
        ...


class KeywordSignalSource:
    """Case-insensitive substring matcher standing in for a classifier."""

    def __init__(self, keywords: tuple[str, ...] | list[str]) -> None:
        self.keywords = tuple(k.lower() for k in keywords)

    def detect(self, text: str | None) -> str | None:
        if not text:
            return None
        lowered = text.lower()
        for keyword in self.keywords:
            if keyword in lowered:
                return keyword
        return None
