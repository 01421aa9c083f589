from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import httpx
import structlog

from ethics_engine.errors import ScreeningLookupError

if TYPE_CHECKING:
    from pathlib import Path

    from ethics_engine.config.settings import ScreeningConfig

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScreeningMatch:
    matched: bool
    score: float = 0.0


class ScreeningLookup(Protocol):
    async def lookup(self, name: str) -> ScreeningMatch: ...


class StaticScreeningLookup:
    """In-memory sanctions/PEP table keyed by case-insensitive name."""

    def __init__(self, entries: dict[str, float] | None = None) -> None:
        self._entries = {k.strip().lower(): float(v) for k, v in (entries or {}).items()}

    @classmethod
    def from_file(cls, path: Path) -> StaticScreeningLookup:
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(data)

    async def lookup(self, name: str) -> ScreeningMatch:
        score = self._entries.get(name.strip().lower())
        if score is None:
            return ScreeningMatch(matched=False)
        return ScreeningMatch(matched=True, score=score)


class HttpScreeningClient:
    def __init__(self, config: ScreeningConfig, client: httpx.AsyncClient | None = None) -> None:
        if not config.base_url:
            msg = "Screening base_url is not configured"
            raise ValueError(msg)
        self.config = config
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> HttpScreeningClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {}
            if self.config.api_key:
                headers["Authorization"] = f"Bearer {self.config.api_key}"
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url or "",
                timeout=self.config.timeout_seconds,
                headers=headers,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def lookup(self, name: str) -> ScreeningMatch:
        try:
            response = await self.client.get("/pep-search", params={"name": name})
            response.raise_for_status()
            payload: Any = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ScreeningLookupError(name, str(exc) or type(exc).__name__) from exc

        if not isinstance(payload, dict):
            raise ScreeningLookupError(name, "unexpected response body")

        matched = bool(payload.get("matched", False))
        try:
            score = float(payload.get("score") or 0.0)
        except (TypeError, ValueError) as exc:
            raise ScreeningLookupError(name, "non-numeric score") from exc

        logger.debug("screening_lookup", matched=matched, score=score)
        return ScreeningMatch(matched=matched, score=score)
