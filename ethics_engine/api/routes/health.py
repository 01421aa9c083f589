from __future__ import annotations

from fastapi import APIRouter

from ethics_engine import __version__
from ethics_engine.api.schemas import HealthResponse
from ethics_engine.engine.report import ENGINE_VERSION

router = APIRouter()


@router.get("/health", response_model=HealthResponse)  # type: ignore[misc]
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        engine_version=ENGINE_VERSION,
    )


@router.get("/ready")  # type: ignore[misc]
async def readiness() -> dict[str, str]:
    return {"status": "ready"}
