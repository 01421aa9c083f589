from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request

from ethics_engine.errors import PolicyConfigurationError, ScreeningUnavailableError
from ethics_engine.models import EthicsReport

router = APIRouter()


@router.post("/ethics/evaluate", response_model=EthicsReport)  # type: ignore[misc]
async def evaluate_case(
    request: Request,
    payload: dict[str, Any],
) -> EthicsReport:
    engine = request.app.state.engine
    try:
        return await engine.evaluate(payload)  # type: ignore[no-any-return]
    except PolicyConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ScreeningUnavailableError as exc:
        raise HTTPException(
            status_code=503,
            detail=f"{exc}. Route the case to manual review.",
        ) from exc
