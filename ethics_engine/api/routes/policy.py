from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from ethics_engine.api.schemas import PolicyResponse
from ethics_engine.errors import PolicyConfigurationError
from ethics_engine.scoring.aggregator import PolicyWeightedAggregator

router = APIRouter()


@router.get("/policy", response_model=PolicyResponse)  # type: ignore[misc]
async def get_policy(request: Request) -> PolicyResponse:
    engine = request.app.state.engine
    try:
        policy = engine.policy_store.read_policy()
    except PolicyConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return PolicyResponse(
        version=policy.version,
        weights=policy.weights.resolved(),
        normalized_weights=PolicyWeightedAggregator().normalized_weights(policy.weights),
        thresholds=policy.thresholds.model_dump(),
    )
