"""
Evaluation API routes.
"""
from typing import Any

from fastapi import APIRouter, HTTPException, Request

from brand_agents import EvaluationOrchestrator
from brand_agents.core.exceptions import AgentConfigError
from src.models.schemas import (
    AgentResultResponse,
    EvaluationRequestBody,
    StrategiesResponse,
    VisionResponse,
)
from src.utils import get_logger
from src.utils.logger import set_correlation_context
from src.utils.metrics import active_evaluations, error_count, record_evaluation

logger = get_logger(__name__)
router = APIRouter()


def get_orchestrator(request: Request) -> EvaluationOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Evaluation engine is not initialized")
    return orchestrator


@router.post("")
async def evaluate_asset(body: EvaluationRequestBody, request: Request) -> dict[str, Any]:
    """
    Evaluate a generated asset and return the aggregated record.

    Args:
        body: Evaluation request

    Returns:
        Serialized evaluation record
    """
    orchestrator = get_orchestrator(request)
    strategy = body.strategy or None
    set_correlation_context(prompt_id=body.prompt_id, strategy=strategy or orchestrator.default_strategy)

    logger.info(
        "Evaluation request received",
        channel=body.channel,
        brand=body.brand.name,
        strategy=strategy or orchestrator.default_strategy,
    )

    active_evaluations.inc()
    try:
        record = await orchestrator.evaluate(body.to_request(), strategy=strategy)
    except AgentConfigError as e:
        error_count.labels(error_type=e.error_code, component="evaluation").inc()
        raise HTTPException(status_code=400, detail=e.message)
    finally:
        active_evaluations.dec()

    record_evaluation(record)
    logger.info(
        "Evaluation completed",
        status=record.status.value,
        final_score=record.final_score,
        duration_ms=record.total_execution_time_ms,
        error=record.error,
    )
    return record.to_dict()


@router.post("/vision", response_model=VisionResponse)
async def evaluate_vision(body: EvaluationRequestBody, request: Request) -> VisionResponse:
    """Score the attached image with the vision evaluator."""
    orchestrator = get_orchestrator(request)
    if body.image is None:
        raise HTTPException(status_code=400, detail="An image payload is required for vision evaluation")

    set_correlation_context(prompt_id=body.prompt_id)
    result = await orchestrator.evaluate_vision(body.to_request())
    logger.info("Vision evaluation completed", status=result.status.value, score=result.score)

    return VisionResponse(
        prompt_id=body.prompt_id,
        result=AgentResultResponse(**result.to_dict()),
    )


@router.get("/strategies", response_model=StrategiesResponse)
async def list_strategies(request: Request) -> StrategiesResponse:
    """List the aggregation strategies the engine supports."""
    orchestrator = get_orchestrator(request)
    return StrategiesResponse(
        default=orchestrator.default_strategy,
        available=orchestrator.strategy_names,
    )
