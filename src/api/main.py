"""
FastAPI main application.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from brand_agents import EvaluationOrchestrator, LLMGateway, load_config, __version__
from brand_agents.core.exceptions import AgentConfigError, EvaluationError
from config import settings
from src.api.middleware import LoggingMiddleware
from src.api.routes import evaluation
from src.models.schemas import HealthResponse, ErrorResponse, ErrorDetail
from src.utils import get_logger, registry
from src.utils.health_check import perform_health_checks
from src.utils.logger import request_id_var
from src.utils.metrics import error_count, record_provider_failure

logger = get_logger(__name__)

SERVICE_NAME = "Brand Asset Evaluation Service"


def build_orchestrator() -> EvaluationOrchestrator:
    """Load configuration and wire the engine once per process."""
    config = load_config(settings=settings)
    gateway = LLMGateway.from_config(config, failure_listener=record_provider_failure)
    return EvaluationOrchestrator.from_config(config, gateway=gateway)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    logger.info(
        f"Starting {SERVICE_NAME}",
        environment=settings.environment,
        version=__version__,
    )

    orchestrator = build_orchestrator()
    app.state.orchestrator = orchestrator
    logger.info(
        "Evaluation engine ready",
        providers=orchestrator.gateway.provider_names,
        default_strategy=orchestrator.default_strategy,
    )

    yield

    await orchestrator.close()
    app.state.orchestrator = None
    logger.info(f"Shutting down {SERVICE_NAME}")


# Create FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="Multi-agent scoring of AI-generated brand assets",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request/response logging middleware with correlation ID tracking
app.add_middleware(LoggingMiddleware)


def _error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    error_response = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        request_id=request_id_var.get(),
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


# Exception handlers
@app.exception_handler(EvaluationError)
async def evaluation_exception_handler(request: Request, exc: EvaluationError) -> JSONResponse:
    """Engine errors that reach the API layer."""
    logger.warning(
        "Evaluation error",
        error_code=exc.error_code,
        error=exc.message,
        path=request.url.path,
    )
    error_count.labels(error_type=exc.error_code, component="api").inc()
    status_code = 400 if isinstance(exc, AgentConfigError) else 502
    return _error_response(status_code, exc.error_code, exc.message, exc.details or None)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        path=request.url.path,
        exc_info=True,
    )
    error_count.labels(error_type=type(exc).__name__, component="api").inc()

    return _error_response(
        500,
        "INTERNAL_ERROR",
        "An internal error occurred",
        {"type": type(exc).__name__} if settings.environment != "production" else None,
    )


# Health check endpoint
@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint with real provider checks."""
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        return HealthResponse(status="starting", version=__version__, services={})

    checks = await perform_health_checks(orchestrator)

    services = {
        service: result.get("status", False)
        for service, result in checks.items()
    }

    # Heuristic scoring keeps working without any provider
    status = "healthy" if all(services.values()) else "degraded"

    details = {
        service: result.get("message") or result.get("error", "Unknown")
        for service, result in checks.items()
    }
    logger.info(f"Health check: {status}", **details)

    return HealthResponse(
        status=status,
        version=__version__,
        services=services,
    )


# Metrics endpoint
@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.enable_metrics:
        return JSONResponse(
            status_code=404,
            content={"error": "Metrics are disabled"},
        )

    data = generate_latest(registry)
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


# Include routers
app.include_router(evaluation.router, prefix="/evaluations", tags=["Evaluation"])


# Root endpoint
@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": __version__,
        "status": "running",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.environment == "development",
    )
