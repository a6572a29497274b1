"""
FastAPI application for CodeSense.
"""
from __future__ import annotations

import datetime
import logging
import time
from contextlib import asynccontextmanager

from fastapi import APIRouter, BackgroundTasks, FastAPI, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from codesense import AnalysisError, AnalysisReport, CodeQualityAnalyzer, InputTooLargeError

from app import __version__
from app.archive import AnalysisArchive, archive_report, create_redis_client
from app.config import settings, logger
from app.models import AnalyzeRequest, ErrorResponse, StoredAnalysis


analyzer = CodeQualityAnalyzer(
    logger=logging.getLogger("codesense.core"),
    max_input_length=settings.MAX_CODE_LENGTH,
)


def get_archive(request: Request) -> AnalysisArchive | None:
    return getattr(request.app.state, "archive", None)


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


async def security_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


async def request_size_middleware(request: Request, call_next):
    if request.method in ("POST", "PUT", "PATCH"):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > settings.MAX_REQUEST_SIZE:
            return JSONResponse(
                status_code=413,
                content={
                    "success": False,
                    "error": "request_too_large",
                    "message": f"Request body exceeds {settings.MAX_REQUEST_SIZE} bytes",
                },
            )
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------


analysis_router = APIRouter()


@analysis_router.post(
    "/analyze",
    response_model=AnalysisReport,
    responses={413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_code(
    payload: AnalyzeRequest,
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
):
    """
    Analyze code quality.

    Returns the report verbatim. When an archive is configured the report is
    stored after the response is sent and its id is returned in the
    ``X-Analysis-Id`` header.
    """
    start_time = time.time()
    logger.info("Analysis requested - code length: %d chars", len(payload.code))

    try:
        report = await run_in_threadpool(analyzer.analyze, payload.code)
    except InputTooLargeError as exc:
        logger.warning("Rejected oversized input: %s", exc.message)
        raise HTTPException(status_code=413, detail=exc.message)
    except AnalysisError as exc:
        logger.error("Analysis error after %.3fs: %s", time.time() - start_time, exc.__cause__ or exc)
        raise HTTPException(status_code=500, detail="Internal server error during code analysis")

    logger.info(
        "Analysis completed in %.3fs - score: %d, time: %s, space: %s",
        time.time() - start_time,
        report.score,
        report.metrics.timeComplexity.value,
        report.metrics.spaceComplexity.value,
    )

    archive = get_archive(request)
    if archive is not None:
        analysis_id = archive.new_id()
        response.headers["X-Analysis-Id"] = analysis_id
        background_tasks.add_task(archive_report, archive, analysis_id, payload.code, report)

    return report


archive_router = APIRouter()


@archive_router.get("/analyses/{analysis_id}", response_model=StoredAnalysis)
async def get_analysis(analysis_id: str, request: Request):
    """Retrieve an archived analysis."""
    if not AnalysisArchive.is_valid_id(analysis_id):
        raise HTTPException(status_code=400, detail="Invalid analysis ID")

    archive = get_archive(request)
    if archive is None:
        raise HTTPException(status_code=503, detail="Archive unavailable (Redis not configured)")

    try:
        record = await archive.get(analysis_id)
    except RedisError as exc:
        logger.error("Failed to retrieve analysis: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to retrieve analysis")

    if record is None:
        raise HTTPException(status_code=404, detail="Analysis not found or expired")
    return record


health_router = APIRouter()


@health_router.get("/health")
async def health(request: Request):
    """Health check, including archive connectivity."""
    archive = get_archive(request)
    if archive is None:
        archive_state = "unreachable" if settings.archive_enabled else "disabled"
    else:
        archive_state = "ok" if await archive.ping() else "unreachable"

    return {
        "status": "ok" if archive_state != "unreachable" else "degraded",
        "version": __version__,
        "archive": archive_state,
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }


# ---------------------------------------------------------------------------
# FastAPI app assembly
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("CodeSense v%s starting", __version__)
    logger.info("Archive: %s", "enabled" if settings.archive_enabled else "disabled")

    redis_client = await create_redis_client()
    app.state.archive = (
        AnalysisArchive(redis_client, ttl_seconds=settings.ARCHIVE_TTL_SECONDS)
        if redis_client is not None
        else None
    )
    if settings.archive_enabled and redis_client is None:
        logger.warning("Continuing without archive")

    yield

    logger.info("Shutting down")
    if app.state.archive is not None:
        try:
            await app.state.archive.close()
            logger.info("Redis connection closed")
        except RedisError as exc:
            logger.error("Error closing Redis: %s", exc)


app = FastAPI(
    title="CodeSense API",
    description="Heuristic code quality and complexity analysis",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Never echo request bodies; the submitted code stays out of the logs."""
    logger.error(
        "Unhandled exception on %s %s: %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        str(exc)[:200],
    )
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Internal server error").model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first validation problem without echoing submitted values."""
    errors = exc.errors()
    error_details = [
        {"field": err.get("loc", [])[-1] if err.get("loc") else "unknown", "type": err.get("type")}
        for err in errors[:5]
    ]
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, error_details)

    message = "No code provided for analysis."
    if errors and errors[0].get("type") not in ("missing", "string_too_short"):
        message = str(errors[0].get("msg", message))
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(error="Invalid request format", message=message).model_dump(),
    )


app.middleware("http")(security_headers_middleware)
app.middleware("http")(request_size_middleware)

cors_origins = settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Analysis-Id"],
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "CodeSense API",
        "version": __version__,
        "status": "ok",
    }


app.include_router(health_router, prefix="/api/v1", tags=["health"])
app.include_router(analysis_router, prefix="/api/v1", tags=["analysis"])
app.include_router(archive_router, prefix="/api/v1", tags=["archive"])
app.include_router(analysis_router, prefix="/api", tags=["analysis-compat"])
