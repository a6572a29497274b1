"""
Redis archive for analysis reports.
"""
from __future__ import annotations

import datetime
import secrets

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from codesense.models import AnalysisReport

from app.config import settings, logger
from app.models import StoredAnalysis


KEY_PREFIX = "codesense:analysis:"
MAX_ID_LENGTH = 64


async def create_redis_client() -> Redis | None:
    """
    Create and ping a Redis client when an archive URL is configured.

    Returns None when archiving is disabled or Redis is unreachable; the
    service keeps answering without an archive.
    """
    if not settings.archive_enabled:
        return None

    try:
        client = Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            max_connections=10,
            socket_timeout=settings.REDIS_TIMEOUT_SECONDS,
            socket_connect_timeout=settings.REDIS_TIMEOUT_SECONDS,
        )
        await client.ping()
        logger.info("Redis client initialized and validated")
        return client
    except RedisError as exc:
        logger.error("Failed to initialize Redis client: %s", exc)
        return None


class AnalysisArchive:
    """Stores each produced report under an opaque id."""

    def __init__(self, redis: Redis, ttl_seconds: int | None = None):
        self._redis = redis
        self._ttl_seconds = ttl_seconds

    @staticmethod
    def new_id() -> str:
        return secrets.token_urlsafe(12)

    @staticmethod
    def is_valid_id(analysis_id: str) -> bool:
        return 0 < len(analysis_id) <= MAX_ID_LENGTH and analysis_id.isascii()

    @staticmethod
    def _key(analysis_id: str) -> str:
        return f"{KEY_PREFIX}{analysis_id}"

    async def save(self, analysis_id: str, code: str, report: AnalysisReport) -> StoredAnalysis:
        """Persist ``report`` for ``code``; returns the stored record."""
        record = StoredAnalysis(
            id=analysis_id,
            createdAt=datetime.datetime.now(datetime.timezone.utc).isoformat(),
            code=code,
            **report.model_dump(mode="json"),
        )
        await self._redis.set(self._key(analysis_id), record.model_dump_json(), ex=self._ttl_seconds)
        return record

    async def get(self, analysis_id: str) -> StoredAnalysis | None:
        data = await self._redis.get(self._key(analysis_id))
        if data is None:
            return None
        return StoredAnalysis.model_validate_json(data)

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        await self._redis.aclose()


async def archive_report(
    archive: AnalysisArchive,
    analysis_id: str,
    code: str,
    report: AnalysisReport,
    attempts: int | None = None,
    wait: wait_base | None = None,
) -> bool:
    """
    Best-effort background persistence.

    Transient connection and timeout errors are retried with backoff; any
    remaining failure is logged and swallowed so it never reaches the caller,
    who already has the report.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(attempts or settings.ARCHIVE_RETRY_ATTEMPTS),
        wait=wait or wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type((RedisConnectionError, RedisTimeoutError)),
    )
    try:
        async for attempt in retrying:
            with attempt:
                await archive.save(analysis_id, code, report)
    except RetryError as exc:
        logger.error("Archiving %s gave up after retries: %s", analysis_id, exc.last_attempt.exception())
        return False
    except RedisError as exc:
        logger.error("Archiving %s failed: %s", analysis_id, exc)
        return False

    logger.info("Analysis %s archived", analysis_id)
    return True
