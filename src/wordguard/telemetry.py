"""Out-of-band error reporting."""

from __future__ import annotations

import asyncio
import traceback
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

import httpx
import structlog

from wordguard.config import TelemetryConfig

logger = structlog.get_logger()


class TelemetrySink(ABC):
    """Receives every error the moderation flow does not surface to the chat."""

    @abstractmethod
    def report(self, error: BaseException, **context: Any) -> None:
        """Record ``error``. Must not raise and must not block."""
        ...

    async def flush(self, timeout_s: float = 2.0) -> None:
        """Wait for buffered reports to be delivered."""
        return None


class LogTelemetry(TelemetrySink):
    """Writes reports to the structured log only."""

    def report(self, error: BaseException, **context: Any) -> None:
        logger.warning(
            "telemetry.report",
            error_type=type(error).__name__,
            error=str(error),
            **context,
        )


class WebhookTelemetry(LogTelemetry):
    """Logs each report and POSTs it as JSON to a collector endpoint."""

    def __init__(self, config: TelemetryConfig) -> None:
        self.endpoint = config.endpoint.strip()
        self.timeout_s = config.timeout_s
        self._pending: set[asyncio.Task[None]] = set()

    def report(self, error: BaseException, **context: Any) -> None:
        super().report(error, **context)
        payload = {
            "timestamp": datetime.now(UTC).isoformat(),
            "error_type": type(error).__name__,
            "message": str(error),
            "traceback": "".join(traceback.format_exception(error)),
            "context": {key: _jsonable(value) for key, value in context.items()},
        }
        try:
            task = asyncio.get_running_loop().create_task(self._send(payload))
        except RuntimeError:
            logger.warning("telemetry.dropped", reason="no_running_loop")
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def flush(self, timeout_s: float = 2.0) -> None:
        if not self._pending:
            return
        _, pending = await asyncio.wait(set(self._pending), timeout=timeout_s)
        if pending:
            logger.warning("telemetry.flush_timeout", pending=len(pending))

    async def _send(self, payload: dict[str, Any]) -> None:
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_s)) as client:
                response = await client.post(self.endpoint, json=payload)
                if response.status_code >= 400:
                    logger.warning(
                        "telemetry.send_failed",
                        status_code=response.status_code,
                        body=response.text[:300],
                    )
        except httpx.HTTPError as exc:
            logger.warning("telemetry.send_error", error=str(exc))


def build_telemetry(config: TelemetryConfig) -> TelemetrySink:
    """Pick the sink for the configured endpoint."""
    if config.endpoint.strip():
        return WebhookTelemetry(config)
    return LogTelemetry()


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
