from __future__ import annotations

import json

import pytest
import respx
from httpx import Response

from wordguard.config import TelemetryConfig
from wordguard.errors import ActionError
from wordguard.telemetry import LogTelemetry, WebhookTelemetry, build_telemetry


def test_build_telemetry_without_endpoint_logs_only() -> None:
    assert type(build_telemetry(TelemetryConfig(endpoint=""))) is LogTelemetry


def test_build_telemetry_with_endpoint_forwards() -> None:
    sink = build_telemetry(TelemetryConfig(endpoint="https://collector.test/errors"))
    assert isinstance(sink, WebhookTelemetry)


@pytest.mark.asyncio
@respx.mock
async def test_webhook_telemetry_posts_report() -> None:
    route = respx.post("https://collector.test/errors").mock(return_value=Response(202))
    sink = WebhookTelemetry(TelemetryConfig(endpoint="https://collector.test/errors"))

    sink.report(ActionError(400, "Bad Request: user not found"), stage="remove_member", chat_id=1)
    await sink.flush()

    assert route.call_count == 1
    body = json.loads(route.calls.last.request.content)
    assert body["error_type"] == "ActionError"
    assert body["message"] == "Bad Request: user not found"
    assert body["context"] == {"stage": "remove_member", "chat_id": 1}


@pytest.mark.asyncio
@respx.mock
async def test_webhook_telemetry_swallows_collector_failure() -> None:
    respx.post("https://collector.test/errors").mock(return_value=Response(500))
    sink = WebhookTelemetry(TelemetryConfig(endpoint="https://collector.test/errors"))

    sink.report(RuntimeError("boom"))
    await sink.flush()


def test_webhook_telemetry_without_loop_does_not_raise() -> None:
    sink = WebhookTelemetry(TelemetryConfig(endpoint="https://collector.test/errors"))

    sink.report(RuntimeError("boom"))
