"""Health check endpoint."""

from __future__ import annotations

import time

from fastapi import APIRouter, Request

from wordguard import __version__

router = APIRouter()

_start_time = time.time()


@router.get("/health")
async def health(request: Request) -> dict:
    """Health check: returns status, uptime and moderation settings."""
    config = request.app.state.config
    return {
        "status": "ok",
        "version": __version__,
        "uptime_seconds": round(time.time() - _start_time, 1),
        "forbidden_words": len(config.moderation.forbidden_words),
        "ban_duration_s": config.moderation.ban_duration_s,
        "bot_token_configured": bool(config.telegram.bot_token.strip()),
        "telemetry_forwarding": bool(config.telemetry.endpoint.strip()),
    }
