"""Telegram webhook ingress."""

from __future__ import annotations

import secrets

from fastapi import APIRouter, Header, HTTPException, Request


async def telegram_webhook(
    request: Request,
    x_telegram_bot_api_secret_token: str | None = Header(default=None),
) -> dict:
    """Moderate one Telegram update.

    Answered with 200 whatever the moderation outcome, so Telegram does not
    redeliver the update.
    """
    expected_secret = (request.app.state.config.telegram.webhook_secret or "").strip()
    if expected_secret and not secrets.compare_digest(
        (x_telegram_bot_api_secret_token or "").strip(), expected_secret
    ):
        raise HTTPException(status_code=401, detail="Invalid webhook secret")

    body = await request.body()
    result = await request.app.state.moderation.handle_update(body)

    if result is None:
        return {"status": "ok", "matched": False, "outcome": None, "notice_sent": False}
    return {
        "status": "ok",
        "matched": result.matched,
        "outcome": result.outcome.value if result.outcome else None,
        "notice_sent": result.notice_sent,
    }


def build_webhook_router(path: str) -> APIRouter:
    """Router serving the webhook handler at the configured path."""
    router = APIRouter()
    router.add_api_route(path, telegram_webhook, methods=["POST"])
    return router
