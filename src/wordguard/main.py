"""WordGuard FastAPI application entrypoint."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from wordguard import __version__
from wordguard.config import WordGuardConfig, get_config
from wordguard.errors import WordGuardError
from wordguard.logging import setup_logging
from wordguard.moderation import ModerationService
from wordguard.telegram import TelegramClient
from wordguard.telemetry import build_telemetry

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup/shutdown lifecycle."""
    config: WordGuardConfig = app.state.config
    setup_logging(level=config.log_level, fmt=config.log_format)

    logger.info("wordguard.starting", version=__version__)
    if not config.telegram.bot_token.strip():
        logger.warning("wordguard.no_bot_token", reason="WORDGUARD_TELEGRAM_BOT_TOKEN is empty")

    telemetry = build_telemetry(config.telemetry)
    client = TelegramClient(config.telegram)
    moderation = ModerationService(
        client=client,
        telemetry=telemetry,
        forbidden_words=config.moderation.forbidden_words,
        ban_duration_s=config.moderation.ban_duration_s,
    )

    if config.telegram.webhook_url:
        url = config.telegram.webhook_url.rstrip("/") + config.telegram.webhook_path
        try:
            await client.set_webhook(url, secret_token=config.telegram.webhook_secret)
            logger.info("wordguard.webhook_registered", path=config.telegram.webhook_path)
        except WordGuardError as exc:
            telemetry.report(exc, stage="set_webhook")

    app.state.telemetry = telemetry
    app.state.telegram = client
    app.state.moderation = moderation

    logger.info(
        "wordguard.ready",
        host=config.host,
        port=config.port,
        forbidden_words=len(config.moderation.forbidden_words),
    )

    yield

    # Shutdown
    logger.info("wordguard.shutting_down")
    await client.aclose()
    await telemetry.flush(timeout_s=2.0)
    logger.info("wordguard.stopped")


def create_app(config: WordGuardConfig | None = None) -> FastAPI:
    """Create the FastAPI application."""
    config = config or get_config()
    app = FastAPI(
        title="WordGuard",
        version=__version__,
        description="Removes Telegram group members who post forbidden words.",
        lifespan=lifespan,
    )
    app.state.config = config

    # Register routes
    from wordguard.api.routes.health import router as health_router
    from wordguard.api.routes.webhook import build_webhook_router

    app.include_router(health_router, tags=["health"])
    app.include_router(build_webhook_router(config.telegram.webhook_path), tags=["webhook"])

    return app


app = create_app()


def main() -> None:
    """Run the server directly."""
    config = get_config()
    setup_logging(level=config.log_level, fmt=config.log_format)
    uvicorn.run(
        "wordguard.main:app",
        host=config.host,
        port=config.port,
        log_level="warning",
    )


if __name__ == "__main__":
    main()
