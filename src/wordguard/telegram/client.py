"""Async Telegram Bot API client."""

from __future__ import annotations

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from wordguard.config import TelegramConfig
from wordguard.errors import TransportError
from wordguard.telegram.models import (
    APIEnvelope,
    KickChatMemberRequest,
    SendMessageRequest,
    SetWebhookRequest,
)

logger = structlog.get_logger()


class TelegramClient:
    """Calls Bot API methods and unwraps their response envelopes.

    Every method issues exactly one POST. A transport failure or an
    undecodable body raises :class:`TransportError`; a decoded envelope with
    ``ok: false`` raises :class:`~wordguard.errors.ActionError`.
    """

    def __init__(self, config: TelegramConfig, *, http: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=httpx.Timeout(config.timeout_s))

    async def __aenter__(self) -> TelegramClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def remove_member(self, chat_id: int, user_id: int, until_date: int) -> APIEnvelope:
        """Ban ``user_id`` from ``chat_id`` until the ``until_date`` epoch second."""
        body = KickChatMemberRequest(chat_id=chat_id, user_id=user_id, until_date=until_date)
        return await self._call("kickChatMember", body)

    async def send_message(self, chat_id: int, text: str) -> APIEnvelope:
        return await self._call("sendMessage", SendMessageRequest(chat_id=chat_id, text=text))

    async def set_webhook(self, url: str, secret_token: str | None = None) -> APIEnvelope:
        return await self._call("setWebhook", SetWebhookRequest(url=url, secret_token=secret_token))

    async def _call(self, method: str, body: BaseModel) -> APIEnvelope:
        url = f"{self.config.endpoint}/{method}"
        content = body.model_dump_json(exclude_none=True)

        logger.debug("telegram.request", method=method)
        try:
            response = await self._http.post(
                url,
                content=content,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            reason = f"{type(exc).__name__}: {exc}"
            logger.warning("telegram.transport_error", method=method, error=reason)
            raise TransportError(method, reason) from exc

        try:
            envelope = APIEnvelope.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning(
                "telegram.bad_response",
                method=method,
                status_code=response.status_code,
                body=response.text[:300],
            )
            raise TransportError(
                method, f"undecodable response (HTTP {response.status_code})"
            ) from exc

        if not envelope.ok:
            logger.info(
                "telegram.not_ok",
                method=method,
                error_code=envelope.error_code,
                description=envelope.description,
            )
            raise envelope.to_error()
        return envelope
