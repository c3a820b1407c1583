"""Bot API request bodies and the response envelope.

See https://core.telegram.org/bots/api#making-requests
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from wordguard.errors import ActionError


class ResponseParameters(BaseModel):
    """Optional hints attached to a failed response."""

    migrate_to_chat_id: int = 0
    retry_after: int = 0


class APIEnvelope(BaseModel):
    """Uniform response wrapper returned by every Bot API method."""

    ok: bool = False
    result: Any = None
    error_code: int = 0
    description: str = ""
    parameters: ResponseParameters | None = None

    def to_error(self) -> ActionError:
        parameters = self.parameters or ResponseParameters()
        return ActionError(
            self.error_code,
            self.description,
            migrate_to_chat_id=parameters.migrate_to_chat_id,
            retry_after=parameters.retry_after,
        )


class KickChatMemberRequest(BaseModel):
    """https://core.telegram.org/bots/api#banchatmember"""

    chat_id: int
    user_id: int
    until_date: int


class SendMessageRequest(BaseModel):
    chat_id: int
    text: str


class SetWebhookRequest(BaseModel):
    url: str
    secret_token: str | None = None
    allowed_updates: list[str] = Field(default_factory=lambda: ["message"])
