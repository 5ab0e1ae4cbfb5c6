"""Conversation models for chat resolution."""

import json
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ConversationReference(BaseModel):
    """Input to resolution.

    An absent external conversation id means "resume the most recent
    conversation with this character, or create one if none exists".
    """

    model_config = ConfigDict(frozen=True, strict=True)

    character_id: str = Field(..., description="Character external id")
    external_conversation_id: str | None = Field(
        default=None, description="History external id to resume"
    )


class TextBody(BaseModel):
    """Response body kept as raw text because it is not valid JSON."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str

    @property
    def value(self) -> str:
        return self.text


class JsonBody(BaseModel):
    """Response body decoded from JSON."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["json"] = "json"
    data: Any

    @property
    def value(self) -> Any:
        return self.data


ResponseBody = Annotated[TextBody | JsonBody, Field(discriminator="kind")]


def parse_body(text: str) -> TextBody | JsonBody:
    """Make one attempt to decode `text` as JSON, keeping the raw text on failure."""
    try:
        return JsonBody(data=json.loads(text))
    except ValueError:
        return TextBody(text=text)


class ConversationHandle(BaseModel):
    """A resolved conversation, owned by the caller."""

    model_config = ConfigDict(frozen=True)

    character_id: str = Field(..., description="Character external id")
    external_conversation_id: str | None = Field(
        default=None, description="History external id that was requested"
    )
    body: ResponseBody = Field(..., description="Conversation payload")

    @property
    def payload(self) -> Any:
        """The conversation payload: decoded JSON, or raw text."""
        return self.body.value

    @property
    def history_external_id(self) -> str | None:
        """External id of the resolved history, when the payload carries one."""
        payload = self.payload
        if isinstance(payload, dict):
            external_id = payload.get("external_id")
            if isinstance(external_id, str):
                return external_id
        return None
