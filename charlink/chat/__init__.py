"""Chat conversation resolution."""

from charlink.chat.models import (
    ConversationHandle,
    ConversationReference,
    JsonBody,
    ResponseBody,
    TextBody,
    parse_body,
)
from charlink.chat.resolver import NO_HISTORY_SENTINELS, ChatResolver

__all__ = [
    "NO_HISTORY_SENTINELS",
    "ChatResolver",
    "ConversationHandle",
    "ConversationReference",
    "JsonBody",
    "ResponseBody",
    "TextBody",
    "parse_body",
]
