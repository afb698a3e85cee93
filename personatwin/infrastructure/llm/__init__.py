"""Text-generation service clients."""

from .client import (
    ChatClient, OpenAIChatClient, VertexChatClient,
    ChatRequest, ModelMessage, ModelClientError, ModelResponseError,
    parse_json_text
)

__all__ = [
    "ChatClient", "OpenAIChatClient", "VertexChatClient",
    "ChatRequest", "ModelMessage", "ModelClientError", "ModelResponseError",
    "parse_json_text"
]
