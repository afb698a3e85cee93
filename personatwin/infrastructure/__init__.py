"""Infrastructure components for the personatwin system.

Low-level clients for the external text-generation service and the
credential lookup that decides whether one can be built.
"""

# LLM infrastructure
from .llm import (
    ChatClient, OpenAIChatClient, VertexChatClient,
    ChatRequest, ModelMessage, ModelClientError, ModelResponseError
)

# Credentials
from .credentials import CredentialProvider, build_chat_client

__all__ = [
    # LLM clients
    "ChatClient", "OpenAIChatClient", "VertexChatClient",
    "ChatRequest", "ModelMessage", "ModelClientError", "ModelResponseError",

    # Credentials
    "CredentialProvider", "build_chat_client"
]
