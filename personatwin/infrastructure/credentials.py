"""
Credential lookup for the text-generation service and client construction.

A missing credential is a normal condition: the interview then runs on the
local synthesizer alone.
"""
import os
import logging
from typing import Optional

from ..config import Config, API_KEY_PREFIX, API_KEY_MIN_LENGTH
from .llm import ChatClient, OpenAIChatClient, VertexChatClient

logger = logging.getLogger("credentials")

API_KEY_ENV = "OPENAI_API_KEY"


class CredentialProvider:
    """Resolves the API key from the environment, then from an optional key file."""

    def __init__(self, key_file: Optional[str] = None, env_var: str = API_KEY_ENV):
        self.key_file = key_file
        self.env_var = env_var

    def get_api_key(self) -> Optional[str]:
        key = os.getenv(self.env_var)
        if key and key.strip():
            return key.strip()

        if self.key_file and os.path.exists(self.key_file):
            try:
                with open(self.key_file, "r", encoding="utf-8") as f:
                    key = f.read().strip()
            except OSError as e:
                logger.warning("Could not read API key file %s: %s", self.key_file, e)
                return None
            return key or None

        return None

    def has_valid_api_key(self) -> bool:
        """True when a key with the expected prefix and length is available."""
        key = self.get_api_key()
        return bool(key) and key.startswith(API_KEY_PREFIX) and len(key) > API_KEY_MIN_LENGTH


def build_chat_client(config: Config,
                      credentials: Optional[CredentialProvider] = None) -> Optional[ChatClient]:
    """
    Create the configured model client.

    Args:
        config: Loaded configuration
        credentials: Key lookup for the OpenAI backend; derived from config when omitted

    Returns:
        A ready client, or None when no credential is available
    """
    if config.model_provider == "vertex":
        if not config.google_cloud_project:
            logger.info("No Google Cloud project configured; twin refinement disabled")
            return None
        return VertexChatClient(
            project=config.google_cloud_project,
            location=config.vertex_location,
            model=config.vertex_model_name,
            credentials_json=config.google_application_credentials,
            timeout=config.llm_timeout,
        )

    credentials = credentials or CredentialProvider(key_file=config.openai_api_key_file)
    if not credentials.has_valid_api_key():
        logger.info("No valid API key found; twin refinement disabled")
        return None
    return OpenAIChatClient(
        api_key=credentials.get_api_key(),
        model=config.openai_model_name,
        url=config.openai_api_url,
        timeout=config.llm_timeout,
    )
