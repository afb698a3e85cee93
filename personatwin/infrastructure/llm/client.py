"""
REST clients for the external text-generation service.

Two backends share one request shape: an OpenAI-style chat completions
endpoint and Vertex AI Gemini's generateContent.
"""
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

import requests
import google.auth
import google.auth.exceptions
import google.auth.transport.requests
from google.oauth2 import service_account

from ...config import (
    OPENAI_API_URL, OPENAI_MODEL_NAME, VERTEX_LOCATION, VERTEX_MODEL_NAME, LLM_TIMEOUT
)

logger = logging.getLogger("llm_client")


class ModelClientError(Exception):
    """The text-generation service could not be reached or refused the request."""


class ModelResponseError(ModelClientError):
    """The service answered, but the payload was empty or unusable."""


@dataclass(frozen=True)
class ModelMessage:
    role: str  # system, user or assistant
    content: str


@dataclass
class ChatRequest:
    """Backend-neutral completion request."""
    messages: List[ModelMessage] = field(default_factory=list)
    temperature: float = 0.7
    max_tokens: int = 1000
    json_mode: bool = False


def parse_json_text(text: str) -> Dict[str, Any]:
    """
    Parse a JSON object out of model output.

    Falls back to the outermost {...} span when the model wrapped the
    object in prose or code fences.

    Raises:
        ModelResponseError: If no JSON object can be recovered
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("json.loads failed: %s", e)
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            raise ModelResponseError(f"Model did not return valid JSON: {text[:200]}") from e
        try:
            parsed = json.loads(text[start:end + 1])
        except json.JSONDecodeError as e2:
            raise ModelResponseError(f"Model did not return valid JSON: {text[:200]}") from e2
        logger.debug("Parsed JSON from substring successfully")

    if not isinstance(parsed, dict):
        raise ModelResponseError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


class ChatClient(ABC):
    """Blocking client interface. Callers in async code wrap it in a thread."""

    @abstractmethod
    def complete(self, request: ChatRequest) -> str:
        """
        Run one completion.

        Returns:
            The generated text, never empty

        Raises:
            ModelClientError: On transport or HTTP failure
            ModelResponseError: On an empty or malformed payload
        """

    def complete_json(self, request: ChatRequest) -> Dict[str, Any]:
        """Run a completion in JSON mode and parse the result."""
        request.json_mode = True
        text = self.complete(request)
        logger.debug("Raw model output: %s", repr(text[:500]))
        return parse_json_text(text)


class OpenAIChatClient(ChatClient):
    """Chat completions client authenticated with a bearer API key."""

    def __init__(self,
                 api_key: str,
                 model: str = OPENAI_MODEL_NAME,
                 url: str = OPENAI_API_URL,
                 timeout: int = LLM_TIMEOUT):
        self.api_key = api_key
        self.model = model
        self.url = url
        self.timeout = timeout

    def complete(self, request: ChatRequest) -> str:
        body: Dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": m.role, "content": m.content} for m in request.messages],
            "temperature": float(request.temperature),
            "max_tokens": int(request.max_tokens),
        }
        if request.json_mode:
            body["response_format"] = {"type": "json_object"}

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.debug("POST %s model=%s messages=%d", self.url, self.model, len(request.messages))
        try:
            resp = requests.post(self.url, headers=headers, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise ModelClientError(f"Chat completions request failed: {e}") from e

        if resp.status_code >= 400:
            raise ModelClientError(f"Chat completions error {resp.status_code}: {resp.text}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise ModelResponseError("Chat completions returned a non-JSON body") from e

        return self._parse_response_text(payload)

    @staticmethod
    def _parse_response_text(resp_json: Any) -> str:
        if not isinstance(resp_json, dict):
            raise ModelResponseError(f"Expected a JSON object, got {type(resp_json).__name__}")
        choices = resp_json.get("choices") or []
        if not isinstance(choices, list) or not choices:
            raise ModelResponseError("No choices in response")
        choice = choices[0]
        if not isinstance(choice, dict) or not isinstance(choice.get("message"), dict):
            raise ModelResponseError("Malformed first choice")
        content = choice["message"].get("content")
        if not isinstance(content, str) or not content.strip():
            raise ModelResponseError("Empty content in first choice")
        return content


class VertexChatClient(ChatClient):
    """REST-based client for Vertex AI Gemini models."""

    def __init__(self,
                 project: str,
                 location: str = VERTEX_LOCATION,
                 model: str = VERTEX_MODEL_NAME,
                 credentials_json: Optional[str] = None,
                 timeout: int = LLM_TIMEOUT):
        self.project = project
        self.location = location
        self.model = model
        self.credentials_json = credentials_json
        self.base_url = f"https://{self.location}-aiplatform.googleapis.com/v1"
        self.model_resource = f"projects/{self.project}/locations/{self.location}/publishers/google/models/{self.model}"
        self._token = None
        self.timeout = timeout

    def _refresh_token(self):
        """Refresh the OAuth token for API calls."""
        scopes = ["https://www.googleapis.com/auth/cloud-platform"]
        try:
            if self.credentials_json:
                creds = service_account.Credentials.from_service_account_file(
                    self.credentials_json, scopes=scopes
                )
            else:
                creds, _ = google.auth.default(scopes=scopes)
            creds.refresh(google.auth.transport.requests.Request())
        except (google.auth.exceptions.GoogleAuthError, OSError) as e:
            raise ModelClientError(f"Could not obtain Vertex credentials: {e}") from e
        self._token = creds.token

    def _ensure_token(self):
        if not self._token:
            self._refresh_token()

    def build_body(self, request: ChatRequest) -> Dict[str, Any]:
        """Map a chat request onto the generateContent schema."""
        system_parts = [{"text": m.content} for m in request.messages if m.role == "system"]
        contents = [
            {
                "role": "model" if m.role == "assistant" else "user",
                "parts": [{"text": m.content}],
            }
            for m in request.messages if m.role != "system"
        ]

        body: Dict[str, Any] = {
            "contents": contents,
            "generationConfig": {
                "temperature": float(request.temperature),
                "maxOutputTokens": int(request.max_tokens),
            },
        }
        if system_parts:
            body["systemInstruction"] = {"parts": system_parts}
        if request.json_mode:
            body["generationConfig"]["responseMimeType"] = "application/json"
        return body

    def complete(self, request: ChatRequest) -> str:
        self._ensure_token()
        url = f"{self.base_url}/{self.model_resource}:generateContent"
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

        try:
            resp = requests.post(url, headers=headers, json=self.build_body(request), timeout=self.timeout)
        except requests.RequestException as e:
            raise ModelClientError(f"Vertex request failed: {e}") from e

        if resp.status_code >= 400:
            raise ModelClientError(f"Vertex REST error {resp.status_code}: {resp.text}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise ModelResponseError("Vertex returned a non-JSON body") from e

        return self._parse_response_text(payload)

    @staticmethod
    def _parse_response_text(resp_json: Any) -> str:
        """Extract candidates[0].content.parts[*].text."""
        if not isinstance(resp_json, dict):
            raise ModelResponseError(f"Expected a JSON object, got {type(resp_json).__name__}")
        candidates = resp_json.get("candidates") or []
        if not isinstance(candidates, list) or not candidates:
            raise ModelResponseError("No candidates in response")
        candidate = candidates[0]
        content = candidate.get("content") if isinstance(candidate, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            raise ModelResponseError("Malformed first candidate")
        for part in parts:
            if isinstance(part, dict) and isinstance(part.get("text"), str) and part["text"].strip():
                return part["text"]
        raise ModelResponseError("Empty content in first candidate")
