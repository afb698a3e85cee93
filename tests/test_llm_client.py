import pytest
import requests

from personatwin.config import Config, get_config
from personatwin.infrastructure import CredentialProvider, build_chat_client
from personatwin.infrastructure.llm import (
    OpenAIChatClient, VertexChatClient, ChatRequest, ModelMessage,
    ModelClientError, ModelResponseError, parse_json_text
)
from personatwin.infrastructure.llm import client as client_module

VALID_KEY = "sk-" + "a" * 30


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakePost:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def __call__(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def install_post(monkeypatch, **kwargs):
    fake = FakePost(**kwargs)
    monkeypatch.setattr(client_module.requests, "post", fake)
    return fake


def chat_request(json_mode=False):
    return ChatRequest(
        messages=[ModelMessage("system", "be brief"), ModelMessage("user", "hi")],
        temperature=0.9,
        max_tokens=500,
        json_mode=json_mode,
    )


def openai_payload(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_parse_json_text_plain_and_wrapped():
    assert parse_json_text('{"a": 1}') == {"a": 1}
    assert parse_json_text('Here:\n```json\n{"a": {"b": 2}}\n```') == {"a": {"b": 2}}


@pytest.mark.parametrize("text", ["no braces here", "{broken", "[1, 2]", "} backwards {"])
def test_parse_json_text_rejects(text):
    with pytest.raises(ModelResponseError):
        parse_json_text(text)


def test_openai_request_body(monkeypatch):
    fake = install_post(monkeypatch, response=FakeResponse(payload=openai_payload("hey")))
    client = OpenAIChatClient(api_key=VALID_KEY, model="gpt-test", url="https://example.test/v1", timeout=5)

    assert client.complete(chat_request()) == "hey"
    call = fake.calls[0]
    assert call["url"] == "https://example.test/v1"
    assert call["timeout"] == 5
    assert call["headers"]["Authorization"] == f"Bearer {VALID_KEY}"
    assert call["json"]["model"] == "gpt-test"
    assert call["json"]["messages"] == [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "hi"},
    ]
    assert call["json"]["max_tokens"] == 500
    assert "response_format" not in call["json"]


def test_openai_json_mode(monkeypatch):
    fake = install_post(monkeypatch, response=FakeResponse(payload=openai_payload('{"ok": true}')))
    client = OpenAIChatClient(api_key=VALID_KEY)
    assert client.complete_json(chat_request()) == {"ok": True}
    assert fake.calls[0]["json"]["response_format"] == {"type": "json_object"}


def test_openai_errors(monkeypatch):
    client = OpenAIChatClient(api_key=VALID_KEY)

    install_post(monkeypatch, error=requests.ConnectionError("down"))
    with pytest.raises(ModelClientError):
        client.complete(chat_request())

    install_post(monkeypatch, response=FakeResponse(status_code=429, text="slow down"))
    with pytest.raises(ModelClientError, match="429"):
        client.complete(chat_request())

    install_post(monkeypatch, response=FakeResponse(payload=None))
    with pytest.raises(ModelResponseError):
        client.complete(chat_request())

    install_post(monkeypatch, response=FakeResponse(payload={"choices": []}))
    with pytest.raises(ModelResponseError):
        client.complete(chat_request())

    install_post(monkeypatch, response=FakeResponse(payload=openai_payload("   ")))
    with pytest.raises(ModelResponseError):
        client.complete(chat_request())


def test_vertex_body_mapping():
    client = VertexChatClient(project="proj")
    request = ChatRequest(
        messages=[
            ModelMessage("system", "be brief"),
            ModelMessage("user", "hi"),
            ModelMessage("assistant", "hello"),
        ],
        temperature=0.7,
        max_tokens=2000,
        json_mode=True,
    )
    body = client.build_body(request)

    assert body["systemInstruction"] == {"parts": [{"text": "be brief"}]}
    assert [c["role"] for c in body["contents"]] == ["user", "model"]
    assert body["generationConfig"] == {
        "temperature": 0.7,
        "maxOutputTokens": 2000,
        "responseMimeType": "application/json",
    }


def test_vertex_complete_parses_candidates(monkeypatch):
    payload = {"candidates": [{"content": {"parts": [{"text": ""}, {"text": "hey there"}]}}]}
    fake = install_post(monkeypatch, response=FakeResponse(payload=payload))
    client = VertexChatClient(project="proj", location="us-central1", model="gemini-test")
    client._token = "token"

    assert client.complete(chat_request()) == "hey there"
    assert fake.calls[0]["url"].endswith(
        "projects/proj/locations/us-central1/publishers/google/models/gemini-test:generateContent"
    )
    assert fake.calls[0]["headers"]["Authorization"] == "Bearer token"

    install_post(monkeypatch, response=FakeResponse(payload={"candidates": []}))
    with pytest.raises(ModelResponseError):
        client.complete(chat_request())


def test_credentials_from_env_then_file(monkeypatch, tmp_path):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    key_file = tmp_path / "key.txt"
    key_file.write_text(VALID_KEY + "\n", encoding="utf-8")

    assert CredentialProvider().get_api_key() is None
    assert CredentialProvider(key_file=str(key_file)).get_api_key() == VALID_KEY
    assert CredentialProvider(key_file=str(tmp_path / "missing.txt")).get_api_key() is None

    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-environment-123456")
    assert CredentialProvider(key_file=str(key_file)).get_api_key() == "sk-from-environment-123456"


@pytest.mark.parametrize("key,valid", [
    (VALID_KEY, True),
    ("sk-short", False),
    ("pk-" + "a" * 30, False),
    ("sk-" + "a" * 17, False),
    ("sk-" + "a" * 18, True),
])
def test_api_key_validation(monkeypatch, key, valid):
    monkeypatch.setenv("OPENAI_API_KEY", key)
    assert CredentialProvider().has_valid_api_key() is valid


def test_build_chat_client(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert build_chat_client(Config()) is None

    monkeypatch.setenv("OPENAI_API_KEY", VALID_KEY)
    client = build_chat_client(Config(openai_model_name="gpt-test"))
    assert isinstance(client, OpenAIChatClient)
    assert client.model == "gpt-test"

    assert build_chat_client(Config(model_provider="vertex")) is None
    vertex = build_chat_client(Config(model_provider="vertex", google_cloud_project="proj"))
    assert isinstance(vertex, VertexChatClient)


def test_get_config_env_overrides(monkeypatch):
    monkeypatch.setenv("PERSONATWIN_ACTIVE_QUESTIONS", "5")
    monkeypatch.setenv("PERSONATWIN_REFINE", "no")
    monkeypatch.setenv("PERSONATWIN_MODEL_PROVIDER", "Vertex")
    config = get_config()
    assert config.active_question_count == 5
    assert config.enable_twin_refinement is False
    assert config.model_provider == "vertex"


@pytest.mark.parametrize("name,value", [
    ("PERSONATWIN_ACTIVE_QUESTIONS", "three"),
    ("PERSONATWIN_MODEL_PROVIDER", "anthropic"),
])
def test_get_config_rejects_bad_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        get_config()


@pytest.mark.parametrize("payload", [
    [],
    "choices",
    {"choices": "x"},
    {"choices": ["x"]},
    {"choices": [{"message": "hi"}]},
    {"choices": [{"message": {"content": 42}}]},
])
def test_openai_wrongly_shaped_payload(monkeypatch, payload):
    install_post(monkeypatch, response=FakeResponse(payload=payload))
    with pytest.raises(ModelResponseError):
        OpenAIChatClient(api_key=VALID_KEY).complete(chat_request())


@pytest.mark.parametrize("payload", [
    [],
    {"candidates": {"content": {}}},
    {"candidates": ["x"]},
    {"candidates": [{"content": "hi"}]},
    {"candidates": [{"content": {"parts": "hi"}}]},
    {"candidates": [{"content": {"parts": ["hi", {"text": 3}]}}]},
])
def test_vertex_wrongly_shaped_payload(monkeypatch, payload):
    install_post(monkeypatch, response=FakeResponse(payload=payload))
    client = VertexChatClient(project="proj")
    client._token = "token"
    with pytest.raises(ModelResponseError):
        client.complete(chat_request())
