from __future__ import annotations

from types import SimpleNamespace

import httpx
import openai
import pytest

from career_guidance.errors import UpstreamUnavailableError
from career_guidance.services.inference import OpenAIInferenceClient


class _Completions:
    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.kwargs: dict | None = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return self.result


def _sdk(completions: _Completions) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def _response(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


MESSAGES = [{"role": "system", "content": "be brief"}, {"role": "user", "content": "hi"}]


def test_generate_returns_stripped_content() -> None:
    completions = _Completions(result=_response("  {\"ok\": true}\n"))
    client = OpenAIInferenceClient(api_key="k", model="test-model", client=_sdk(completions))

    assert client.generate(MESSAGES, temperature=0.3) == '{"ok": true}'
    assert completions.kwargs["model"] == "test-model"
    assert completions.kwargs["temperature"] == 0.3
    assert completions.kwargs["messages"] == MESSAGES


def test_sdk_errors_become_upstream_unavailable() -> None:
    request = httpx.Request("POST", "https://inference.example/v1/chat/completions")
    completions = _Completions(error=openai.APIConnectionError(request=request))
    client = OpenAIInferenceClient(api_key="k", model="m", client=_sdk(completions))

    with pytest.raises(UpstreamUnavailableError):
        client.generate(MESSAGES, temperature=0.5)


def test_timeout_becomes_upstream_unavailable() -> None:
    request = httpx.Request("POST", "https://inference.example/v1/chat/completions")
    completions = _Completions(error=openai.APITimeoutError(request=request))
    client = OpenAIInferenceClient(api_key="k", model="m", client=_sdk(completions))

    with pytest.raises(UpstreamUnavailableError):
        client.generate(MESSAGES, temperature=0.5)


def test_no_choices_is_upstream_unavailable() -> None:
    completions = _Completions(result=SimpleNamespace(choices=[]))
    client = OpenAIInferenceClient(api_key="k", model="m", client=_sdk(completions))

    with pytest.raises(UpstreamUnavailableError):
        client.generate(MESSAGES, temperature=0.5)


def test_null_content_is_empty_text() -> None:
    client = OpenAIInferenceClient(api_key="k", model="m", client=_sdk(_Completions(result=_response(None))))
    assert client.generate(MESSAGES, temperature=0.5) == ""


def test_missing_api_key_is_upstream_unavailable() -> None:
    client = OpenAIInferenceClient(api_key=None, model="m")
    with pytest.raises(UpstreamUnavailableError):
        client.generate(MESSAGES, temperature=0.5)


def test_unconfigured_service_answers_503(client, auth_headers) -> None:
    # No dependency override for this app: the real client has no API key in tests.
    client.app.dependency_overrides.clear()
    resp = client.post("/api/chat", json={"message": "Hi"}, headers=auth_headers)
    assert resp.status_code == 503
