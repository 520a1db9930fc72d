from __future__ import annotations

import logging
from typing import Literal, Protocol, Sequence, TypedDict

import openai
from openai import OpenAI

from career_guidance.config import Settings, settings
from career_guidance.errors import UpstreamUnavailableError


logger = logging.getLogger(__name__)


class PromptMessage(TypedDict):
    role: Literal["system", "user", "assistant"]
    content: str


class InferenceClient(Protocol):
    """Narrow text-generation interface every guidance stage depends on."""

    def generate(self, messages: Sequence[PromptMessage], temperature: float) -> str: ...


class OpenAIInferenceClient:
    """Chat-completions backed client for any OpenAI-compatible endpoint.

    Failures of the upstream call are reported as UpstreamUnavailableError;
    the client never retries.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str,
        base_url: str | None = None,
        timeout: float = 60.0,
        client: OpenAI | None = None,
    ):
        self.model = model
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._client = client

    @classmethod
    def from_settings(cls, config: Settings) -> "OpenAIInferenceClient":
        return cls(
            api_key=config.inference_api_key,
            model=config.inference_model,
            base_url=config.inference_base_url,
            timeout=config.inference_timeout_seconds,
        )

    def _get_client(self) -> OpenAI:
        if self._client is None:
            if not self._api_key:
                raise UpstreamUnavailableError("Inference capability is not configured (missing INFERENCE_API_KEY)")
            # max_retries=0: retrying is the caller's decision.
            self._client = OpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    def generate(self, messages: Sequence[PromptMessage], temperature: float) -> str:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[dict(m) for m in messages],
                temperature=temperature,
            )
        except openai.OpenAIError as exc:
            logger.warning("inference.generate failed model=%s error=%s", self.model, type(exc).__name__)
            raise UpstreamUnavailableError(f"Inference call failed: {exc}") from exc

        if not response.choices:
            raise UpstreamUnavailableError("Inference call returned no choices")
        return (response.choices[0].message.content or "").strip()


def build_inference_client() -> InferenceClient:
    return OpenAIInferenceClient.from_settings(settings)
