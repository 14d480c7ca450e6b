"""
LLM access with an ordered model fallback chain.

Each model is attempted in turn; an attempt yields either the completion
text or the error it failed with. The first successful attempt wins. When
every model fails, AllModelsFailedError carries the full attempt history.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger
from openai import AsyncOpenAI

from .config import Settings, get_settings
from .errors import UpstreamError


@dataclass
class LLMAttempt:
    """Outcome of calling one model."""

    model: str
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class LLMCompletion:
    """Successful completion plus the attempts it took to get there."""

    text: str
    model: str
    attempts: list[LLMAttempt] = field(default_factory=list)


class LLMNotConfiguredError(UpstreamError):
    def __init__(self) -> None:
        super().__init__("AI service is not configured. Please contact support.")


class AllModelsFailedError(UpstreamError):
    """Every model in the chain failed."""

    def __init__(self, attempts: list[LLMAttempt]):
        self.attempts = attempts
        tried = ", ".join(a.model for a in attempts) or "none"
        last_error = attempts[-1].error if attempts else "no models configured"
        super().__init__(
            f"All AI models failed. Tried: {tried}. Last error: {last_error}. "
            "Please check the API key and model access."
        )


_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block (```json ... ```)."""
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_OPEN.sub("", text)
        text = _FENCE_CLOSE.sub("", text)
    return text.strip()


def parse_json_object(text: str) -> dict[str, Any]:
    """
    Parse a JSON object out of an LLM reply.

    Handles markdown code fences and prose around the object.

    Raises:
        ValueError: If no JSON object can be parsed (json.JSONDecodeError
            is a ValueError subclass).
    """
    if not text:
        raise ValueError("Empty response from LLM")

    cleaned = strip_code_fences(text)
    match = _JSON_OBJECT.search(cleaned)
    if match:
        cleaned = match.group(0)

    result = json.loads(cleaned)
    if not isinstance(result, dict):
        raise ValueError(f"Expected a JSON object, got {type(result).__name__}")
    return result


class LLMClient:
    """Chat completions over an ordered list of models."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        models: Optional[list[str]] = None,
    ):
        self.settings = settings or get_settings()
        self.models = models if models is not None else self.settings.llm_models_list
        self._client: Optional[AsyncOpenAI] = None

    @property
    def configured(self) -> bool:
        return self.settings.llm_configured

    @property
    def client(self) -> AsyncOpenAI:
        """Get or create OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key.get_secret_value()
            )
        return self._client

    async def attempt(self, model: str, messages: list[dict[str, str]]) -> LLMAttempt:
        """Call a single model. Never raises; failures are returned."""
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=self.settings.llm_temperature,
                max_tokens=self.settings.llm_max_tokens,
            )
            content = response.choices[0].message.content
            if not content:
                return LLMAttempt(model=model, error="Empty response from LLM")
            return LLMAttempt(model=model, text=content)
        except Exception as e:
            return LLMAttempt(model=model, error=str(e) or type(e).__name__)

    async def complete(self, prompt: str, system: Optional[str] = None) -> LLMCompletion:
        """
        Run the prompt against each model in order until one succeeds.

        Raises:
            LLMNotConfiguredError: No API key configured
            AllModelsFailedError: Every model failed
        """
        if not self.configured:
            raise LLMNotConfiguredError()

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        attempts: list[LLMAttempt] = []
        for model in self.models:
            logger.debug(f"Attempting generation with: {model}")
            result = await self.attempt(model, messages)
            attempts.append(result)

            if result.success:
                logger.info(f"Generated content with: {model}")
                return LLMCompletion(text=result.text or "", model=model, attempts=attempts)

            logger.warning(f"Model {model} failed: {(result.error or '')[:100]}")

        raise AllModelsFailedError(attempts)
