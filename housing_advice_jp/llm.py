"""Text generators backing the advice narrative."""

import dataclasses
import logging
import os
from dataclasses import dataclass

import openai

from housing_advice_jp.advice import Generated, GenerationFailed, GenerationResult, TextGenerator

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENAI_API_KEY"


@dataclass(frozen=True)
class LLMSettings:

    enabled: bool = True
    model: str = "gpt-4o-mini"
    timeout: float = 30.0
    max_tokens: int = 800
    temperature: float = 0.7
    api_key: str | None = None


class DisabledTextGenerator:
    """Generator that never calls out; advice always falls back."""

    def __init__(self, reason: str = "AI generation disabled"):
        self.reason = reason

    def generate(self, prompt: str) -> GenerationResult:
        return GenerationFailed(self.reason)


class OpenAITextGenerator:
    """Single-attempt chat completion (no retries, bounded by timeout)."""

    def __init__(self, settings: LLMSettings, client: "openai.OpenAI | None" = None):
        self.settings = settings
        if client is None:
            client = openai.OpenAI(
                api_key=settings.api_key,
                timeout=settings.timeout,
                max_retries=0,
            )
        self.client = client

    def generate(self, prompt: str) -> GenerationResult:
        try:
            response = self.client.chat.completions.create(
                model=self.settings.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
            )
        except openai.OpenAIError as e:
            logger.error("AIアドバイス生成に失敗しました (%s): %s", type(e).__name__, e)
            return GenerationFailed(str(e))

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""
        if not content.strip():
            return GenerationFailed("empty response")
        return Generated(content.strip())


def build_text_generator(settings: LLMSettings) -> TextGenerator:
    """Pick the generator for the resolved settings (disabled when no API key)."""
    if not settings.enabled:
        return DisabledTextGenerator()
    api_key = settings.api_key or os.environ.get(API_KEY_ENV)
    if not api_key:
        logger.info("%s が未設定のため AI 生成を無効化します", API_KEY_ENV)
        return DisabledTextGenerator(f"{API_KEY_ENV} is not set")
    return OpenAITextGenerator(dataclasses.replace(settings, api_key=api_key))
