"""Gemini client used by the AI endpoints.

One instance is built at startup from ``GeminiSettings`` and shared through
``app.state``; nothing here is a module-level singleton. The underlying
``google-genai`` client is created lazily so the app can boot without
credentials.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from google.genai import types

from interview_prep.core.config import GeminiSettings
from interview_prep.modules.ai.models import QuestionAnswer

DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass
class GeminiClient:
    api_key: Optional[str] = None
    model_name: str = DEFAULT_MODEL
    max_output_tokens: int = 8192
    temperature: float = 0.5
    retry_attempts: int = 3
    retry_base_delay: float = 0.4
    _client: Any = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, cfg: GeminiSettings) -> "GeminiClient":
        return cls(
            api_key=cfg.api_key,
            model_name=cfg.model or DEFAULT_MODEL,
            max_output_tokens=cfg.max_output_tokens,
            temperature=cfg.temperature,
            retry_attempts=cfg.retry_attempts,
            retry_base_delay=cfg.retry_base_delay,
        )

    @property
    def client(self) -> Any:
        if self._client is None:
            from pydantic_ai.providers.google import GoogleProvider

            self._client = GoogleProvider(api_key=self.api_key).client
        return self._client

    def questions_config(self) -> types.GenerateContentConfig:
        """Schema-constrained config for question/answer arrays."""
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=list[QuestionAnswer],
            max_output_tokens=self.max_output_tokens,
            temperature=self.temperature,
        )

    async def generate(
        self, prompt: str, config: Optional[types.GenerateContentConfig] = None
    ) -> Any:
        """Send one prompt; the raw SDK response is returned untouched."""
        return await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=config,
        )
