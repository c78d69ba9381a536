"""LiteLLM analysis backend — a single ``litellm.acompletion()`` call per prompt."""

from __future__ import annotations

import logging
from typing import Any

from loan_compliance.core.config import LLMConfig

log = logging.getLogger(__name__)


class LiteLLMBackend:
    """Real-time analysis via ``litellm.acompletion()``.

    The model string carries the provider prefix (``gemini/``,
    ``anthropic/``, ``openai/``, ``bedrock/``, ``ollama/``).
    """

    def __init__(self, config: LLMConfig | None = None) -> None:
        self._config = config or LLMConfig()

    @property
    def model(self) -> str:
        return self._config.model

    async def complete(self, prompt: str) -> str:
        from litellm import acompletion

        kwargs: dict[str, Any] = {
            "model": self._config.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self._config.temperature,
            "timeout": self._config.timeout,
            "num_retries": 0,
        }
        if self._config.api_key and self._config.api_key != "no-key":
            kwargs["api_key"] = self._config.api_key
        if self._config.base_url:
            kwargs["api_base"] = self._config.base_url

        log.debug("Analysis request: model=%s prompt_chars=%d", self._config.model, len(prompt))
        response = await acompletion(**kwargs)
        content = response.choices[0].message.content or ""

        usage = getattr(response, "usage", None)
        if usage:
            log.info(
                "Analysis response: model=%s prompt_tokens=%s completion_tokens=%s",
                self._config.model,
                getattr(usage, "prompt_tokens", 0),
                getattr(usage, "completion_tokens", 0),
            )
        return content
