from __future__ import annotations

from typing import Optional

from openai import OpenAI


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout_s: float = 20.0,
        temperature: float = 0.2,
        max_output_tokens: int = 1200,
    ):
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY is missing")
        self._model = model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        # One call per request; fallbacks cover failures.
        self._client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_s,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        return "openai"

    def generate(self, prompt: str) -> str:
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self._temperature,
            max_tokens=self._max_output_tokens,
        )
        content = response.choices[0].message.content if response.choices else ""
        return content or ""
