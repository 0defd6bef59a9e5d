from __future__ import annotations

import google.generativeai as genai


class GeminiProvider:
    def __init__(self, model: str, api_key: str, timeout_s: float = 20.0):
        if not api_key:
            raise RuntimeError("GEMINI_API_KEY is missing")
        genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(model)
        self._timeout_s = timeout_s

    @property
    def name(self) -> str:
        return "gemini"

    def generate(self, prompt: str) -> str:
        response = self._model.generate_content(
            prompt,
            request_options={"timeout": self._timeout_s},
        )
        return response.text or ""
