import os
from dataclasses import dataclass

_DEFAULT_MODELS = {
    "gemini": "gemini-1.5-flash",
    "openai": "gpt-4o-mini",
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    enabled: bool
    timeout_s: float
    openai_api_key: str
    openai_base_url: str | None
    gemini_api_key: str


def load_ai_config() -> AIConfig:
    provider = os.getenv("AI_PROVIDER", "gemini").strip().lower()
    model = (os.getenv("AI_MODEL") or _DEFAULT_MODELS.get(provider, "")).strip()
    enabled = os.getenv("LLM_ENABLED", "1").strip().lower() in {"1", "true", "yes", "y", "on"}
    try:
        timeout_s = float(os.getenv("LLM_TIMEOUT_S", "20"))
    except ValueError:
        timeout_s = 20.0
    return AIConfig(
        provider=provider,
        model=model,
        enabled=enabled,
        timeout_s=timeout_s,
        openai_api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        openai_base_url=(os.getenv("OPENAI_BASE_URL") or "").strip() or None,
        gemini_api_key=(os.getenv("GEMINI_API_KEY") or "").strip(),
    )
