import logging

from resume_ai.ai.config import AIConfig, load_ai_config
from resume_ai.ai.types import GenerativeClient

logger = logging.getLogger(__name__)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def _usable_key(value: str) -> bool:
    return bool(value) and not _looks_like_placeholder(value)


def build_generative_client(cfg: AIConfig | None = None) -> GenerativeClient | None:
    """Return the configured client, or None when generation is unavailable."""
    cfg = cfg or load_ai_config()
    if not cfg.enabled:
        logger.info("generative_client_disabled")
        return None

    try:
        if cfg.provider == "gemini":
            if not _usable_key(cfg.gemini_api_key):
                logger.info("generative_client_unconfigured provider=gemini")
                return None
            from resume_ai.ai.providers.gemini_provider import GeminiProvider

            return GeminiProvider(model=cfg.model, api_key=cfg.gemini_api_key, timeout_s=cfg.timeout_s)

        if cfg.provider == "openai":
            if not _usable_key(cfg.openai_api_key):
                logger.info("generative_client_unconfigured provider=openai")
                return None
            from resume_ai.ai.providers.openai_provider import OpenAIProvider

            return OpenAIProvider(
                model=cfg.model,
                api_key=cfg.openai_api_key,
                base_url=cfg.openai_base_url,
                timeout_s=cfg.timeout_s,
            )
    except Exception as exc:  # noqa: BLE001 - scoring still works without a model
        logger.warning("generative_client_init_failed provider=%s: %s", cfg.provider, exc)
        return None

    logger.warning("generative_client_unknown_provider provider=%s", cfg.provider)
    return None
