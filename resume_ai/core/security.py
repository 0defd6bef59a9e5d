from __future__ import annotations

import secrets

from resume_ai.core.config import settings
from resume_ai.core.errors import UnauthorizedError


def check_api_key(x_api_key: str | None) -> None:
    if not settings.api_key:
        return
    if not x_api_key or not secrets.compare_digest(x_api_key, settings.api_key):
        raise UnauthorizedError("Please provide a valid API key to use the resume analyzer.")
