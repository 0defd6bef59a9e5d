from __future__ import annotations

from typing import Protocol


class KeywordTable(Protocol):
    def role_keywords(self, role: str) -> list[str]:
        """Return skill keywords for a job role, or an empty list."""

    def role_ats_keywords(self, role: str) -> list[str]:
        """Return ATS-category keywords for a job role, or an empty list."""

    def company_keywords(self, company: str) -> list[str]:
        """Return keywords from a company profile, or an empty list."""
