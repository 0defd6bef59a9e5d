from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any


def _normalize_name(raw: str) -> str:
    return re.sub(r"\s+", " ", (raw or "").strip().lower())


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if isinstance(item, str) and item.strip()]


class LocalKeywordTable:
    def __init__(self, skill_maps_path: str | Path | None = None) -> None:
        path = Path(skill_maps_path) if skill_maps_path else Path(__file__).with_name("skill_maps.json")
        raw = self._load(path)
        self._roles = {_normalize_name(key): value for key, value in (raw.get("roles") or {}).items()}
        self._companies = {_normalize_name(key): value for key, value in (raw.get("companies") or {}).items()}
        self._role_aliases = {
            _normalize_name(key): _normalize_name(value) for key, value in (raw.get("role_aliases") or {}).items()
        }

    @staticmethod
    def _load(path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid keyword table '{path}': expected a JSON object.")
        return raw

    def _role_entry(self, role: str) -> dict[str, Any]:
        key = _normalize_name(role)
        key = self._role_aliases.get(key, key)
        entry = self._roles.get(key)
        return entry if isinstance(entry, dict) else {}

    def role_keywords(self, role: str) -> list[str]:
        return _string_list(self._role_entry(role).get("keywords"))

    def role_ats_keywords(self, role: str) -> list[str]:
        return _string_list(self._role_entry(role).get("ats_keywords"))

    def company_keywords(self, company: str) -> list[str]:
        entry = self._companies.get(_normalize_name(company))
        if not isinstance(entry, dict):
            return []
        return _string_list(entry.get("keywords"))
