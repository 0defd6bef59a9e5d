from functools import lru_cache

from .local_keywords import LocalKeywordTable
from .provider import KeywordTable


@lru_cache(maxsize=1)
def get_default_keyword_table() -> KeywordTable:
    return LocalKeywordTable()


__all__ = ["KeywordTable", "LocalKeywordTable", "get_default_keyword_table"]
