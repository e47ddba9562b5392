"""Keyword search over known items, used by the translation exercise."""

import re

from trainchinese.domain.constants import MAX_SEARCH_RESULTS
from trainchinese.domain.models import Item, Pool

_WORD_SPLIT = re.compile(r"\W+")


def contains_exact_word(keyword: str, text: str) -> bool:
    """True if ``keyword`` is a whole word of ``text`` (case-insensitive)."""
    words = {w.lower() for w in _WORD_SPLIT.split(text)}
    return keyword.lower() in words


def parse_query(query: str) -> tuple[list[str], list[str]]:
    """
    Split ``"kw1+kw2;ctx1+ctx2"`` into translation and context keywords.

    The context part after ``;`` is optional.
    """
    translation_part, _, context_part = query.partition(";")
    translation_keywords = translation_part.split("+") if translation_part else []
    context_keywords = context_part.split("+") if context_part else []
    return translation_keywords, context_keywords


def find_items_by_keywords(
    query: str, pool: Pool, max_results: int = MAX_SEARCH_RESULTS
) -> list[Item]:
    """Known items matching every keyword, shortest translation first."""
    translation_keywords, context_keywords = parse_query(query)

    matches = [
        item
        for item in pool.known.values()
        if all(contains_exact_word(kw, item.translation) for kw in translation_keywords)
        and all(contains_exact_word(kw, item.context) for kw in context_keywords)
    ]
    matches.sort(key=lambda item: len(item.translation))
    return matches[:max_results]
