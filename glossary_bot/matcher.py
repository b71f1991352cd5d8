"""
Match a free-text message against the glossary.

Matching is a two-phase cascade:

1. Term match: the whole message is looked up as a substring of the terms.
   Hits are ranked shortest term first. Any hit ends the search.
2. Keyword match: only when no term matched. The message is split into
   keywords and each definition is scored by how many of them it contains.

Either phase returns at most ``max_results`` definitions. The two edge cases
(no usable keywords, nothing found) produce fixed sentinel replies.
"""
import re
from dataclasses import dataclass, field
from enum import Enum

from glossary_bot.constants import (
    DEFAULT_MAX_RESULTS,
    NO_INFORMATION_REPLY,
    NO_KEYWORDS_REPLY,
)
from glossary_bot.knowledge import KnowledgeStore, fold
from glossary_bot.logger import logger

_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)


class MatchKind(str, Enum):
    EMPTY = "empty"
    TERM = "term"
    KEYWORD = "keyword"
    NO_KEYWORDS = "no_keywords"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class MatchResult:
    kind: MatchKind
    replies: list[str] = field(default_factory=list)

    @property
    def is_sentinel(self) -> bool:
        return self.kind in (MatchKind.NO_KEYWORDS, MatchKind.NO_MATCH)


def normalize(text: str | None) -> str:
    return (text or "").strip().casefold()


def extract_keywords(normalized: str) -> list[str]:
    """Drop punctuation, split on whitespace. Duplicates are removed, order kept."""
    cleaned = _NON_WORD.sub("", normalized)
    return list(dict.fromkeys(cleaned.split()))


def match_message(
    text: str | None, store: KnowledgeStore, max_results: int = DEFAULT_MAX_RESULTS
) -> MatchResult:
    normalized = normalize(text)
    if not normalized:
        return MatchResult(MatchKind.EMPTY)

    # Phase 1: the message is contained in a term. Shortest terms first,
    # so a term equal to the message is always kept
    term_matches = sorted(
        store.find_by_term_substring(normalized), key=lambda item: len(fold(item[0]))
    )
    if term_matches:
        logger.debug("Term match for %r: %s hits", normalized, len(term_matches))
        return MatchResult(
            MatchKind.TERM,
            [definition for _, definition in term_matches[:max_results]],
        )

    # Phase 2: keywords found in definitions
    keywords = extract_keywords(normalized)
    if not keywords:
        return MatchResult(MatchKind.NO_KEYWORDS, [NO_KEYWORDS_REPLY])

    scored = store.find_by_definition_keywords(keywords)
    # sorted() is stable, ties keep knowledge base order
    ranked = sorted(scored, key=lambda item: item[1], reverse=True)[:max_results]
    if not ranked:
        logger.debug("No match for keywords %s", keywords)
        return MatchResult(MatchKind.NO_MATCH, [NO_INFORMATION_REPLY])

    logger.debug("Keyword match for %s: %s", keywords, ranked)
    return MatchResult(
        MatchKind.KEYWORD,
        [store.get_definition(term) for term, _ in ranked],
    )
