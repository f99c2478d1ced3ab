"""Query matcher and fallback selector.

A query matches an engine once the user has typed any non-empty prefix of
"<trigger> " or "<name> ". The score is the typed fraction of that keyword,
so "gg ru" scores MAX_SCORE against trigger "gg" and "g" scores a third of it.
Both functions are pure: they read an engine snapshot and never mutate it.
"""

from collections.abc import Iterable

from src.contracts.websearch_v1 import SearchEngine
from src.websearch.actions import UrlOpener, build_action, open_url
from src.websearch.constants import EMPTY_TERM_PLACEHOLDER, MAX_SCORE
from src.websearch.models import Action, RankedAction


def keyword_score(prefix_length: int, keyword_length: int) -> float:
    return prefix_length / keyword_length * MAX_SCORE


def _source_index(query: str, lowered_length: int) -> int:
    """Index in `query` whose lower-cased head spans `lowered_length` characters.

    str.lower() may lengthen a character ("İ" becomes two), so lowered and
    original offsets differ.
    """
    for i in range(len(query) + 1):
        if len(query[:i].lower()) >= lowered_length:
            return i
    return len(query)


def match_engine(query: str, engine: SearchEngine) -> tuple[str, float] | None:
    """Return (search term, score) for the first keyword the query prefixes."""
    if not query:
        return None
    lowered = query.lower()
    for keyword in engine.keywords():
        prefix = lowered[: len(keyword)]
        if keyword.startswith(prefix):
            return query[_source_index(query, len(prefix)) :], keyword_score(
                len(prefix), len(keyword)
            )
    return None


def match(
    query: str,
    engines: Iterable[SearchEngine],
    opener: UrlOpener = open_url,
) -> list[RankedAction]:
    """Ranked trigger matches, at most one per engine, in engine order.

    Callers sort by score; see rank().
    """
    results: list[RankedAction] = []
    if not query:
        return results
    for engine in engines:
        hit = match_engine(query, engine)
        if hit is None:
            continue
        term, score = hit
        results.append(RankedAction(build_action(engine, term, opener), score))
    return results


def rank(results: Iterable[RankedAction]) -> list[RankedAction]:
    """Sort by score descending, keeping engine order among equal scores."""
    return sorted(results, key=lambda r: r.score, reverse=True)


def fallbacks(
    query: str,
    engines: Iterable[SearchEngine],
    opener: UrlOpener = open_url,
) -> list[Action]:
    """One action per fallback-enabled engine, searching the whole query."""
    if not query:
        return []
    # Never empty after the check above; "…" stands in if that check goes away
    term = query or EMPTY_TERM_PLACEHOLDER
    return [build_action(e, term, opener) for e in engines if e.fallback]
