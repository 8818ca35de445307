# =============================================================================
# core/search.py  —  Relevance Filter (client-side fuzzy search)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Narrows a list the API already returned down to the records that look
#   like the user's search text, best match first.
#
# SCORING:
#   Each record gets a distance between 0.0 (perfect) and 1.0 (nothing in
#   common).  The distance is 1 - similarity/100, where similarity is the
#   best rapidfuzz score of the query against any of the named fields:
#   partial_ratio when the field is at least as long as the query (the
#   query is the pattern), plain ratio when it is shorter.  Both sides go
#   through utils.default_process first.  Records further away than
#   SEARCH_THRESHOLD are dropped.
#
#   The threshold is the same for every tool.
# =============================================================================

from typing import Optional, Sequence, TypeVar

from rapidfuzz import fuzz, utils

SEARCH_THRESHOLD = 0.3

T = TypeVar("T")


def _field_text(record: object, field_name: str) -> str:
    value = getattr(record, field_name, None)
    if value is None:
        return ""
    return str(value)


def _similarity(query: str, text: str) -> float:
    # partial_ratio slides the shorter string over the longer one, so a
    # field shorter than the query must match it as a whole
    if len(text) >= len(query):
        return fuzz.partial_ratio(query, text)
    return fuzz.ratio(query, text)


def match_distance(record: object, query: str, fields: Sequence[str]) -> float:
    """Distance (0.0 = exact) between ``query`` and the closest field."""
    query = utils.default_process(query)
    best = 0.0
    for field_name in fields:
        text = utils.default_process(_field_text(record, field_name))
        if not text:
            continue
        best = max(best, _similarity(query, text))
    return 1.0 - best / 100.0


def fuzzy_search(records: Sequence[T], query: Optional[str], fields: Sequence[str]) -> list[T]:
    """Filter and re-rank ``records`` by how well they match ``query``.

    Args:
        records: Already-fetched records (dataclasses from core/models.py).
        query: The user's search text.  Empty, blank or None returns
            ``records`` untouched, in their original order.
        fields: Attribute names to match against.  Missing attributes count
            as empty text.

    Returns:
        Matching records, closest first.  Ties keep their original order.
    """
    if not query or not utils.default_process(query):
        return list(records)

    scored = []
    for record in records:
        distance = match_distance(record, query, fields)
        if distance <= SEARCH_THRESHOLD:
            scored.append((distance, record))

    # sorted() is stable, so equal distances keep input order
    scored = sorted(scored, key=lambda pair: pair[0])
    return [record for _, record in scored]
