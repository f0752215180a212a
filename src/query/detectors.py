"""Keyword detectors for entity, status, name, sort, limit and aggregation.

Each detector is a pure function of the query text (and the detected entity where field names
depend on it). A detector returns `None` when its signal is absent.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.query.dictionaries import DEFAULT_VOCABULARY, Vocabulary
from src.query.schema import (
    Aggregation,
    AggregationType,
    EntityType,
    FilterOperator,
    QueryFilter,
    SortDirection,
    SortSpec,
)

EXACT_KEYWORD_CONFIDENCE = 0.95
PARTIAL_KEYWORD_CONFIDENCE = 0.8


@dataclass(frozen=True)
class EntityMatch:
    """The detected entity plus how confidently its keyword was matched."""

    entity: EntityType
    confidence: float
    keyword: str


def detect_entity(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> EntityMatch | None:
    """Detect the target entity by the longest keyword found anywhere in the text.

    Keywords are substring-matched. On equal length, the entity scanned first (table order) wins.
    A keyword at the start of the text or after a space scores 0.95; any other hit scores 0.8.
    """

    lowered = text.lower()
    best: tuple[EntityType, str] | None = None

    for entity, keywords in vocabulary.entity_keywords.items():
        for keyword in keywords:
            if keyword not in lowered:
                continue
            if best is None or len(keyword) > len(best[1]):
                best = (entity, keyword)

    if best is None:
        return None

    entity, keyword = best
    exact = lowered.startswith(keyword) or f" {keyword}" in lowered
    confidence = EXACT_KEYWORD_CONFIDENCE if exact else PARTIAL_KEYWORD_CONFIDENCE
    return EntityMatch(entity=entity, confidence=confidence, keyword=keyword)


def detect_status_filter(
        text: str,
        entity: EntityType,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> QueryFilter | None:
    """Map the first declared status synonym found in the text to a canonical status.

    Unlike entity detection this is first-match in declaration order, not longest-match.
    """

    synonyms = vocabulary.status_synonyms.get(entity)
    if not synonyms:
        return None

    lowered = text.lower()
    for phrase, status in synonyms:
        if phrase in lowered:
            return QueryFilter(field="status", operator=FilterOperator.eq, value=status)
    return None


_NAME_AFTER_CONNECTOR_RE = re.compile(
    r"\b(?i:for|from|client|named|by)\s+[\"']?"
    r"(?P<name>[A-Z][A-Za-z'\-]*(?:\s+[A-Z][A-Za-z'\-]*)?)"
    r"[\"']?"
)
_PROJECT_NAME_RE = re.compile(
    r"\bproject\s+[\"']?(?P<name>[^\"'\s]+)[\"']?(?:\s|$)",
    flags=re.IGNORECASE,
)


def detect_name_filter(
        text: str,
        entity: EntityType,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> QueryFilter | None:
    """Detect a proper-noun reference ("for Smith", "named Acme Corp", "project Kitchen")."""

    match = _NAME_AFTER_CONNECTOR_RE.search(text)
    if match:
        field = vocabulary.name_fields.get(entity)
        if field is not None:
            return QueryFilter(
                field=field,
                operator=FilterOperator.contains,
                value=match.group("name").strip().strip("'\""),
            )

    if entity != EntityType.projects:
        match = _PROJECT_NAME_RE.search(text)
        if match:
            return QueryFilter(
                field="projectName",
                operator=FilterOperator.contains,
                value=match.group("name").strip(),
            )

    return None


_SORT_BY_FIELD_RE = re.compile(
    r"\b(?:(?:sort(?:ed)?|order(?:ed)?)\s+by|sort(?:ed)?|order(?:ed)?|by)\s+(?P<word>\w+)"
)


def detect_sort(
        text: str,
        entity: EntityType,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> SortSpec | None:
    """Detect the requested ordering.

    Superlatives ("newest", "highest", ...) take priority over an explicit "sort by <field>".
    """

    lowered = text.lower()
    amount_field = vocabulary.amount_field(entity) or "amount"

    if any(w in lowered for w in ("newest", "most recent", "latest")):
        return SortSpec(field="createdAt", direction=SortDirection.desc)
    if any(w in lowered for w in ("oldest", "earliest")):
        return SortSpec(field="createdAt", direction=SortDirection.asc)
    if any(w in lowered for w in ("highest", "largest", "biggest")):
        return SortSpec(field=amount_field, direction=SortDirection.desc)
    if any(w in lowered for w in ("lowest", "smallest")):
        return SortSpec(field=amount_field, direction=SortDirection.asc)

    match = _SORT_BY_FIELD_RE.search(lowered)
    if match:
        word = match.group("word")
        field = vocabulary.sort_field_synonyms.get(word)
        if field is not None:
            direction = (
                SortDirection.asc if word in vocabulary.ascending_sort_words else SortDirection.desc
            )
            return SortSpec(field=field, direction=direction)

    return None


_LIMIT_RE = re.compile(r"\b(?:top|first|show|get|find)\s+(?P<n>\d+)")
_LEADING_NUMBER_RE = re.compile(r"^(?P<n>\d+)\s+\w+")


def _to_int(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        # Digit strings past the interpreter's int conversion limit.
        return None


def detect_limit(text: str) -> int | None:
    """Detect a result cap ("top 5", "first 10", "5 invoices")."""

    lowered = text.lower()

    match = _LIMIT_RE.search(lowered)
    if match:
        return _to_int(match.group("n"))

    match = _LEADING_NUMBER_RE.search(lowered)
    if match:
        return _to_int(match.group("n"))

    return None


def detect_aggregation(text: str) -> Aggregation | None:
    """Detect count/sum/average intent.

    Minimum and maximum are not detected; "smallest"/"largest" are read as sort order instead.
    """

    lowered = text.lower()

    if any(p in lowered for p in ("how many", "count of", "number of")):
        return Aggregation(type=AggregationType.count)
    if "total" in lowered and any(w in lowered for w in ("amount", "value", "sum")):
        return Aggregation(type=AggregationType.sum, field="amount")
    if "average" in lowered or "avg" in lowered:
        return Aggregation(type=AggregationType.avg, field="amount")

    return None
