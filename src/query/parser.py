"""Query parser orchestration.

`parse` runs every detector stage over the same cleaned text and assembles a `ParsedQuery`. It never
raises: weak or absent signal degrades into a defaulted entity, fewer filters, a lower confidence and
populated ambiguity/suggestion notes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from src.query.amounts import detect_amount_filter
from src.query.dates import detect_date_range
from src.query.detectors import (
    detect_aggregation,
    detect_entity,
    detect_limit,
    detect_name_filter,
    detect_sort,
    detect_status_filter,
)
from src.query.dictionaries import DEFAULT_VOCABULARY, Vocabulary
from src.query.normalize import clean_text
from src.query.schema import EntityType, ParsedQuery, QueryFilter
from src.query.scoring import score

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_ENTITY = EntityType.invoices
DEFAULT_LIMIT = 25


def system_clock() -> datetime:
    """Current local time as an aware datetime."""

    return datetime.now().astimezone()


def parse(
        text: str | None,
        *,
        clock: Clock | None = None,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        default_limit: int = DEFAULT_LIMIT,
) -> ParsedQuery:
    """Parse free text into a structured query descriptor.

    The clock is read exactly once so every date computed within one call shares the same instant.

    Args:
        text: The raw user query.
        clock: Zero-argument provider of "now"; defaults to `system_clock`.
        vocabulary: Keyword tables used by the detectors.
        default_limit: Limit used when the text does not request one.
    """

    now = (clock or system_clock)()
    original_text = (text or "").strip()
    cleaned = clean_text(original_text)

    entity_match = detect_entity(cleaned, vocabulary)
    entity = entity_match.entity if entity_match is not None else DEFAULT_ENTITY

    filters: list[QueryFilter] = []
    for found in (
            detect_status_filter(cleaned, entity, vocabulary),
            detect_amount_filter(cleaned, entity, vocabulary),
            detect_name_filter(cleaned, entity, vocabulary),
    ):
        if found is not None:
            filters.append(found)

    date_range = detect_date_range(cleaned, entity, now=now, vocabulary=vocabulary)
    sort = detect_sort(cleaned, entity, vocabulary)
    limit = detect_limit(cleaned)
    aggregation = detect_aggregation(cleaned)

    assessment = score(
        entity=entity,
        entity_match=entity_match,
        filters=filters,
        date_range=date_range,
        aggregation=aggregation,
        limit_detected=limit is not None,
    )

    query = ParsedQuery(
        original_text=original_text,
        entity=entity,
        filters=tuple(filters),
        sort=sort,
        limit=limit if limit is not None else default_limit,
        date_range=date_range,
        aggregation=aggregation,
        confidence=assessment.confidence,
        ambiguities=assessment.ambiguities,
        suggestions=assessment.suggestions,
    )

    logger.debug(
        "parsed entity=%s filters=%d date_range=%s confidence=%.2f",
        query.entity,
        len(query.filters),
        query.date_range is not None,
        query.confidence,
    )
    return query
