"""Confidence scoring and user-facing ambiguity/suggestion notes."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from src.query.detectors import EntityMatch
from src.query.schema import Aggregation, DateRange, EntityType, QueryFilter

UNDETECTED_ENTITY_CONFIDENCE = 0.5
NO_SIGNAL_PENALTY = 0.7

ENTITY_DEFAULT_NOTE = "Could not determine what type of data you want. Defaulting to {entity}."
NO_FILTERS_NOTE = "No specific filters detected. Showing all records."
FILTER_SUGGESTION = 'Try adding filters like "overdue {entity}" or "over $1000"'
LIMIT_SUGGESTION = 'Add "top 10" or "first 5" to limit results'


@dataclass(frozen=True)
class Assessment:
    """Overall confidence plus the notes shown to the user."""

    confidence: float
    ambiguities: tuple[str, ...]
    suggestions: tuple[str, ...]


def score(
        *,
        entity: EntityType,
        entity_match: EntityMatch | None,
        filters: Sequence[QueryFilter],
        date_range: DateRange | None,
        aggregation: Aggregation | None,
        limit_detected: bool,
) -> Assessment:
    """Combine per-stage signals into a rounded confidence and clarification notes."""

    ambiguities: list[str] = []
    suggestions: list[str] = []

    if entity_match is None:
        confidence = UNDETECTED_ENTITY_CONFIDENCE
        ambiguities.append(ENTITY_DEFAULT_NOTE.format(entity=entity))
    else:
        confidence = entity_match.confidence

    if not filters and date_range is None and aggregation is None:
        confidence *= NO_SIGNAL_PENALTY
        ambiguities.append(NO_FILTERS_NOTE)

    if not filters:
        suggestions.append(FILTER_SUGGESTION.format(entity=entity))
    if not limit_detected:
        suggestions.append(LIMIT_SUGGESTION)

    confidence = min(1.0, max(0.0, round(confidence, 2)))
    return Assessment(
        confidence=confidence,
        ambiguities=tuple(ambiguities),
        suggestions=tuple(suggestions),
    )
