"""Render a parsed query back into an English confirmation sentence."""

from __future__ import annotations

from datetime import datetime

from src.query.schema import FilterOperator, ParsedQuery, QueryFilter, SortDirection

OPERATOR_PHRASES: dict[FilterOperator, str] = {
    FilterOperator.eq: "equals",
    FilterOperator.neq: "not equals",
    FilterOperator.gt: "greater than",
    FilterOperator.lt: "less than",
    FilterOperator.gte: "at least",
    FilterOperator.lte: "at most",
    FilterOperator.contains: "containing",
    FilterOperator.in_: "in",
    FilterOperator.not_in: "not in",
    FilterOperator.between: "between",
}


def format_value(value: object) -> str:
    """Format a filter value for display (whole floats lose their `.0`)."""

    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return format_date(value)
    if isinstance(value, list):
        return ", ".join(format_value(v) for v in value)
    return str(value)


def format_date(value: datetime) -> str:
    """US-style short date (`M/D/YYYY`)."""

    return f"{value.month}/{value.day}/{value.year}"


def _describe_filter(query_filter: QueryFilter) -> str:
    if query_filter.operator == FilterOperator.between:
        return (
            f"where {query_filter.field} is between {format_value(query_filter.value)} "
            f"and {format_value(query_filter.value2)}"
        )
    phrase = OPERATOR_PHRASES.get(query_filter.operator, str(query_filter.operator))
    return f'where {query_filter.field} {phrase} "{format_value(query_filter.value)}"'


def describe(query: ParsedQuery) -> str:
    """Describe a query as one sentence.

    Clauses are joined with commas in a fixed order: entity, filters, date range, sort, limit.
    """

    # Hand-built queries may lack an entity; the parser always sets one.
    parts = [f"Searching for {query.entity or 'records'}"]

    for query_filter in query.filters:
        parts.append(_describe_filter(query_filter))

    if query.date_range is not None:
        parts.append(
            f"from {format_date(query.date_range.start)} to {format_date(query.date_range.end)}"
        )

    if query.sort is not None:
        order = "newest first" if query.sort.direction == SortDirection.desc else "oldest first"
        parts.append(f"sorted by {query.sort.field} ({order})")

    if query.limit:
        parts.append(f"limited to {query.limit} results")

    return ", ".join(parts)
