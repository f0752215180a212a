"""Post-parse consistency checks.

The validator runs on an already-built `ParsedQuery` (or a decoded JSON object describing one),
right before the descriptor is handed to an executor. It never raises: every problem becomes a
structured, user-facing `QueryValidationError`.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from src.query.schema import ParsedQuery, parsed_query_from_obj

MIN_LIMIT = 1
MAX_LIMIT = 1000

# Two filters on one field can be a legitimate range; three or more are treated as a conflict.
CONFLICTING_FILTER_THRESHOLD = 3


@dataclass(frozen=True)
class QueryValidationError:
    """A single recoverable problem with a parsed query."""

    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: tuple[QueryValidationError, ...] = ()


def _schema_errors(exc: ValidationError) -> list[QueryValidationError]:
    errors: list[QueryValidationError] = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or None
        errors.append(QueryValidationError(code="schema", message=err["msg"], field=location))
    return errors


def validate(query: ParsedQuery | Mapping[str, Any], *, max_limit: int = MAX_LIMIT) -> ValidationResult:
    """Check a parsed query for internal consistency.

    Reports:
        - a missing entity,
        - 3 or more filters sharing the same field,
        - a limit outside `[1, max_limit]`.
    """

    if not isinstance(query, ParsedQuery):
        try:
            query = parsed_query_from_obj(query)
        except ValidationError as exc:
            return ValidationResult(valid=False, errors=tuple(_schema_errors(exc)))

    errors: list[QueryValidationError] = []

    if not query.entity:
        errors.append(QueryValidationError(code="missing_entity", message="No entity type specified"))

    field_counts = Counter(f.field for f in query.filters)
    for field, count in field_counts.items():
        if count >= CONFLICTING_FILTER_THRESHOLD:
            errors.append(
                QueryValidationError(
                    code="conflicting_filters",
                    message=f"multiple conflicting filters on field: {field}",
                    field=field,
                )
            )

    if query.limit < MIN_LIMIT or query.limit > max_limit:
        errors.append(
            QueryValidationError(
                code="limit_out_of_range",
                message=f"Limit must be between {MIN_LIMIT} and {max_limit}",
                field="limit",
            )
        )

    return ValidationResult(valid=not errors, errors=tuple(errors))
