"""Parsed query schema (Pydantic models).

This schema is the contract between the natural-language parser and whatever executes the query.
Every model is frozen: a `ParsedQuery` is produced once per parse and never mutated afterwards.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EntityType(StrEnum):
    """Business object types a query can target."""

    invoices = "invoices"
    projects = "projects"
    clients = "clients"
    tasks = "tasks"
    time_entries = "timeEntries"
    expenses = "expenses"
    estimates = "estimates"
    photos = "photos"
    daily_logs = "dailyLogs"
    subcontractors = "subcontractors"
    schedule_events = "scheduleEvents"


class FilterOperator(StrEnum):
    """Supported filter comparison operators."""

    eq = "eq"
    neq = "neq"
    gt = "gt"
    lt = "lt"
    gte = "gte"
    lte = "lte"
    contains = "contains"
    in_ = "in"
    not_in = "not_in"
    between = "between"


class SortDirection(StrEnum):
    asc = "asc"
    desc = "desc"


class AggregationType(StrEnum):
    count = "count"
    sum = "sum"
    avg = "avg"
    min = "min"
    max = "max"


FilterValue = str | int | float | bool | datetime | list[str]


class QueryFilter(BaseModel):
    """One field/operator/value constraint.

    `value2` holds the upper bound of a `between` filter and must be absent otherwise.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    field: str = Field(min_length=1)
    operator: FilterOperator
    value: FilterValue
    value2: int | float | datetime | None = None

    @model_validator(mode="after")
    def validate_bounds(self) -> QueryFilter:
        """Validate that `between` filters carry an ordered `(value, value2)` pair."""

        if self.operator == FilterOperator.between:
            if self.value2 is None:
                raise ValueError("value2 is required for operator=between")
            if isinstance(self.value, (str, bool, list)):
                raise ValueError("between requires a numeric or datetime lower bound")
            if isinstance(self.value, datetime) != isinstance(self.value2, datetime):
                raise ValueError("between bounds must be both numbers or both datetimes")
            if self.value > self.value2:
                raise ValueError("value must be <= value2 for operator=between")
        elif self.value2 is not None:
            raise ValueError("value2 is only allowed for operator=between")
        return self


class SortSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    field: str = Field(min_length=1)
    direction: SortDirection


class DateRange(BaseModel):
    """An inclusive instant range applied to one date field.

    Both bounds are inclusive; a calendar day ends at 23:59:59.999.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    field: str = Field(min_length=1)
    start: datetime
    end: datetime

    @model_validator(mode="after")
    def validate_range(self) -> DateRange:
        """Validate that the range is well-formed (`start <= end`)."""

        if self.start > self.end:
            raise ValueError("start must be <= end")
        return self


class Aggregation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: AggregationType
    field: str | None = None


class ParsedQuery(BaseModel):
    """A structured query descriptor produced from free text.

    `limit` is intentionally not range-checked here: out-of-range limits are reported by the
    validator as user-facing errors instead of failing construction.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    original_text: str = ""
    entity: EntityType | None = None
    filters: tuple[QueryFilter, ...] = ()
    sort: SortSpec | None = None
    limit: int = 25
    date_range: DateRange | None = None
    aggregation: Aggregation | None = None
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    ambiguities: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()


def parsed_query_from_obj(obj: Any) -> ParsedQuery:
    """Validate and build a ParsedQuery from an arbitrary decoded JSON object."""

    return ParsedQuery.model_validate(obj)
