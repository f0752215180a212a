"""Tests for entity, status, name, sort, limit and aggregation detectors."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from src.query.detectors import (
    detect_aggregation,
    detect_entity,
    detect_limit,
    detect_name_filter,
    detect_sort,
    detect_status_filter,
)
from src.query.dictionaries import DEFAULT_VOCABULARY, ENTITY_KEYWORDS, Vocabulary
from src.query.schema import AggregationType, EntityType, FilterOperator, SortDirection


@pytest.mark.parametrize(
    ("text", "entity"),
    [
        ("show overdue invoices", EntityType.invoices),
        ("unpaid bills", EntityType.invoices),
        ("active jobs", EntityType.projects),
        ("customers named Smith", EntityType.clients),
        ("open to-dos", EntityType.tasks),
        ("timesheets last week", EntityType.time_entries),
        ("receipts over $50", EntityType.expenses),
        ("pending quotes", EntityType.estimates),
        ("recent pictures", EntityType.photos),
        ("daily logs yesterday", EntityType.daily_logs),
        ("approved vendors", EntityType.subcontractors),
        ("meetings tomorrow", EntityType.schedule_events),
    ],
)
def test_entity_synonyms(text: str, entity: EntityType) -> None:
    match = detect_entity(text)
    assert match is not None
    assert match.entity == entity


def test_longest_keyword_wins_across_entities() -> None:
    match = detect_entity("subcontractor invoices")
    assert match is not None
    assert match.entity == EntityType.subcontractors
    assert match.keyword == "subcontractor"


def test_equal_length_tie_goes_to_first_table_entry() -> None:
    # "task" (tasks) and "cost" (expenses) are both 4 letters; tasks is scanned first.
    match = detect_entity("task cost")
    assert match is not None
    assert match.entity == EntityType.tasks


def test_keyword_confidence_depends_on_word_start() -> None:
    exact = detect_entity("overdue invoices")
    partial = detect_entity("myinvoices overdue")
    assert exact is not None and exact.confidence == 0.95
    assert partial is not None and partial.confidence == 0.8


def test_unknown_entity_returns_none() -> None:
    assert detect_entity("hello world") is None


def test_reduced_vocabulary_is_respected() -> None:
    vocabulary = Vocabulary(
        entity_keywords=MappingProxyType({EntityType.photos: ("snapshot",)}),
    )
    match = detect_entity("snapshot of invoices", vocabulary)
    assert match is not None
    assert match.entity == EntityType.photos


def test_vocabulary_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        ENTITY_KEYWORDS[EntityType.invoices] = ("x",)  # type: ignore[index]


def test_status_maps_synonym_to_canonical_value() -> None:
    f = detect_status_filter("show invoices past due", EntityType.invoices)
    assert f is not None
    assert (f.field, f.operator, f.value) == ("status", FilterOperator.eq, "overdue")


def test_status_uses_first_declared_synonym() -> None:
    # "late" is declared before "paid", so it wins even though "paid" is also present.
    f = detect_status_filter("late paid invoices", EntityType.invoices)
    assert f is not None
    assert f.value == "overdue"

    unpaid = detect_status_filter("unpaid invoices", EntityType.invoices)
    assert unpaid is not None
    assert unpaid.value == "sent"


def test_status_is_entity_specific() -> None:
    project = detect_status_filter("projects on hold", EntityType.projects)
    assert project is not None and project.value == "ON_HOLD"

    task = detect_status_filter("tasks in progress", EntityType.tasks)
    assert task is not None and task.value == "in_progress"

    client = detect_status_filter("inactive clients", EntityType.clients)
    assert client is not None and client.value == "inactive"


def test_status_absent_for_entity_without_table() -> None:
    assert detect_status_filter("paid expenses", EntityType.expenses) is None
    assert detect_status_filter("invoices", EntityType.invoices) is None


@pytest.mark.parametrize(
    ("text", "entity", "field", "value"),
    [
        ("projects for Smith", EntityType.projects, "clientName", "Smith"),
        ("invoices from Acme Corp", EntityType.invoices, "clientName", "Acme Corp"),
        ("clients named Johnson", EntityType.clients, "name", "Johnson"),
        ("tasks by John Doe", EntityType.tasks, "assigneeName", "John Doe"),
        ("invoices for project Kitchen", EntityType.invoices, "projectName", "Kitchen"),
        ("projects for McDonald", EntityType.projects, "clientName", "McDonald"),
        ("invoices for DeLuca Homes", EntityType.invoices, "clientName", "DeLuca Homes"),
        ("estimates for ACME", EntityType.estimates, "clientName", "ACME"),
        ("clients named 'O'Brien'", EntityType.clients, "name", "O'Brien"),
    ],
)
def test_name_filter(text: str, entity: EntityType, field: str, value: str) -> None:
    f = detect_name_filter(text, entity)
    assert f is not None
    assert (f.field, f.operator, f.value) == (field, FilterOperator.contains, value)


def test_name_requires_capitalized_word() -> None:
    assert detect_name_filter("invoices from last month", EntityType.invoices) is None


def test_project_pattern_skipped_for_projects() -> None:
    assert detect_name_filter("project Kitchen", EntityType.projects) is None


@pytest.mark.parametrize(
    ("text", "entity", "field", "direction"),
    [
        ("newest invoices", EntityType.invoices, "createdAt", SortDirection.desc),
        ("most recent tasks", EntityType.tasks, "createdAt", SortDirection.desc),
        ("oldest tasks", EntityType.tasks, "createdAt", SortDirection.asc),
        ("highest projects", EntityType.projects, "budget", SortDirection.desc),
        ("biggest invoices", EntityType.invoices, "amount", SortDirection.desc),
        ("smallest expenses", EntityType.expenses, "amount", SortDirection.asc),
        ("invoices sorted by amount", EntityType.invoices, "amount", SortDirection.desc),
        ("invoices order by due", EntityType.invoices, "dueDate", SortDirection.desc),
        ("clients by name", EntityType.clients, "name", SortDirection.asc),
        ("tasks sort status", EntityType.tasks, "status", SortDirection.asc),
    ],
)
def test_sort(text: str, entity: EntityType, field: str, direction: SortDirection) -> None:
    sort = detect_sort(text, entity)
    assert sort is not None
    assert (sort.field, sort.direction) == (field, direction)


def test_sort_unknown_field_is_none() -> None:
    assert detect_sort("tasks by John", EntityType.tasks) is None
    assert detect_sort("invoices", EntityType.invoices) is None


@pytest.mark.parametrize(
    ("text", "limit"),
    [
        ("top 5 newest projects", 5),
        ("first 10 invoices", 10),
        ("show 3 clients", 3),
        ("get 7 tasks", 7),
        ("find 2 estimates", 2),
        ("5 invoices", 5),
        ("invoices", None),
        ("invoices over $5000", None),
    ],
)
def test_limit(text: str, limit: int | None) -> None:
    assert detect_limit(text) == limit


def test_aggregation() -> None:
    count = detect_aggregation("how many overdue invoices")
    assert count is not None and count.type == AggregationType.count and count.field is None

    total = detect_aggregation("total amount of invoices this month")
    assert total is not None and (total.type, total.field) == (AggregationType.sum, "amount")

    avg = detect_aggregation("average expense")
    assert avg is not None and (avg.type, avg.field) == (AggregationType.avg, "amount")

    assert detect_aggregation("total invoices") is None
    assert detect_aggregation("invoices") is None


def test_default_vocabulary_covers_every_entity() -> None:
    assert set(DEFAULT_VOCABULARY.entity_keywords) == set(EntityType)
    assert set(DEFAULT_VOCABULARY.date_fields) == set(EntityType)


def test_aggregation_ignores_min_and_max_words() -> None:
    assert detect_aggregation("smallest invoice amount") is None
    assert detect_aggregation("largest expense") is None
