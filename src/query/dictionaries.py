"""English keyword tables for entities, statuses and fields.

These tables drive every heuristic detector and must remain small, deterministic and immutable.
They are bundled into a frozen `Vocabulary` that detectors receive as a parameter, so a test can
swap in a reduced vocabulary without touching module state.

Table order matters:
    - entity keywords are scanned in `EntityType` declaration order; on equal keyword length the
      entity scanned first wins,
    - status synonyms are matched first-declared-first, so longer phrases that contain a shorter
      one (e.g. "unpaid" vs "paid") must be declared before it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from src.query.schema import EntityType

ENTITY_KEYWORDS: Mapping[EntityType, tuple[str, ...]] = MappingProxyType({
    EntityType.invoices: ("invoice", "invoices", "bill", "bills", "payment", "payments"),
    EntityType.projects: ("project", "projects", "job", "jobs"),
    EntityType.clients: ("client", "clients", "customer", "customers", "homeowner", "homeowners"),
    EntityType.tasks: ("task", "tasks", "todo", "todos", "to-do", "to-dos", "item", "items"),
    EntityType.time_entries: (
        "time",
        "hours",
        "timesheet",
        "timesheets",
        "time entry",
        "time entries",
        "worked",
    ),
    EntityType.expenses: ("expense", "expenses", "cost", "costs", "spending", "receipt", "receipts"),
    EntityType.estimates: (
        "estimate",
        "estimates",
        "quote",
        "quotes",
        "proposal",
        "proposals",
        "bid",
        "bids",
    ),
    EntityType.photos: ("photo", "photos", "picture", "pictures", "image", "images"),
    EntityType.daily_logs: (
        "daily log",
        "daily logs",
        "log",
        "logs",
        "report",
        "reports",
        "journal",
    ),
    EntityType.subcontractors: (
        "subcontractor",
        "subcontractors",
        "sub",
        "subs",
        "vendor",
        "vendors",
    ),
    EntityType.schedule_events: (
        "event",
        "events",
        "schedule",
        "schedules",
        "appointment",
        "appointments",
        "meeting",
        "meetings",
    ),
})

STATUS_SYNONYMS: Mapping[EntityType, tuple[tuple[str, str], ...]] = MappingProxyType({
    EntityType.invoices: (
        ("overdue", "overdue"),
        ("past due", "overdue"),
        ("late", "overdue"),
        ("unpaid", "sent"),
        ("outstanding", "sent"),
        ("pending", "draft"),
        ("paid", "paid"),
        ("draft", "draft"),
    ),
    EntityType.projects: (
        ("active", "ACTIVE"),
        ("ongoing", "ACTIVE"),
        ("in progress", "ACTIVE"),
        ("completed", "COMPLETED"),
        ("finished", "COMPLETED"),
        ("done", "COMPLETED"),
        ("on hold", "ON_HOLD"),
        ("paused", "ON_HOLD"),
        ("cancelled", "CANCELLED"),
    ),
    EntityType.tasks: (
        ("open", "open"),
        ("pending", "pending"),
        ("in progress", "in_progress"),
        ("completed", "completed"),
        ("done", "completed"),
        ("overdue", "overdue"),
    ),
    EntityType.estimates: (
        ("pending", "pending"),
        ("sent", "sent"),
        ("accepted", "accepted"),
        ("approved", "accepted"),
        ("declined", "declined"),
        ("rejected", "declined"),
        ("draft", "draft"),
    ),
    EntityType.clients: (
        ("inactive", "inactive"),
        ("active", "active"),
    ),
    EntityType.subcontractors: (
        ("active", "ACTIVE"),
        ("approved", "APPROVED"),
        ("pending", "PENDING"),
    ),
})

AMOUNT_FIELDS: Mapping[EntityType, str] = MappingProxyType({
    EntityType.invoices: "amount",
    EntityType.expenses: "amount",
    EntityType.estimates: "amount",
    EntityType.projects: "budget",
})

DATE_FIELDS: Mapping[EntityType, str] = MappingProxyType({
    EntityType.invoices: "dueDate",
    EntityType.projects: "startDate",
    EntityType.clients: "createdAt",
    EntityType.tasks: "dueDate",
    EntityType.time_entries: "date",
    EntityType.expenses: "date",
    EntityType.estimates: "createdAt",
    EntityType.photos: "uploadedAt",
    EntityType.daily_logs: "date",
    EntityType.subcontractors: "createdAt",
    EntityType.schedule_events: "startTime",
})

NAME_FIELDS: Mapping[EntityType, str] = MappingProxyType({
    EntityType.projects: "clientName",
    EntityType.invoices: "clientName",
    EntityType.estimates: "clientName",
    EntityType.clients: "name",
    EntityType.tasks: "assigneeName",
    EntityType.time_entries: "assigneeName",
})

SORT_FIELD_SYNONYMS: Mapping[str, str] = MappingProxyType({
    "date": "createdAt",
    "amount": "amount",
    "name": "name",
    "status": "status",
    "due": "dueDate",
    "budget": "budget",
    "created": "createdAt",
    "updated": "updatedAt",
})

# Sort words whose natural reading is alphabetical rather than "biggest/newest first".
ASCENDING_SORT_WORDS: frozenset[str] = frozenset({"name", "status"})


@dataclass(frozen=True)
class Vocabulary:
    """All lookup tables consumed by the detectors."""

    entity_keywords: Mapping[EntityType, tuple[str, ...]] = field(
        default_factory=lambda: ENTITY_KEYWORDS
    )
    status_synonyms: Mapping[EntityType, tuple[tuple[str, str], ...]] = field(
        default_factory=lambda: STATUS_SYNONYMS
    )
    amount_fields: Mapping[EntityType, str] = field(default_factory=lambda: AMOUNT_FIELDS)
    date_fields: Mapping[EntityType, str] = field(default_factory=lambda: DATE_FIELDS)
    name_fields: Mapping[EntityType, str] = field(default_factory=lambda: NAME_FIELDS)
    sort_field_synonyms: Mapping[str, str] = field(default_factory=lambda: SORT_FIELD_SYNONYMS)
    ascending_sort_words: frozenset[str] = ASCENDING_SORT_WORDS

    def amount_field(self, entity: EntityType) -> str | None:
        """Monetary field for the entity, or `None` if the entity has no amount."""

        return self.amount_fields.get(entity)

    def date_field(self, entity: EntityType) -> str:
        return self.date_fields.get(entity, "createdAt")


DEFAULT_VOCABULARY = Vocabulary()
