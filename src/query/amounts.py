"""Monetary amount parsing and amount-filter detection."""

from __future__ import annotations

import math
import re

from src.query.dictionaries import DEFAULT_VOCABULARY, Vocabulary
from src.query.schema import EntityType, FilterOperator, QueryFilter

_DOLLAR_RE = re.compile(r"\$\s*(?P<num>\d[\d,]*(?:\.\d+)?)(?P<k>\s*k\b)?", flags=re.IGNORECASE)
_THOUSANDS_RE = re.compile(r"(?P<num>\d+(?:\.\d+)?)\s*k\b", flags=re.IGNORECASE)
_DOLLARS_WORD_RE = re.compile(
    r"(?P<num>\d+(?:,\d{3})*(?:\.\d+)?)\s*dollars?\b",
    flags=re.IGNORECASE,
)

_AMOUNT = r"(?P<{name}>\$?\s*\d[\d,]*(?:\.\d+)?(?:\s*k\b)?)"

# Checked in this order; only the first matching comparator is used.
_COMPARATOR_PATTERNS: tuple[tuple[FilterOperator, re.Pattern[str]], ...] = (
    (
        FilterOperator.gt,
        re.compile(
            r"(?:\bover|\bmore than|\bgreater than|\babove|\bexceeding|>)\s*"
            + _AMOUNT.format(name="amount"),
            flags=re.IGNORECASE,
        ),
    ),
    (
        FilterOperator.lt,
        re.compile(
            r"(?:\bunder|\bless than|\bbelow|<)\s*" + _AMOUNT.format(name="amount"),
            flags=re.IGNORECASE,
        ),
    ),
    (
        FilterOperator.gte,
        re.compile(
            r"(?:\bat least|\bminimum|\bmin)\b\s*" + _AMOUNT.format(name="amount"),
            flags=re.IGNORECASE,
        ),
    ),
)

_BETWEEN_RE = re.compile(
    r"\bbetween\s*"
    + _AMOUNT.format(name="low")
    + r"\s*(?:and|to|-)\s*"
    + _AMOUNT.format(name="high"),
    flags=re.IGNORECASE,
)


def _to_number(raw: str, *, multiplier: float = 1.0) -> float | None:
    try:
        value = float(raw.replace(",", "")) * multiplier
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_amount(text: str) -> float | None:
    """Parse a monetary amount from text.

    Recognized forms (first match wins):
        - `$5,000`, `$5000`, `$5.50` (also `$5k`)
        - `5k` / `5K` (thousands)
        - `5000 dollars`, `5,000 dollars`

    Returns:
        The amount, or `None` when no form matches or the result is not a finite number.
    """

    value = text or ""

    match = _DOLLAR_RE.search(value)
    if match:
        multiplier = 1000.0 if match.group("k") else 1.0
        return _to_number(match.group("num"), multiplier=multiplier)

    match = _THOUSANDS_RE.search(value)
    if match:
        return _to_number(match.group("num"), multiplier=1000.0)

    match = _DOLLARS_WORD_RE.search(value)
    if match:
        return _to_number(match.group("num"))

    return None


def _parse_amount_token(token: str) -> float | None:
    # A bare number after a comparator ("over 5000") is read as dollars.
    token = token.strip()
    if not token.startswith("$"):
        token = f"${token}"
    return parse_amount(token)


def detect_amount_filter(
        text: str,
        entity: EntityType,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> QueryFilter | None:
    """Detect a monetary comparison ("over $5000", "between 1k and 5k").

    Only entities with a monetary field are considered. The comparison patterns are checked in
    priority order gt, lt, gte, between; the first one that matches decides the result.
    """

    field = vocabulary.amount_field(entity)
    if field is None:
        return None

    for operator, pattern in _COMPARATOR_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        amount = _parse_amount_token(match.group("amount"))
        if amount is None:
            return None
        return QueryFilter(field=field, operator=operator, value=amount)

    match = _BETWEEN_RE.search(text)
    if match:
        first = _parse_amount_token(match.group("low"))
        second = _parse_amount_token(match.group("high"))
        if first is None or second is None:
            return None
        return QueryFilter(
            field=field,
            operator=FilterOperator.between,
            value=min(first, second),
            value2=max(first, second),
        )

    return None
