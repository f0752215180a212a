"""Text normalization for deterministic query parsing."""

from __future__ import annotations

import re

_MULTISPACE_RE = re.compile(r"\s+")


def clean_text(text: str | None) -> str:
    """Trim the raw query and collapse inner whitespace, preserving case.

    Case is kept because the name detector relies on capitalized words.
    """

    value = (text or "").strip()

    # Normalize common unicode dashes and quotes to their ASCII forms.
    value = value.replace("—", "-").replace("–", "-")
    value = value.replace("‘", "'").replace("’", "'")
    value = value.replace("“", '"').replace("”", '"')

    return _MULTISPACE_RE.sub(" ", value)

