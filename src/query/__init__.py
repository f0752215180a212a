"""Natural-language query interpretation.

The query layer converts a free-text English phrase ("invoices over $5000 due this week") into a
frozen `ParsedQuery` descriptor, and offers a validator and a describer for that descriptor. Nothing
here executes queries or performs I/O.
"""

from src.query.describer import describe
from src.query.parser import parse
from src.query.validator import validate

__all__ = ["describe", "parse", "validate"]
