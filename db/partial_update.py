"""
db/partial_update.py
--------------------
Turns a sparse field mapping into the SET clause of an UPDATE.

    >>> upd = sql_for_partial_update({"firstName": "Aliya", "bio": "hi"},
    ...                              {"firstName": "first_name"})
    >>> upd.assignments
    ['"first_name"=%s', '"bio"=%s']
    >>> upd.values
    ['Aliya', 'hi']

Values are never interpolated: every assignment uses a positional
placeholder, so the caller appends its own parameters (usually the
WHERE key) after ``upd.values``.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from errors import ValidationError


@dataclass(frozen=True)
class PartialUpdate:
    """
    Result of ``sql_for_partial_update``.

    Attributes:
        assignments: ``"column"=%s`` strings, in the input's order.
        values: The values bound to those placeholders, same order.
    """
    assignments: list[str]
    values: list[Any]

    @property
    def set_clause(self) -> str:
        return ", ".join(self.assignments)


def quote_identifier(name: str) -> str:
    """Double-quote a column name, doubling any embedded quote."""
    return '"' + name.replace('"', '""') + '"'


def sql_for_partial_update(
    fields: Mapping[str, Any],
    name_translation: Optional[Mapping[str, str]] = None,
) -> PartialUpdate:
    """
    Build the SET assignments and aligned values for a partial update.

    Args:
        fields: Logical field name -> new value. Must not be empty.
        name_translation: Logical name -> column name for fields whose
            column differs; any other name is used as the column as-is.

    Returns:
        A PartialUpdate.

    Raises:
        ValidationError: If ``fields`` is empty, or two names map to
            the same column.
    """
    if not fields:
        raise ValidationError("No data")

    translation = name_translation or {}
    columns = [translation.get(name, name) for name in fields]
    repeated = sorted({c for c in columns if columns.count(c) > 1})
    if repeated:
        raise ValidationError(f"Field(s) given more than once: {', '.join(repeated)}")

    assignments = [f"{quote_identifier(column)}=%s" for column in columns]
    return PartialUpdate(assignments=assignments, values=list(fields.values()))
