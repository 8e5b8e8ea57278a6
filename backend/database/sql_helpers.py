"""
SQL fragment helpers.

sql_for_partial_update() turns a sparse field mapping into the SET clause of
an UPDATE statement. Column names come only from the caller-supplied
allow-list; values are always returned as bind parameters.

Usage:
    update = sql_for_partial_update(
        {"firstName": "Aliya", "email": "a@b.com"},
        {"firstName": "first_name", "email": "email"},
    )
    update.set_cols     # '"first_name"=$1, "email"=$2'
    update.values       # ['Aliya', 'a@b.com']
    update.next_index   # 3  -> use for WHERE username = $3
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping


@dataclass(frozen=True)
class PartialUpdate:
    """SET clause plus its ordered bind values."""

    set_cols: str
    values: List[Any] = field(default_factory=list)
    next_index: int = 1

    @property
    def placeholder(self) -> str:
        """Next unused positional placeholder, e.g. '$3'."""
        return f"${self.next_index}"


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
    start_index: int = 1,
) -> PartialUpdate:
    """
    Build the SET clause for a partial update.

    Args:
        data: Fields to change, keyed by external (camelCase) name
        js_to_sql: Allow-list mapping external names to column names
        start_index: Positional index of the first bind parameter

    Returns:
        PartialUpdate with set_cols, values and next_index

    Raises:
        ValueError: If data is empty or contains a field not in js_to_sql
    """
    if not data:
        raise ValueError("No data")

    unknown = [key for key in data if key not in js_to_sql]
    if unknown:
        raise ValueError(f"Unknown update fields: {', '.join(sorted(unknown))}")

    cols = []
    values = []
    for idx, (key, value) in enumerate(data.items(), start=start_index):
        cols.append(f'"{js_to_sql[key]}"=${idx}')
        values.append(value)

    return PartialUpdate(
        set_cols=", ".join(cols),
        values=values,
        next_index=start_index + len(values),
    )
