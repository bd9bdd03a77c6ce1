"""
Error taxonomy for loading, cleaning and querying.

Row numbers are 1-based data-record numbers (the header row is not counted).
"""
from __future__ import annotations

from typing import Any, Optional


class SuperstoreError(Exception):
    """Base class for all pipeline errors."""


class _RowContextError(SuperstoreError):
    def __init__(
        self,
        message: str,
        row: Optional[int] = None,
        column: Optional[str] = None,
        value: Any = None,
    ) -> None:
        self.row = row
        self.column = column
        self.value = value
        parts = [message]
        if row is not None:
            parts.append(f"row {row}")
        if column is not None:
            parts.append(f"column '{column}'")
        if value is not None:
            parts.append(f"value {value!r}")
        super().__init__(" | ".join(parts))


class LoadError(_RowContextError):
    """Malformed record, bad typed field, duplicate key, or missing input."""


class ParseError(_RowContextError):
    """A date or currency field could not be normalised."""


class ReferentialError(SuperstoreError):
    """Returns reference order ids that do not exist in the order lines."""

    def __init__(self, message: str, order_ids: list[str]) -> None:
        self.order_ids = order_ids
        preview = ", ".join(order_ids[:5])
        more = f" (+{len(order_ids) - 5} more)" if len(order_ids) > 5 else ""
        super().__init__(f"{message}: {preview}{more}")


class DivisionUndefined(SuperstoreError):
    """A ratio whose denominator is zero."""


class UnknownQueryError(SuperstoreError, KeyError):
    """Requested query name is not in the catalog."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"Unknown query: {name!r}. Valid: {available}")

    def __str__(self) -> str:
        return self.args[0]
