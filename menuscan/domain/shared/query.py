"""
Backend query value objects.

Small, backend-agnostic filter and ordering primitives. Each adapter
translates them into its own query language (Appwrite query strings,
MongoDB filters, plain Python predicates).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Tuple, Union


@dataclass(frozen=True)
class Equal:
    """
    Match documents whose ``field`` equals any of ``values``.

    Example:
        >>> Equal.of("restaurantUserId", "user_1")
        Equal(field='restaurantUserId', values=('user_1',))
    """

    field: str
    values: Tuple[Any, ...]

    @classmethod
    def of(cls, field: str, *values: Any) -> "Equal":
        """Build from one or more values (a single sequence is flattened)."""
        if len(values) == 1 and isinstance(values[0], (list, tuple, set, frozenset)):
            return cls(field=field, values=tuple(values[0]))
        return cls(field=field, values=tuple(values))


@dataclass(frozen=True)
class OrderDesc:
    """Sort documents by ``field`` descending."""

    field: str


Query = Union[Equal, OrderDesc]
QueryList = Sequence[Query]
