"""
Key Descriptor Models

A ``KeyDescriptor`` says how a read or delete addresses a table: always a hash
key, plus at most one of a range condition or a local secondary index
condition. ``QueryOptions`` carries the optional comparison operator and sort
order; unset fields resolve to ``Operator.EQUAL`` and ascending order.

Example:
    key = (
        KeyDescriptor.for_hash("ID", "user-1")
        .with_range("CreatedAt", "2024-01-01", operator=Operator.GREATER, order=Order.DESCENDING)
    )
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Operator(str, Enum):
    """Comparison applied to a range or secondary index key."""
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    LESS = "less"
    LESS_OR_EQUAL = "less_or_equal"
    GREATER = "greater"
    GREATER_OR_EQUAL = "greater_or_equal"
    BEGINS_WITH = "begins_with"
    BETWEEN = "between"


class Order(str, Enum):
    """Sort order of query results on the range key."""
    ASCENDING = "asc"
    DESCENDING = "desc"

    @property
    def scan_index_forward(self) -> bool:
        return self is Order.ASCENDING


class QueryOptions(BaseModel):
    """Optional operator and order for a key condition."""

    operator: Optional[Operator] = Field(None, description="Comparison operator, EQUAL when unset")
    order: Optional[Order] = Field(None, description="Result order, only applied when set")

    model_config = ConfigDict(frozen=True)

    def resolved_operator(self) -> Operator:
        return self.operator if self.operator is not None else Operator.EQUAL


def _options(operator: Optional[Operator], order: Optional[Order]) -> Optional[QueryOptions]:
    if operator is None and order is None:
        return None
    return QueryOptions(operator=operator, order=order)


class HashKey(BaseModel):
    """Partition key name and value."""

    name: str
    value: Any

    model_config = ConfigDict(frozen=True)


class RangeKey(BaseModel):
    """Range key condition on the table's sort key."""

    name: str
    value: Any = Field(..., description="Comparison value, a (low, high) pair for BETWEEN")
    options: Optional[QueryOptions] = None

    model_config = ConfigDict(frozen=True)


class SecondaryIndexKey(BaseModel):
    """Range condition on the sort key of a local secondary index."""

    index_name: str
    name: str
    value: Any = Field(..., description="Comparison value, a (low, high) pair for BETWEEN")
    options: Optional[QueryOptions] = None

    model_config = ConfigDict(frozen=True)


class KeyDescriptor(BaseModel):
    """
    Addresses items in one table.

    ``hash`` is mandatory. ``range`` and ``secondary_index`` are meant to be
    exclusive; when both are set the range condition wins and the index is
    ignored.
    """

    hash: HashKey
    range: Optional[RangeKey] = None
    secondary_index: Optional[SecondaryIndexKey] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def for_hash(cls, name: str, value: Any) -> 'KeyDescriptor':
        """Descriptor addressing a whole hash partition."""
        return cls(hash=HashKey(name=name, value=value))

    def with_range(
        self,
        name: str,
        value: Any,
        operator: Optional[Operator] = None,
        order: Optional[Order] = None,
    ) -> 'KeyDescriptor':
        """Return a copy with a range key condition."""
        return self.model_copy(update={
            'range': RangeKey(name=name, value=value, options=_options(operator, order))
        })

    def with_secondary_index(
        self,
        index_name: str,
        name: str,
        value: Any,
        operator: Optional[Operator] = None,
        order: Optional[Order] = None,
    ) -> 'KeyDescriptor':
        """Return a copy with a local secondary index condition."""
        return self.model_copy(update={
            'secondary_index': SecondaryIndexKey(
                index_name=index_name,
                name=name,
                value=value,
                options=_options(operator, order),
            )
        })

    @property
    def kind(self) -> str:
        """Which lookup path the translator takes: 'range', 'secondary_index' or 'hash'."""
        if self.range is not None:
            return "range"
        if self.secondary_index is not None:
            return "secondary_index"
        return "hash"
