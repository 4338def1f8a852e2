"""
Request and response models for paging, scanning and mutations.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class PageKey(BaseModel):
    """One key attribute of the last item seen on the previous page."""

    key: str = Field(..., description="Attribute name")
    value: Any = Field(..., description="Attribute value, a number or a string")

    model_config = ConfigDict(frozen=True)


class PagedRequest(BaseModel):
    """Page size plus the cursor to resume from.

    An empty ``page_keys`` list starts from the beginning of the query.
    """

    limit: int = Field(..., gt=0, description="Maximum items in the page")
    page_keys: List[PageKey] = Field(default_factory=list, description="Cursor from the previous page")

    model_config = ConfigDict(frozen=True)


class ScanFilter(BaseModel):
    """
    Filter expression applied to a scan.

    The expression is passed to DynamoDB after placeholder expansion:
    ``?`` is replaced by ``value`` and ``'Name'`` or ``$`` by an attribute name
    (``$`` takes the name from ``value``). Supported DynamoDB functions include
    ``attribute_exists(path)``, ``attribute_not_exists(path)``,
    ``attribute_type(path, type)``, ``begins_with(path, substr)``,
    ``contains(path, operand)`` and ``size(path)``.

    Example:
        ScanFilter(expression="'Status' > ?", value=1)
        ScanFilter(expression="attribute_exists($)", value="Name")
    """

    expression: str
    value: Any = None

    model_config = ConfigDict(frozen=True)


class DynamoDBResponse(BaseModel):
    """Acknowledgment returned by put and delete. Carries no payload."""

    model_config = ConfigDict(frozen=True)
