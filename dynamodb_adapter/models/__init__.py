# Key descriptor models
from .keys import (
    HashKey,
    KeyDescriptor,
    Operator,
    Order,
    QueryOptions,
    RangeKey,
    SecondaryIndexKey,
)

# Paging, scan and response models
from .requests import (
    DynamoDBResponse,
    PagedRequest,
    PageKey,
    ScanFilter,
)

# Table metadata
from .table_meta import (
    PROJECTION_ALL,
    PROJECTION_KEYS_ONLY,
    IndexDefinition,
    TableMeta,
)

__all__ = [
    # Keys
    "HashKey",
    "KeyDescriptor",
    "Operator",
    "Order",
    "QueryOptions",
    "RangeKey",
    "SecondaryIndexKey",

    # Requests
    "DynamoDBResponse",
    "PagedRequest",
    "PageKey",
    "ScanFilter",

    # Table metadata
    "PROJECTION_ALL",
    "PROJECTION_KEYS_ONLY",
    "IndexDefinition",
    "TableMeta",
]
