"""
DynamoDB Adapter

A thin adapter over AWS DynamoDB built on boto3 and Pydantic: key descriptors
translated into key-condition queries, a small CRUD/query facade and table
lifecycle helpers driven by model metadata.
"""

from .config import DynamoDBConfig
from .exceptions import (
    BatchRetryExceededError,
    ConnectionError,
    DynamoDBAdapterError,
    EmptyKeysError,
    ItemNotFoundError,
    TooManyItemsError,
    ValidationError,
)
from .models import (
    # Key descriptors
    HashKey,
    KeyDescriptor,
    Operator,
    Order,
    QueryOptions,
    RangeKey,
    SecondaryIndexKey,
    # Requests and responses
    DynamoDBResponse,
    PagedRequest,
    PageKey,
    ScanFilter,
    # Table metadata
    IndexDefinition,
    TableMeta,
)
from .core import (
    DynamoDB,
    connect_dynamodb,
    create_dynamodb,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",

    # Exceptions
    "BatchRetryExceededError",
    "ConnectionError",
    "DynamoDBAdapterError",
    "EmptyKeysError",
    "ItemNotFoundError",
    "TooManyItemsError",
    "ValidationError",

    # Key descriptors
    "HashKey",
    "KeyDescriptor",
    "Operator",
    "Order",
    "QueryOptions",
    "RangeKey",
    "SecondaryIndexKey",

    # Requests and responses
    "DynamoDBResponse",
    "PagedRequest",
    "PageKey",
    "ScanFilter",

    # Table metadata
    "IndexDefinition",
    "TableMeta",

    # Facade
    "DynamoDB",
    "connect_dynamodb",
    "create_dynamodb",
]
