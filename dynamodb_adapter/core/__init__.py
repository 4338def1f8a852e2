"""
Core components for DynamoDB operations.

- DynamoDB: Operation facade over a boto3 DynamoDB resource
- Query translation from key descriptors
- CreateTable request building from entity metadata
- Connection bootstrap
"""

from .connection import build_client_config, connect_dynamodb
from .dynamodb import DynamoDB, create_dynamodb
from .query import build_item_key, build_query, encode_page_keys
from .schema import build_create_table_request

__all__ = [
    "DynamoDB",
    "create_dynamodb",
    "connect_dynamodb",
    "build_client_config",
    "build_query",
    "build_item_key",
    "encode_page_keys",
    "build_create_table_request",
]
