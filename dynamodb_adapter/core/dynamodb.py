"""
DynamoDB Operation Facade

A small CRUD/query surface over a boto3 DynamoDB resource:

- Reads: get, get_all, batch_get, count, paging, scan
- Writes: put, delete
- Table lifecycle: exists_table, create_table, create_table_with_secondary_index, delete_table

Reads translate a ``KeyDescriptor`` with ``build_query`` and hand the request
to boto3. Errors raised by boto3 (``botocore.exceptions.ClientError``) are not
caught, mapped or retried here; they reach the caller as raised.

Results are raw DynamoDB items unless a pydantic ``model`` class is passed, in
which case each item is validated into that model.

Example:
    db = create_dynamodb(DynamoDBConfig.for_local_development())
    db.put("users", User(id="u1", name="Ann"))
    user = db.get("users", KeyDescriptor.for_hash("id", "u1"), model=User)
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Type, TypeVar, Union

import boto3
from pydantic import BaseModel

from ..config import DynamoDBConfig
from ..exceptions import (
    BatchRetryExceededError,
    EmptyKeysError,
    ItemNotFoundError,
    TooManyItemsError,
    ValidationError,
)
from ..models import DynamoDBResponse, KeyDescriptor, PagedRequest, ScanFilter
from ..utils import convert_items, expand_scan_filters, model_to_item
from .connection import connect_dynamodb
from .query import build_item_key, build_query, encode_page_keys
from .schema import build_create_table_request

logger = logging.getLogger(__name__)

M = TypeVar('M', bound=BaseModel)

# DynamoDB accepts at most 100 keys per BatchGetItem request
BATCH_GET_LIMIT = 100

DEFAULT_BATCH_RETRIES = 5


def backoff_seconds(attempt: int) -> float:
    """Delay before retry ``attempt`` (1-based): 50ms doubling, capped at 1s."""
    return min(0.05 * (2.0 ** (attempt - 1)), 1.0)


def _chunked(items: List[Any], size: int) -> List[List[Any]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


def unique_by_hash(keys: Sequence[KeyDescriptor]) -> List[KeyDescriptor]:
    """Drop descriptors whose hash value was already seen, keeping first occurrences in order."""
    seen = set()
    unique = []
    for key in keys:
        if key.hash.value in seen:
            continue
        seen.add(key.hash.value)
        unique.append(key)
    return unique


class DynamoDB:
    """
    Facade over a DynamoDB service resource.

    Holds only the resource and the configuration, neither of which changes
    after construction; instances can be shared between threads.
    """

    def __init__(self, resource, config: Optional[DynamoDBConfig] = None):
        """Initialize the facade.

        Args:
            resource: boto3 DynamoDB ServiceResource
            config: Used for table name prefixing; names pass through unchanged when None
        """
        self.resource = resource
        self.config = config

    def table_name(self, name: str) -> str:
        """Resolve a table name through the configured prefix."""
        if self.config is None:
            return name
        return self.config.get_table_name(name)

    def table(self, name: str):
        """boto3 Table handle for a (prefixed) table name."""
        return self.resource.Table(self.table_name(name))

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, table_name: str, key: KeyDescriptor, model: Optional[Type[M]] = None) -> Union[M, Dict[str, Any]]:
        """
        Fetch exactly one item.

        Args:
            table_name: Table to read
            key: Hash key plus optional range or index condition
            model: Pydantic class to convert the item into

        Returns:
            The single matching item

        Raises:
            ItemNotFoundError: If nothing matches
            TooManyItemsError: If more than one item matches
        """
        table = self.table(table_name)
        request = build_query(key)
        # two items are enough to tell "one" from "many"
        request['Limit'] = 2
        response = table.query(**request)
        items = response.get('Items', [])
        if not items:
            raise ItemNotFoundError(table.name, build_item_key(key))
        if len(items) > 1:
            raise TooManyItemsError(table.name, build_item_key(key))
        return convert_items(items, model)[0]

    def get_all(self, table_name: str, key: KeyDescriptor, model: Optional[Type[M]] = None) -> List[Any]:
        """
        Fetch every item matching the key, following result pages.

        Returns:
            Matching items in key order; empty when nothing matches
        """
        table = self.table(table_name)
        return convert_items(self._query_all(table, build_query(key)), model)

    def batch_get(
        self,
        table_name: str,
        keys: Sequence[KeyDescriptor],
        model: Optional[Type[M]] = None,
        max_retries: int = DEFAULT_BATCH_RETRIES,
        sleep: Optional[Callable[[float], None]] = time.sleep
    ) -> List[Any]:
        """
        Fetch items for several keys of one table.

        Keys are de-duplicated by hash value (first occurrence wins). Attribute
        names for the whole batch come from the first key, so all keys must
        share the table's key schema.

        Keys DynamoDB returns as unprocessed are resubmitted up to
        ``max_retries`` times per 100-key chunk, with exponential backoff
        between attempts (``sleep=None`` resubmits without waiting).

        Raises:
            EmptyKeysError: If ``keys`` is empty; no request is made
            ValidationError: If ``max_retries`` is negative
            BatchRetryExceededError: If keys are still unprocessed after the last retry
        """
        if max_retries < 0:
            raise ValidationError("max_retries must be >= 0", errors={'max_retries': max_retries})

        full_name = self.table_name(table_name)
        if not keys:
            raise EmptyKeysError(full_name)

        unique_keys = unique_by_hash(keys)
        first = unique_keys[0]
        hash_name = first.hash.name
        range_name = first.range.name if first.range is not None else None

        item_keys = []
        for key in unique_keys:
            item_key = {hash_name: key.hash.value}
            if range_name is not None and key.range is not None:
                item_key[range_name] = key.range.value
            item_keys.append(item_key)

        logger.debug(f"BatchGet on {full_name}: {len(item_keys)} keys ({len(keys)} requested)")

        items: List[Dict[str, Any]] = []
        for chunk in _chunked(item_keys, BATCH_GET_LIMIT):
            pending_keys = chunk
            attempts = 0
            while pending_keys:
                response = self.resource.batch_get_item(RequestItems={full_name: {'Keys': pending_keys}})
                items.extend(response.get('Responses', {}).get(full_name, []))

                pending_keys = response.get('UnprocessedKeys', {}).get(full_name, {}).get('Keys') or []
                if pending_keys:
                    if attempts >= max_retries:
                        raise BatchRetryExceededError(full_name, len(pending_keys), attempts)
                    attempts += 1
                    delay = backoff_seconds(attempts)
                    logger.warning(
                        f"BatchGet on {full_name}: {len(pending_keys)} unprocessed keys, "
                        f"retry {attempts}/{max_retries} in {delay:.2f}s"
                    )
                    if sleep is not None:
                        sleep(delay)

        return convert_items(items, model)

    def count(self, table_name: str, key: KeyDescriptor) -> int:
        """Number of items matching the key, without fetching them."""
        table = self.table(table_name)
        request = build_query(key)
        request['Select'] = 'COUNT'

        total = 0
        while True:
            response = table.query(**request)
            total += response.get('Count', 0)
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return total
            request['ExclusiveStartKey'] = last_key

    def paging(
        self,
        table_name: str,
        key: KeyDescriptor,
        paged: PagedRequest,
        model: Optional[Type[M]] = None
    ) -> List[Any]:
        """
        Fetch one page of at most ``paged.limit`` items.

        The caller drives pagination: pass the key attributes of the last item
        of the previous page as ``paged.page_keys``, and stop once a page
        holds fewer than ``limit`` items.

        A backend response cut short by the 1 MB size cap is followed up with
        further queries, so a short page always means the data ran out.
        """
        table = self.table(table_name)
        request = build_query(key)

        start_key = encode_page_keys(paged.page_keys)
        if start_key:
            request['ExclusiveStartKey'] = start_key

        items: List[Dict[str, Any]] = []
        while True:
            request['Limit'] = paged.limit - len(items)
            response = table.query(**request)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if len(items) >= paged.limit or not last_key:
                return convert_items(items, model)
            logger.debug(f"Paging on {table.name}: {len(items)}/{paged.limit} items, continuing")
            request['ExclusiveStartKey'] = last_key

    def scan(self, table_name: str, *filters: ScanFilter, model: Optional[Type[M]] = None) -> List[Any]:
        """
        Read the whole table, optionally filtered.

        Meant for maintenance scripts, not application traffic. Filters are
        combined with AND; see ``ScanFilter`` for the placeholder syntax.
        """
        table = self.table(table_name)
        logger.warning(f"Scan on {table.name} - full table scans are for maintenance scripts only")

        request: Dict[str, Any] = {}
        expression, names, values = expand_scan_filters(filters)
        if expression:
            request['FilterExpression'] = expression
        if names:
            request['ExpressionAttributeNames'] = names
        if values:
            request['ExpressionAttributeValues'] = values

        items: List[Dict[str, Any]] = []
        while True:
            response = table.scan(**request)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return convert_items(items, model)
            request['ExclusiveStartKey'] = last_key

    def _query_all(self, table, request: Dict[str, Any]) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        while True:
            response = table.query(**request)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return items
            request['ExclusiveStartKey'] = last_key

    # =========================================================================
    # Writes
    # =========================================================================

    def put(self, table_name: str, item: Union[BaseModel, Dict[str, Any]]) -> DynamoDBResponse:
        """
        Write one item, replacing any item with the same primary key.

        Raises:
            ClientError: From DynamoDB, e.g. when a key attribute is blank
        """
        table = self.table(table_name)
        table.put_item(Item=model_to_item(item))
        logger.info(f"Put item in {table.name}")
        return DynamoDBResponse()

    def delete(self, table_name: str, key: KeyDescriptor) -> DynamoDBResponse:
        """Delete one item by hash (and range) key. Missing items are not an error."""
        table = self.table(table_name)
        item_key = build_item_key(key)
        table.delete_item(Key=item_key)
        logger.info(f"Deleted item from {table.name}: {item_key}")
        return DynamoDBResponse()

    # =========================================================================
    # Table lifecycle
    # =========================================================================

    def exists_table(self, name: str) -> bool:
        """Whether a table with this (prefixed) name exists."""
        full_name = self.table_name(name)
        for table in self.resource.tables.all():
            logger.debug(f"Found table {table.name}")
            if table.name == full_name:
                return True
        return False

    def create_table(self, name: str, entity: Any, wait: bool = False) -> None:
        """
        Create a table from an entity's Meta class.

        Args:
            name: Table name (prefixed through config)
            entity: Pydantic model class or instance with a ``Meta(TableMeta)``
            wait: Block until the table exists
        """
        self._create(build_create_table_request(self.table_name(name), entity), wait)

    def create_table_with_secondary_index(self, name: str, entity: Any, index_name: str, wait: bool = False) -> None:
        """
        Create a table whose local secondary index ``index_name`` projects only key attributes.
        """
        self._create(build_create_table_request(self.table_name(name), entity, keys_only_index=index_name), wait)

    def _create(self, request: Dict[str, Any], wait: bool) -> None:
        table = self.resource.create_table(**request)
        logger.info(f"Created table {request['TableName']}")
        if wait:
            table.wait_until_exists()

    def delete_table(self, name: str, wait: bool = False) -> None:
        """Delete a table."""
        table = self.table(name)
        table.delete()
        logger.info(f"Deleted table {table.name}")
        if wait:
            table.wait_until_not_exists()


def create_dynamodb(config: Optional[DynamoDBConfig] = None, session: Optional[boto3.Session] = None) -> DynamoDB:
    """
    Factory function to create a ready DynamoDB facade.

    Args:
        config: Connection configuration, read from the environment when None
        session: Optional existing boto3 session

    Returns:
        DynamoDB facade bound to a new service resource
    """
    if config is None:
        config = DynamoDBConfig.from_env()
    return DynamoDB(connect_dynamodb(config, session), config)
