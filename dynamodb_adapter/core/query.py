"""
Query Translator

Turns a ``KeyDescriptor`` into keyword arguments for boto3 ``Table.query``.

Lookup paths, checked in this order:
1. Range condition on the table's sort key
2. Condition on a local secondary index (sets ``IndexName``)
3. Hash-only lookup of the whole partition

``ScanIndexForward`` is only present when the caller set an order explicitly;
a query without it is not treated as the same request as an ascending one.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence

from boto3.dynamodb.conditions import ConditionBase, Key, NotEquals

from ..exceptions import ValidationError
from ..models import KeyDescriptor, Operator, PageKey, QueryOptions

logger = logging.getLogger(__name__)


def _between(key: Key, value: Any) -> ConditionBase:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 2:
        raise ValidationError(
            f"BETWEEN on '{key.name}' requires a (low, high) pair, got {value!r}",
            errors={'key': key.name}
        )
    low, high = value
    return key.between(low, high)


_KEY_CONDITIONS: Dict[Operator, Callable[[Key, Any], ConditionBase]] = {
    Operator.EQUAL: lambda key, value: key.eq(value),
    Operator.NOT_EQUAL: lambda key, value: NotEquals(key, value),
    Operator.LESS: lambda key, value: key.lt(value),
    Operator.LESS_OR_EQUAL: lambda key, value: key.lte(value),
    Operator.GREATER: lambda key, value: key.gt(value),
    Operator.GREATER_OR_EQUAL: lambda key, value: key.gte(value),
    Operator.BEGINS_WITH: lambda key, value: key.begins_with(value),
    Operator.BETWEEN: _between,
}


def resolve_operator(options: Optional[QueryOptions]) -> Operator:
    """Operator from options, EQUAL when options or operator are unset."""
    if options is None:
        return Operator.EQUAL
    return options.resolved_operator()


def key_condition(name: str, operator: Operator, value: Any) -> ConditionBase:
    """Build a key condition for one sort key attribute.

    NOT_EQUAL is built as ``<>``; DynamoDB does not accept it in key
    conditions and will reject the query.
    """
    return _KEY_CONDITIONS[operator](Key(name), value)


def _apply_condition(
    request: Dict[str, Any],
    name: str,
    value: Any,
    options: Optional[QueryOptions],
) -> Dict[str, Any]:
    operator = resolve_operator(options)
    request['KeyConditionExpression'] = request['KeyConditionExpression'] & key_condition(name, operator, value)

    if options is not None and options.order is not None:
        request['ScanIndexForward'] = options.order.scan_index_forward

    return request


def build_query(key: KeyDescriptor) -> Dict[str, Any]:
    """
    Translate a key descriptor into ``Table.query`` keyword arguments.

    Args:
        key: Hash key plus optional range or secondary index condition

    Returns:
        Dict with ``KeyConditionExpression`` and, depending on the descriptor,
        ``IndexName`` and ``ScanIndexForward``

    Example:
        request = build_query(
            KeyDescriptor.for_hash('ID', 'a').with_range('CreatedAt', '2024', Operator.GREATER)
        )
        # KeyConditionExpression: Key('ID').eq('a') & Key('CreatedAt').gt('2024')
        table.query(**request)
    """
    request: Dict[str, Any] = {
        'KeyConditionExpression': Key(key.hash.name).eq(key.hash.value)
    }

    if key.range is not None:
        logger.debug(f"Range lookup on {key.hash.name}/{key.range.name}")
        return _apply_condition(request, key.range.name, key.range.value, key.range.options)

    if key.secondary_index is not None:
        index = key.secondary_index
        logger.debug(f"Index lookup on {index.index_name} ({key.hash.name}/{index.name})")
        request['IndexName'] = index.index_name
        return _apply_condition(request, index.name, index.value, index.options)

    logger.debug(f"Hash lookup on {key.hash.name}")
    return request


def build_item_key(key: KeyDescriptor) -> Dict[str, Any]:
    """Primary key of one item: hash value plus range value when present."""
    item_key = {key.hash.name: key.hash.value}
    if key.range is not None:
        item_key[key.range.name] = key.range.value
    return item_key


def encode_page_keys(page_keys: List[PageKey]) -> Dict[str, Any]:
    """
    Convert a paging cursor into an ``ExclusiveStartKey``.

    Integers and Decimals are sent as numbers, strings as strings. Values of any
    other type cannot be part of a DynamoDB key and are skipped.
    """
    start_key: Dict[str, Any] = {}
    for page_key in page_keys:
        value = page_key.value
        if isinstance(value, bool):
            logger.warning(f"Skipping page key '{page_key.key}': boolean is not a key type")
        elif isinstance(value, int):
            start_key[page_key.key] = Decimal(value)
        elif isinstance(value, (str, Decimal)):
            start_key[page_key.key] = value
        else:
            logger.warning(f"Skipping page key '{page_key.key}': unsupported type {type(value).__name__}")
    return start_key
