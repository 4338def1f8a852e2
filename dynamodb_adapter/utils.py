"""
DynamoDB Adapter Utilities

Helpers shared by the facade:
- Item serialization/deserialization between pydantic models and boto3 items
- Scan filter placeholder expansion
"""

import logging
import re
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .models import ScanFilter

logger = logging.getLogger(__name__)


# =============================================================================
# Data Serialization
# =============================================================================

def to_dynamodb_value(obj: Any) -> Any:
    """Recursively convert Python values into types boto3 can serialize.

    - float -> Decimal (boto3 rejects floats)
    - datetime -> ISO string
    - dict/list/tuple -> converted element-wise (tuples become lists)
    - everything else unchanged
    """
    if isinstance(obj, dict):
        return {k: to_dynamodb_value(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [to_dynamodb_value(v) for v in obj]
    elif isinstance(obj, float):
        return Decimal(str(obj))
    elif isinstance(obj, datetime):
        return obj.isoformat()
    else:
        return obj


def model_to_item(model: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    """Convert a pydantic model (or plain dict) to a DynamoDB item.

    None values are dropped for models, so optional attributes are simply absent.

    Args:
        model: Pydantic model instance or item dictionary

    Returns:
        DynamoDB item dictionary
    """
    if isinstance(model, BaseModel):
        item = model.model_dump(exclude_none=True)
    elif isinstance(model, dict):
        item = model
    else:
        raise ValidationError(f"Cannot store {type(model).__name__}: expected a pydantic model or dict")

    return to_dynamodb_value(item)


def item_to_model(item: Dict[str, Any], model_class: Type[BaseModel]) -> BaseModel:
    """Convert a DynamoDB item to a pydantic model.

    Number attributes arrive as Decimal; pydantic coerces them into int/float
    fields, and ISO strings into datetime fields.

    Raises:
        ValidationError: If the item does not fit the model
    """
    try:
        return model_class.model_validate(item)
    except PydanticValidationError as e:
        logger.error(f"Failed to convert item to {model_class.__name__}: {e}")
        raise ValidationError(
            f"Failed to convert item to {model_class.__name__}: {e}",
            errors={'model': model_class.__name__},
            original_error=e
        ) from e


def convert_items(items: List[Dict[str, Any]], model_class: Optional[Type[BaseModel]] = None) -> List[Any]:
    """Convert raw items to models when a model class is given."""
    if model_class is None:
        return items
    return [item_to_model(item, model_class) for item in items]


# =============================================================================
# Scan Filter Expansion
# =============================================================================

_PLACEHOLDER = re.compile(r"'([^']*)'|\$|\?")


def _filter_args(scan_filter: ScanFilter, placeholder_count: int) -> List[Any]:
    value = scan_filter.value
    if placeholder_count > 1 and isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def expand_scan_filters(
    filters: Sequence[ScanFilter]
) -> Tuple[Optional[str], Dict[str, str], Dict[str, Any]]:
    """Build FilterExpression, ExpressionAttributeNames and ExpressionAttributeValues.

    Each filter's placeholders are expanded in order of appearance:
    ``'Name'`` becomes ``#fN``, ``$`` becomes ``#fN`` naming the next argument,
    ``?`` becomes ``:vN`` bound to the next argument. Filters are joined with AND.

    Example:
        >>> expand_scan_filters([ScanFilter(expression="'Status' > ?", value=1)])
        ('(#f0 > :v0)', {'#f0': 'Status'}, {':v0': 1})

    Raises:
        ValidationError: If an expression has more placeholders than arguments
    """
    if not filters:
        return None, {}, {}

    names: Dict[str, str] = {}
    values: Dict[str, Any] = {}
    parts: List[str] = []

    for scan_filter in filters:
        expression = scan_filter.expression
        placeholders = [m for m in _PLACEHOLDER.finditer(expression) if m.group(1) is None]
        args = _filter_args(scan_filter, len(placeholders))
        consumed = 0

        def substitute(match: 're.Match[str]') -> str:
            nonlocal consumed
            quoted = match.group(1)
            if quoted is not None:
                placeholder = f"#f{len(names)}"
                names[placeholder] = quoted
                return placeholder

            if consumed >= len(args):
                raise ValidationError(
                    f"Filter '{expression}' has more placeholders than values",
                    errors={'expression': expression}
                )
            arg = args[consumed]
            consumed += 1

            if match.group(0) == "$":
                placeholder = f"#f{len(names)}"
                names[placeholder] = str(arg)
                return placeholder

            placeholder = f":v{len(values)}"
            values[placeholder] = to_dynamodb_value(arg)
            return placeholder

        parts.append(f"({_PLACEHOLDER.sub(substitute, expression)})")

    return " AND ".join(parts), names, values
