"""
CreateTable request building from entity metadata.

An entity is a pydantic model class (or an instance of one) with an inner
``Meta(TableMeta)`` class. Key attribute types come from field annotations.
"""

import logging
import types
from decimal import Decimal
from typing import Any, Dict, List, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel

from ..exceptions import ValidationError
from ..models import PROJECTION_KEYS_ONLY, TableMeta

logger = logging.getLogger(__name__)


def _entity_class(entity: Any) -> Type[BaseModel]:
    model_class = entity if isinstance(entity, type) else type(entity)
    if not issubclass(model_class, BaseModel):
        raise ValidationError(f"Entity {model_class.__name__} must be a pydantic model")
    return model_class


def extract_table_meta(entity: Any) -> Type[TableMeta]:
    """Return the entity's Meta class.

    Raises:
        ValidationError: If the entity has no Meta or no partition_key
    """
    model_class = _entity_class(entity)
    meta = getattr(model_class, 'Meta', None)
    if meta is None:
        raise ValidationError(f"Model {model_class.__name__} must have a Meta class with partition_key")
    if not getattr(meta, 'partition_key', None):
        raise ValidationError(f"Model {model_class.__name__}.Meta must define partition_key")
    return meta


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) not in (Union, types.UnionType):
        return annotation
    non_none = [arg for arg in get_args(annotation) if arg is not type(None)]
    if len(non_none) == 1:
        return non_none[0]
    return annotation


def attribute_type(model_class: Type[BaseModel], field_name: str) -> str:
    """DynamoDB scalar type ('S', 'N' or 'B') of a key attribute.

    Raises:
        ValidationError: If the field is missing or not a scalar key type
    """
    field = model_class.model_fields.get(field_name)
    if field is None:
        raise ValidationError(f"Key attribute '{field_name}' is not a field of {model_class.__name__}")

    annotation = _unwrap_optional(field.annotation)
    if annotation is str:
        return "S"
    if annotation in (int, float, Decimal):
        return "N"
    if annotation in (bytes, bytearray):
        return "B"

    raise ValidationError(
        f"Key attribute '{field_name}' must be str, number or bytes (got {annotation})",
        errors={'field': field_name}
    )


def _key_schema(partition_key: str, sort_key: Optional[str]) -> List[Dict[str, str]]:
    schema = [{'AttributeName': partition_key, 'KeyType': 'HASH'}]
    if sort_key:
        schema.append({'AttributeName': sort_key, 'KeyType': 'RANGE'})
    return schema


def build_create_table_request(
    table_name: str,
    entity: Any,
    keys_only_index: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build ``CreateTable`` keyword arguments for an entity.

    Args:
        table_name: Table to create
        entity: Pydantic model class or instance carrying a Meta class
        keys_only_index: Local index to project KEYS_ONLY instead of the
            index's declared projection

    Returns:
        Keyword arguments for the boto3 ``create_table`` call

    Raises:
        ValidationError: On missing metadata or an unknown keys_only_index
    """
    model_class = _entity_class(entity)
    meta = extract_table_meta(model_class)

    attr_types = {meta.partition_key: attribute_type(model_class, meta.partition_key)}
    if meta.sort_key:
        attr_types[meta.sort_key] = attribute_type(model_class, meta.sort_key)

    if keys_only_index is not None and meta.get_index_by_name(keys_only_index) is None:
        raise ValidationError(
            f"Index '{keys_only_index}' is not declared in {model_class.__name__}.Meta",
            errors={'index_name': keys_only_index}
        )

    local_indexes = []
    for index in meta.local_indexes:
        attr_types[index.sort_key] = attribute_type(model_class, index.sort_key)
        projection_type = PROJECTION_KEYS_ONLY if index.name == keys_only_index else index.projection_type
        local_indexes.append({
            'IndexName': index.name,
            'KeySchema': _key_schema(meta.partition_key, index.sort_key),
            'Projection': {'ProjectionType': projection_type}
        })

    request: Dict[str, Any] = {
        'TableName': table_name,
        'KeySchema': _key_schema(meta.partition_key, meta.sort_key),
        'AttributeDefinitions': [
            {'AttributeName': name, 'AttributeType': attr_types[name]}
            for name in sorted(attr_types)
        ],
        'BillingMode': 'PROVISIONED',
        'ProvisionedThroughput': {
            'ReadCapacityUnits': meta.read_capacity_units,
            'WriteCapacityUnits': meta.write_capacity_units
        }
    }
    if local_indexes:
        request['LocalSecondaryIndexes'] = local_indexes

    logger.debug(f"CreateTable request for {table_name}: {request}")
    return request
