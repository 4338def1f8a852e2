"""
Table Metadata Classes

Entities declare their table schema with an inner ``Meta`` class, the same way
domain models carry their keys:

    class Post(BaseModel):
        user_id: str
        created_at: str
        score: int = 0

        class Meta(TableMeta):
            partition_key = "user_id"
            sort_key = "created_at"
            local_indexes = [IndexDefinition(name="ScoreIndex", sort_key="score")]

Key attribute types are taken from the pydantic field annotations.
"""

from typing import List, Optional

PROJECTION_ALL = "ALL"
PROJECTION_KEYS_ONLY = "KEYS_ONLY"


class IndexDefinition:
    """Defines a Local Secondary Index (same partition key as the table)."""
    def __init__(
        self,
        name: str,
        sort_key: str,
        projection_type: str = PROJECTION_ALL
    ):
        self.name = name
        self.sort_key = sort_key
        self.projection_type = projection_type


class TableMeta:
    """Base class for table metadata definitions."""
    partition_key: str
    sort_key: Optional[str] = None
    local_indexes: List[IndexDefinition] = []
    read_capacity_units: int = 1
    write_capacity_units: int = 1

    @classmethod
    def get_key_fields(cls) -> List[str]:
        """Get DynamoDB item key field names.

        - For simple keys: [partition_key]
        - For composite keys: [partition_key, sort_key]
        """
        fields = [cls.partition_key]
        if cls.sort_key:
            fields.append(cls.sort_key)
        return fields

    @classmethod
    def get_index_by_name(cls, index_name: str) -> Optional[IndexDefinition]:
        """Get local index definition by name."""
        for index in cls.local_indexes:
            if index.name == index_name:
                return index
        return None
