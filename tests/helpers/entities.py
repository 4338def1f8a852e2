"""
Entities used across the test suite.

- Account: hash-only table
- Event: hash + range table with a local secondary index on ``score``
"""

from typing import Optional

from pydantic import BaseModel

from dynamodb_adapter.models import IndexDefinition, TableMeta


class Account(BaseModel):
    id: str
    name: str
    balance: int = 0
    email: Optional[str] = None

    class Meta(TableMeta):
        partition_key = "id"


class Event(BaseModel):
    user_id: str
    created_at: str
    kind: str = "click"
    score: int = 0

    class Meta(TableMeta):
        partition_key = "user_id"
        sort_key = "created_at"
        local_indexes = [IndexDefinition(name="ScoreIndex", sort_key="score")]
        read_capacity_units = 5
        write_capacity_units = 2


class NoMetaEntity(BaseModel):
    id: str
