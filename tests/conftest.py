"""
Test configuration and fixtures for the DynamoDB adapter.

Provides a moto-backed DynamoDB resource, a facade bound to it and the
tables the facade tests run against.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

# Add parent directory to path so we can import dynamodb_adapter and tests.helpers
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3
import pytest
from moto import mock_aws

from dynamodb_adapter import DynamoDB, DynamoDBConfig
from tests.helpers.entities import Account, Event


@pytest.fixture
def mock_dynamodb_config():
    """DynamoDB configuration for mocked testing."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        table_prefix="test"
    )


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def dynamodb(mock_dynamodb_resource, mock_dynamodb_config):
    """Facade bound to the mocked resource."""
    return DynamoDB(mock_dynamodb_resource, mock_dynamodb_config)


@pytest.fixture
def accounts_table(dynamodb):
    """Create the hash-only accounts table (test_accounts)."""
    dynamodb.create_table("accounts", Account)
    return "accounts"


@pytest.fixture
def events_table(dynamodb):
    """Create the hash + range events table (test_events)."""
    dynamodb.create_table("events", Event)
    return "events"


@pytest.fixture
def sample_events():
    """Five events for user u1, one for u2."""
    events = [
        Event(user_id="u1", created_at=f"2024-01-0{day}", score=day * 10)
        for day in range(1, 6)
    ]
    events.append(Event(user_id="u2", created_at="2024-01-03", score=99))
    return events


@pytest.fixture
def mock_table():
    """Mock DynamoDB table resource."""
    table = Mock()
    table.name = "test_items"
    table.query.return_value = {'Items': []}
    table.scan.return_value = {'Items': []}
    table.put_item.return_value = {}
    table.delete_item.return_value = {}
    return table


@pytest.fixture
def mock_resource(mock_table):
    """Mock DynamoDB service resource handing out ``mock_table``."""
    resource = Mock()
    resource.Table.return_value = mock_table
    return resource
