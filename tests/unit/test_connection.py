"""
Tests for the connection bootstrap (core/connection.py)
"""

import logging
from unittest.mock import Mock, patch

import pytest
from botocore.config import Config

from dynamodb_adapter import DynamoDB, DynamoDBConfig
from dynamodb_adapter.core.connection import PACKAGE_LOGGER, build_client_config, connect_dynamodb
from dynamodb_adapter.core.dynamodb import create_dynamodb
from dynamodb_adapter.exceptions import ConnectionError


@pytest.fixture
def mock_config():
    """Configuration without endpoint override or client options."""
    return DynamoDBConfig(
        region_name="us-east-1",
        aws_access_key_id="fake_key",
        aws_secret_access_key="fake_secret",
        endpoint_url=None
    )


@pytest.fixture
def local_config():
    """Configuration pointing at DynamoDB Local."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url="http://localhost:8000",
        table_prefix="test"
    )


@pytest.fixture
def restore_package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logger.level
    yield logger
    logger.setLevel(level)


class TestBuildClientConfig:

    def test_no_options(self, mock_config):
        assert build_client_config(mock_config) is None

    def test_explicit_options(self):
        config = DynamoDBConfig(retries=5, max_pool_connections=20, timeout_seconds=2.5)

        client_config = build_client_config(config)

        assert isinstance(client_config, Config)
        assert client_config.retries == {'max_attempts': 5}
        assert client_config.max_pool_connections == 20
        assert client_config.read_timeout == 2.5
        assert client_config.connect_timeout == 2.5

    def test_only_set_options_are_passed(self):
        client_config = build_client_config(DynamoDBConfig(max_pool_connections=7))

        assert client_config.max_pool_connections == 7
        assert client_config.retries is None


class TestConnectDynamoDB:

    def test_default_endpoint(self, mock_config):
        with patch('boto3.Session') as mock_session_class:
            mock_session = Mock()
            mock_resource = Mock()
            mock_session_class.return_value = mock_session
            mock_session.resource.return_value = mock_resource

            result = connect_dynamodb(mock_config)

            assert result is mock_resource
            mock_session_class.assert_called_once_with(
                aws_access_key_id="fake_key",
                aws_secret_access_key="fake_secret",
                region_name="us-east-1"
            )
            mock_session.resource.assert_called_once_with('dynamodb', region_name="us-east-1")

    def test_endpoint_override(self, local_config):
        with patch('boto3.Session') as mock_session_class:
            mock_session = mock_session_class.return_value

            connect_dynamodb(local_config)

            mock_session.resource.assert_called_once_with(
                'dynamodb',
                region_name="us-east-1",
                endpoint_url="http://localhost:8000"
            )

    def test_client_config_passed_when_set(self, mock_config):
        mock_config.retries = 2

        with patch('boto3.Session') as mock_session_class:
            connect_dynamodb(mock_config)

            kwargs = mock_session_class.return_value.resource.call_args.kwargs
            assert kwargs['config'].retries == {'max_attempts': 2}

    def test_existing_session_used(self, mock_config):
        session = Mock()

        with patch('boto3.Session') as mock_session_class:
            result = connect_dynamodb(mock_config, session=session)

            mock_session_class.assert_not_called()
            assert result is session.resource.return_value

    def test_connection_error(self, mock_config):
        session = Mock()
        session.resource.side_effect = ValueError("bad endpoint")

        with pytest.raises(ConnectionError) as exc_info:
            connect_dynamodb(mock_config, session=session)

        assert "Failed to connect to DynamoDB" in str(exc_info.value)
        assert isinstance(exc_info.value.original_error, ValueError)
        assert exc_info.value.context == {'region': 'us-east-1'}
        assert "(caused by ValueError)" in str(exc_info.value)

    def test_debug_logging_enabled(self, mock_config, restore_package_logger):
        mock_config.enable_debug_logging = True

        connect_dynamodb(mock_config, session=Mock())

        assert restore_package_logger.level == logging.DEBUG


class TestCreateDynamoDB:

    def test_factory(self, mock_config):
        session = Mock()

        dynamodb = create_dynamodb(mock_config, session=session)

        assert isinstance(dynamodb, DynamoDB)
        assert dynamodb.config is mock_config
        assert dynamodb.resource is session.resource.return_value

    def test_factory_reads_env_by_default(self):
        with patch('dynamodb_adapter.core.dynamodb.DynamoDBConfig.from_env') as mock_from_env, \
                patch('dynamodb_adapter.core.dynamodb.connect_dynamodb') as mock_connect:
            mock_from_env.return_value = DynamoDBConfig(table_prefix="env")

            dynamodb = create_dynamodb()

            mock_connect.assert_called_once_with(mock_from_env.return_value, None)
            assert dynamodb.table_name("users") == "env_users"
