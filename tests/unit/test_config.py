import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from dynamodb_adapter.config import DynamoDBConfig


class TestDynamoDBConfig:
    """Test cases for DynamoDBConfig."""

    def test_default_config(self):
        """Test default configuration values."""
        with patch.dict(os.environ, {"AWS_REGION": "us-west-2"}, clear=True):
            config = DynamoDBConfig()

            assert config.region_name == "us-west-2"
            assert config.endpoint_url is None
            assert config.table_prefix == ""
            assert config.max_pool_connections is None
            assert config.retries is None
            assert config.timeout_seconds is None
            assert config.enable_debug_logging is False

    def test_default_region(self):
        with patch.dict(os.environ, {}, clear=True):
            assert DynamoDBConfig().region_name == "us-east-1"

    def test_config_from_env_vars(self):
        """Test configuration from environment variables."""
        env_vars = {
            "AWS_ACCESS_KEY_ID": "test_key",
            "AWS_SECRET_ACCESS_KEY": "test_secret",
            "AWS_REGION": "eu-west-1",
            "DYNAMODB_ENDPOINT_URL": "http://localhost:8000",
            "DYNAMODB_TABLE_PREFIX": "test",
            "DYNAMODB_DEBUG_LOGGING": "true"
        }

        with patch.dict(os.environ, env_vars, clear=True):
            config = DynamoDBConfig.from_env()

            assert config.aws_access_key_id == "test_key"
            assert config.aws_secret_access_key == "test_secret"
            assert config.region_name == "eu-west-1"
            assert config.endpoint_url == "http://localhost:8000"
            assert config.table_prefix == "test"
            assert config.enable_debug_logging is True

    def test_blank_endpoint_means_default_resolution(self):
        with patch.dict(os.environ, {"DYNAMODB_ENDPOINT_URL": ""}, clear=True):
            assert DynamoDBConfig().endpoint_url is None

        assert DynamoDBConfig(endpoint_url="   ").endpoint_url is None

    def test_table_name_with_prefix(self):
        """Test table name generation with prefix."""
        config = DynamoDBConfig(table_prefix="myapp")

        assert config.get_table_name("users") == "myapp_users"

    def test_table_name_without_prefix(self):
        config = DynamoDBConfig(table_prefix="")

        assert config.get_table_name("users") == "users"

    def test_for_local_development(self):
        """Test local development configuration."""
        config = DynamoDBConfig.for_local_development()

        assert config.endpoint_url == "http://localhost:8000"
        assert config.region_name == "us-east-1"
        assert config.aws_access_key_id == "local"
        assert config.enable_debug_logging is True

    def test_for_local_development_custom_endpoint(self):
        config = DynamoDBConfig.for_local_development("http://dynamodb-local:8001")

        assert config.endpoint_url == "http://dynamodb-local:8001"

    def test_has_client_options(self):
        assert DynamoDBConfig().has_client_options() is False
        assert DynamoDBConfig(retries=0).has_client_options() is True
        assert DynamoDBConfig(timeout_seconds=5).has_client_options() is True

    @pytest.mark.parametrize("field", ["max_pool_connections", "retries"])
    def test_negative_connection_settings_rejected(self, field):
        with pytest.raises(PydanticValidationError, match=f"{field} must be >= 0"):
            DynamoDBConfig(**{field: -1})

    def test_invalid_timeout(self):
        with pytest.raises(PydanticValidationError, match="timeout_seconds must be > 0"):
            DynamoDBConfig(timeout_seconds=0)

    def test_empty_region_rejected(self):
        with pytest.raises(PydanticValidationError, match="AWS region name is required"):
            DynamoDBConfig(region_name="")

    def test_assignment_is_validated(self):
        config = DynamoDBConfig()

        with pytest.raises(PydanticValidationError):
            config.retries = -5
