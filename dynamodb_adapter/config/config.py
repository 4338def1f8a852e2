import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()


class DynamoDBConfig(BaseModel):
    """Configuration for building the DynamoDB connection.

    Connection tuning fields default to ``None``; unset fields are left to
    boto3's own defaults (including its retry policy).
    """

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    # Empty or None means the service's default endpoint resolution
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL") or None,
        description="DynamoDB endpoint URL override (e.g. DynamoDB Local)"
    )

    # Table configuration
    table_prefix: str = Field(
        default_factory=lambda: os.getenv("DYNAMODB_TABLE_PREFIX", ""),
        description="Prefix to add to all table names"
    )

    # Connection settings
    max_pool_connections: Optional[int] = Field(
        default=None,
        description="Maximum number of connections in the connection pool"
    )

    retries: Optional[int] = Field(
        default=None,
        description="Retry attempts for failed requests (boto3 default when unset)"
    )

    timeout_seconds: Optional[float] = Field(
        default=None,
        description="Connect and read timeout in seconds"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("DYNAMODB_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for DynamoDB operations"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('endpoint_url')
    @classmethod
    def normalize_endpoint(cls, v):
        """Treat a blank endpoint as no override."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator('max_pool_connections', 'retries')
    @classmethod
    def validate_non_negative(cls, v, info):
        """Validate integer connection settings."""
        if v is not None and v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @field_validator('timeout_seconds')
    @classmethod
    def validate_timeout(cls, v):
        """Validate timeout value."""
        if v is not None and v <= 0:
            raise ValueError("timeout_seconds must be > 0")
        return v

    def get_table_name(self, base_name: str) -> str:
        """Get the full table name with prefix.

        Args:
            base_name: Base table name

        Returns:
            ``<prefix>_<base_name>`` when a prefix is configured, else ``base_name``
        """
        if self.table_prefix:
            return f"{self.table_prefix}_{base_name}"
        return base_name

    def has_client_options(self) -> bool:
        """Whether any botocore client option was set explicitly."""
        return any(
            value is not None
            for value in (self.max_pool_connections, self.retries, self.timeout_seconds)
        )

    @classmethod
    def from_env(cls) -> 'DynamoDBConfig':
        """Create configuration from environment variables.

        Returns:
            DynamoDBConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls, endpoint_url: str = "http://localhost:8000") -> 'DynamoDBConfig':
        """Create configuration for DynamoDB Local.

        Args:
            endpoint_url: Local endpoint, DynamoDB Local's default port unless given

        Returns:
            DynamoDBConfig instance configured for local development
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url=endpoint_url,
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
