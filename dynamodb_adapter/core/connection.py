"""
Connection Bootstrap

Builds the boto3 DynamoDB service resource the facade runs on. The resource is
built once and shared; boto3 manages pooling and retries behind it.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config

from ..config import DynamoDBConfig
from ..exceptions import ConnectionError

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "dynamodb_adapter"


def build_client_config(config: DynamoDBConfig) -> Optional[Config]:
    """botocore Config from explicitly set options, None when nothing was set.

    No retry policy is configured unless ``config.retries`` is given.
    """
    if not config.has_client_options():
        return None

    options: Dict[str, Any] = {}
    if config.retries is not None:
        options['retries'] = {'max_attempts': config.retries}
    if config.max_pool_connections is not None:
        options['max_pool_connections'] = config.max_pool_connections
    if config.timeout_seconds is not None:
        options['read_timeout'] = config.timeout_seconds
        options['connect_timeout'] = config.timeout_seconds
    return Config(**options)


def connect_dynamodb(config: DynamoDBConfig, session: Optional[boto3.Session] = None):
    """
    Create a DynamoDB service resource.

    Args:
        config: Region, optional endpoint override and credentials
        session: Existing boto3 session; a new one is built from config otherwise

    Returns:
        boto3 DynamoDB ServiceResource

    Raises:
        ConnectionError: If the session or resource cannot be created
    """
    if config.enable_debug_logging:
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

    try:
        if session is None:
            session = boto3.Session(
                aws_access_key_id=config.aws_access_key_id,
                aws_secret_access_key=config.aws_secret_access_key,
                region_name=config.region_name
            )

        resource_kwargs: Dict[str, Any] = {
            'region_name': config.region_name
        }

        if config.endpoint_url:
            resource_kwargs['endpoint_url'] = config.endpoint_url

        client_config = build_client_config(config)
        if client_config is not None:
            resource_kwargs['config'] = client_config

        resource = session.resource('dynamodb', **resource_kwargs)
    except Exception as e:
        logger.error(f"Failed to create DynamoDB resource: {e}")
        raise ConnectionError(
            f"Failed to connect to DynamoDB: {e}",
            e,
            {'region': config.region_name, 'endpoint': config.endpoint_url}
        ) from e

    logger.info(f"Connected to DynamoDB in {config.region_name}" + (f" at {config.endpoint_url}" if config.endpoint_url else ""))
    return resource
