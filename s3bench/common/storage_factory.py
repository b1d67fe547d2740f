"""
Factory module for creating object store instances.
"""

import logging
from typing import Optional

# Quiet the AWS SDK before anything creates a client
logging.getLogger('botocore').setLevel(logging.WARNING)
logging.getLogger('botocore.credentials').setLevel(logging.CRITICAL)
logging.getLogger('boto3').setLevel(logging.WARNING)
logging.getLogger('aioboto3').setLevel(logging.WARNING)
logging.getLogger('aiobotocore').setLevel(logging.WARNING)
logging.getLogger('urllib3').setLevel(logging.CRITICAL)

from s3bench.configuration import (
    AWS_ACCESS_KEY_ID,
    AWS_REGION,
    AWS_SECRET_ACCESS_KEY,
    S3_ENDPOINT,
)
from s3bench.systems.s3 import S3ObjectStore

logger = logging.getLogger(__name__)


def create_object_store(
    endpoint: Optional[str] = None,
    region: Optional[str] = None,
    workers: int = 1,
) -> S3ObjectStore:
    """Create the S3 store used by a load run.

    Args:
        endpoint: Endpoint URL; empty means the regional AWS endpoint
        region: Region name (default: AWS_REGION)
        workers: Total number of concurrent workers, used to size the connection pool

    Returns:
        S3ObjectStore instance, not yet entered
    """
    if endpoint is None:
        endpoint = S3_ENDPOINT
    if endpoint and not endpoint.startswith(("http://", "https://")):
        raise ValueError(f"Endpoint must be an http(s) URL, got '{endpoint}'")

    credentials = {
        "access_key_id": AWS_ACCESS_KEY_ID,
        "secret_access_key": AWS_SECRET_ACCESS_KEY,
    }
    return S3ObjectStore(
        endpoint=endpoint,
        region=region or AWS_REGION,
        credentials=credentials,
        max_pool_connections=workers,
    )
