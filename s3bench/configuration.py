"""
Configuration constants for the s3bench load generator.

This module contains all configuration parameters including:
- Object storage endpoint, region and credentials
- Payload size bounds for PUT workloads
- Key sampling backoff for GET workloads
- Connection pool sizing and CLI defaults
"""

import os
from typing import Optional

# =============================================================================
# OBJECT STORAGE CONFIGURATION
# =============================================================================

BUCKET_NAME: str = os.getenv("BUCKET_NAME", "")

# Empty endpoint means "use the regional AWS endpoint"
S3_ENDPOINT: str = os.getenv("S3_ENDPOINT", "")
AWS_REGION: str = os.getenv("AWS_REGION", "us-east-1")

# Empty credentials fall through to the default botocore credential chain
AWS_ACCESS_KEY_ID: str = os.getenv("AWS_ACCESS_KEY_ID", "")
AWS_SECRET_ACCESS_KEY: str = os.getenv("AWS_SECRET_ACCESS_KEY", "")

# =============================================================================
# FILE SIZE CONSTANTS
# =============================================================================

BYTES_PER_KB: int = 1024
BYTES_PER_MB: int = 1024 * 1024
NS_PER_MS: int = 1_000_000

# =============================================================================
# WORKLOAD PARAMETERS
# =============================================================================

# PUT payload length is drawn from [MIN_PAYLOAD_BYTES, MAX_PAYLOAD_BYTES)
MIN_PAYLOAD_BYTES: int = BYTES_PER_KB
MAX_PAYLOAD_BYTES: int = 100 * BYTES_PER_MB

PUT_KEY_TEMPLATE: str = "{prefix}/put_{size}"

# GET workers back off this long when the prefix lists no objects
EMPTY_LISTING_BACKOFF_SECONDS: float = 1.0
# None keeps retrying an empty prefix forever
MAX_EMPTY_LISTINGS: Optional[int] = None
# Pause before re-issuing a listing page after a transport failure
LISTING_RETRY_DELAY_SECONDS: float = 0.1

# Most recent failures kept by the error log; totals are always complete
MAX_ERROR_RECORDS: int = 1000

DEFAULT_PUT_CONCURRENCY: int = 1
DEFAULT_PUT_COUNT_PER_THREAD: int = 1
DEFAULT_GET_CONCURRENCY: int = 1
DEFAULT_GET_COUNT_PER_THREAD: int = 1

# =============================================================================
# CONNECTION POOL
# =============================================================================

MIN_POOL_CONNECTIONS: int = 10
MAX_POOL_CONNECTIONS: int = 2000
CONNECT_TIMEOUT_SECONDS: int = 5
READ_TIMEOUT_SECONDS: int = 120

# =============================================================================
# CLI DEFAULTS
# =============================================================================

DEFAULT_LOG_LEVEL: str = "INFO"
DEFAULT_PARQUET_PREFIX: str = "s3bench"
