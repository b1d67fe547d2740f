"""
Async S3-compatible object store built on aioboto3.
"""

import asyncio
import logging
from typing import Optional

import aioboto3
from aiohttp.client_exceptions import ClientConnectionError, ClientPayloadError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as BotocoreConnectionError

from s3bench.configuration import (
    CONNECT_TIMEOUT_SECONDS,
    MAX_POOL_CONNECTIONS,
    MIN_POOL_CONNECTIONS,
    READ_TIMEOUT_SECONDS,
)
from s3bench.systems.base import ListPage, ObjectBody, ObjectDescriptor, ObjectStore
from s3bench.systems.errors import StoreError, StoreOperationError, TransportDispatchError

logger = logging.getLogger(__name__)

# Failures where no usable answer came back from the service
TRANSPORT_ERRORS = (
    BotocoreConnectionError,
    HTTPClientError,
    ClientConnectionError,
    ClientPayloadError,
    asyncio.TimeoutError,
)


def translate_error(error: Exception, action: str) -> StoreError:
    """Map a botocore/aiohttp exception onto the store error taxonomy."""
    if isinstance(error, StoreError):
        return error
    if isinstance(error, TRANSPORT_ERRORS):
        return TransportDispatchError(f"{action}: {error}")
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code")
        return StoreOperationError(f"{action}: {error}", code=code)
    if isinstance(error, BotoCoreError):
        return StoreOperationError(f"{action}: {error}")
    raise error


class S3Body(ObjectBody):
    """Wraps an aiobotocore StreamingBody so read failures surface as StoreError."""

    def __init__(self, stream, key: str):
        self._stream = stream
        self._key = key

    async def read(self) -> bytes:
        try:
            async with self._stream as stream:
                return await stream.read()
        except Exception as e:
            raise translate_error(e, f"read body of {self._key}") from e


class S3ObjectStore(ObjectStore):
    """Async S3 client shared by every worker of a run."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        region: Optional[str] = None,
        credentials: Optional[dict] = None,
        max_pool_connections: int = MIN_POOL_CONNECTIONS,
    ):
        credentials = credentials or {}
        self.endpoint = endpoint or None
        self.region = region

        self._config = self._create_config(max_pool_connections)
        self.session = aioboto3.Session(
            aws_access_key_id=credentials.get("access_key_id") or None,
            aws_secret_access_key=credentials.get("secret_access_key") or None,
            region_name=region,
        )
        self.client = None

        logger.info(
            f"Initialized S3 store for {self.endpoint or 'AWS'} "
            f"(region={region}, max_pool_connections={self._config.max_pool_connections})"
        )

    def _create_config(self, max_pool_connections: int) -> Config:
        """Size the connection pool to the number of concurrent workers."""
        pool_size = max(MIN_POOL_CONNECTIONS, min(max_pool_connections, MAX_POOL_CONNECTIONS))
        if max_pool_connections > MAX_POOL_CONNECTIONS:
            logger.warning(
                f"Requested pool size ({max_pool_connections}) exceeds maximum "
                f"({MAX_POOL_CONNECTIONS}); workers will queue for connections"
            )

        return Config(
            max_pool_connections=pool_size,
            connect_timeout=CONNECT_TIMEOUT_SECONDS,
            read_timeout=READ_TIMEOUT_SECONDS,
            tcp_keepalive=True,
        )

    async def __aenter__(self):
        self.client = await self.session.client(
            "s3",
            endpoint_url=self.endpoint,
            config=self._config,
        ).__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.__aexit__(exc_type, exc_val, exc_tb)
            self.client = None

    def _require_client(self):
        if not self.client:
            raise RuntimeError("Storage client not initialized. Use async context manager.")
        return self.client

    async def put(self, bucket: str, key: str, body: bytes) -> None:
        client = self._require_client()
        try:
            await client.put_object(Bucket=bucket, Key=key, Body=body)
        except Exception as e:
            raise translate_error(e, f"put {key}") from e

    async def get(self, bucket: str, key: str) -> Optional[ObjectBody]:
        client = self._require_client()
        try:
            response = await client.get_object(Bucket=bucket, Key=key)
        except Exception as e:
            raise translate_error(e, f"get {key}") from e

        stream = response.get("Body")
        if stream is None:
            return None
        return S3Body(stream, key)

    async def list_objects_page(
        self, bucket: str, prefix: str, continuation_token: Optional[str] = None
    ) -> ListPage:
        client = self._require_client()
        params = {"Bucket": bucket, "Prefix": prefix}
        if continuation_token:
            params["ContinuationToken"] = continuation_token

        try:
            response = await client.list_objects_v2(**params)
        except Exception as e:
            raise translate_error(e, f"list {prefix}") from e

        objects = [
            ObjectDescriptor(key=item["Key"], size=item.get("Size", 0))
            for item in response.get("Contents", [])
            if item.get("Key")
        ]
        return ListPage(objects=objects, next_token=response.get("NextContinuationToken"))
