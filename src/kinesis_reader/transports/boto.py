"""AWS Kinesis transport implemented on boto3."""

import asyncio
from datetime import datetime
import functools
import logging
from typing import Any

from typing_extensions import override

from kinesis_reader.exceptions import ThroughputExceededError, TransportError
from kinesis_reader.transports.base import RecordBatch, ShardPage, StreamTransport

logger = logging.getLogger(__name__)

THROTTLING_ERROR_CODES = frozenset(
    {
        "ProvisionedThroughputExceededException",
        "LimitExceededException",
    }
)


class BotoTransport(StreamTransport):
    """
    Read Kinesis streams through a boto3 ``kinesis`` client.

    boto3 is blocking, so each call runs in a worker thread and the event loop
    only suspends while the request is in flight.
    """

    def __init__(
        self,
        client: Any = None,
        region: str | None = None,
    ) -> None:
        """
        Initialize BotoTransport.

        Args:
            client: Boto3 Kinesis client instance. If None, will create default client.
            region: AWS region for the default client.

        Raises:
            ImportError: If boto3 is not installed.
        """
        try:
            import boto3
        except ImportError as e:
            raise ImportError(
                "boto3 is required for BotoTransport. Install with: pip install kinesis-reader"
            ) from e

        self.client = client or boto3.client("kinesis", region_name=region)

        logger.info("BotoTransport initialized (region=%s)", self.client.meta.region_name)

    async def _call(self, operation: str, **params: Any) -> dict[str, Any]:
        from botocore.exceptions import BotoCoreError, ClientError

        method = getattr(self.client, operation)
        try:
            return await asyncio.to_thread(functools.partial(method, **params))
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in THROTTLING_ERROR_CODES:
                raise ThroughputExceededError(
                    f"{operation} throttled: {e}", code=code, operation=operation
                ) from e
            logger.exception("Kinesis %s failed: %s", operation, e)
            raise TransportError(f"{operation} failed: {e}", code=code, operation=operation) from e
        except BotoCoreError as e:
            logger.exception("Kinesis %s failed: %s", operation, e)
            raise TransportError(f"{operation} failed: {e}", operation=operation) from e

    @override
    async def describe_stream(
        self,
        stream_name: str,
        exclusive_start_shard_id: str | None = None,
    ) -> ShardPage:
        params: dict[str, Any] = {"StreamName": stream_name}
        if exclusive_start_shard_id:
            params["ExclusiveStartShardId"] = exclusive_start_shard_id

        response = await self._call("describe_stream", **params)
        description = response["StreamDescription"]
        return ShardPage(
            shard_ids=[shard["ShardId"] for shard in description.get("Shards", [])],
            has_more_shards=bool(description.get("HasMoreShards", False)),
        )

    @override
    async def get_shard_iterator(
        self,
        stream_name: str,
        shard_id: str,
        iterator_type: str,
        timestamp: datetime | None = None,
        starting_sequence_number: str | None = None,
    ) -> str:
        params: dict[str, Any] = {
            "StreamName": stream_name,
            "ShardId": shard_id,
            "ShardIteratorType": iterator_type,
        }
        if timestamp is not None:
            params["Timestamp"] = timestamp
        if starting_sequence_number is not None:
            params["StartingSequenceNumber"] = starting_sequence_number

        response = await self._call("get_shard_iterator", **params)
        return response["ShardIterator"]

    @override
    async def get_records(self, shard_iterator: str, limit: int | None = None) -> RecordBatch:
        params: dict[str, Any] = {"ShardIterator": shard_iterator}
        if limit is not None:
            params["Limit"] = limit

        response = await self._call("get_records", **params)
        return RecordBatch(
            records=response.get("Records", []),
            next_shard_iterator=response.get("NextShardIterator"),
        )
