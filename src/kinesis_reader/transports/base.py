"""Abstract base class for stream transports."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ShardPage:
    """One page of a stream description."""

    shard_ids: list[str]
    has_more_shards: bool = False


@dataclass(frozen=True)
class RecordBatch:
    """Records returned by one fetch, plus the cursor for the next one."""

    records: list[Any] = field(default_factory=list)
    next_shard_iterator: str | None = None


class StreamTransport(ABC):
    """
    Abstract client for the remote stream service.

    Implementations talk to the service that stores the shards and records.
    Every operation may raise ``TransportError``; rate limiting is reported as
    ``ThroughputExceededError``.
    """

    @abstractmethod
    async def describe_stream(
        self,
        stream_name: str,
        exclusive_start_shard_id: str | None = None,
    ) -> ShardPage:
        """
        Return one page of shard ids for the stream.

        Args:
            stream_name: Name of the stream to describe.
            exclusive_start_shard_id: Only list shards after this shard id.

        Returns:
            ShardPage: Shard ids in service order and whether more remain.

        Raises:
            TransportError: If the request fails.
        """
        ...

    @abstractmethod
    async def get_shard_iterator(
        self,
        stream_name: str,
        shard_id: str,
        iterator_type: str,
        timestamp: datetime | None = None,
        starting_sequence_number: str | None = None,
    ) -> str:
        """
        Request a cursor for a shard.

        Returns:
            str: Opaque shard iterator token.

        Raises:
            TransportError: If the request fails.
        """
        ...

    @abstractmethod
    async def get_records(self, shard_iterator: str, limit: int | None = None) -> RecordBatch:
        """
        Fetch one batch of records with a shard iterator.

        Returns:
            RecordBatch: The records (possibly empty) and the next iterator.

        Raises:
            TransportError: If the request fails.
            ThroughputExceededError: If the shard is being rate-limited.
        """
        ...
