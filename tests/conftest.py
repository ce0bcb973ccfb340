"""Shared fixtures for reader tests."""

from datetime import datetime
from typing import Any

import pytest
from typing_extensions import override

from kinesis_reader.options import ReaderOptions
from kinesis_reader.transports.base import RecordBatch, ShardPage, StreamTransport


class FakeTransport(StreamTransport):
    """In-memory transport that records every call."""

    def __init__(self) -> None:
        self.pages: list[ShardPage] = [ShardPage(shard_ids=["shard-0", "shard-1"])]
        self.iterator = "ABCD"
        self.batches: list[RecordBatch] = []
        self.errors: dict[str, list[Exception]] = {}
        self.calls: list[tuple[Any, ...]] = []

    def fail_next(self, operation: str, *errors: Exception) -> None:
        self.errors.setdefault(operation, []).extend(errors)

    def _maybe_fail(self, operation: str) -> None:
        pending = self.errors.get(operation)
        if pending:
            raise pending.pop(0)

    @override
    async def describe_stream(
        self,
        stream_name: str,
        exclusive_start_shard_id: str | None = None,
    ) -> ShardPage:
        self.calls.append(("describe_stream", stream_name, exclusive_start_shard_id))
        self._maybe_fail("describe_stream")
        return self.pages.pop(0)

    @override
    async def get_shard_iterator(
        self,
        stream_name: str,
        shard_id: str,
        iterator_type: str,
        timestamp: datetime | None = None,
        starting_sequence_number: str | None = None,
    ) -> str:
        self.calls.append(
            ("get_shard_iterator", shard_id, iterator_type, timestamp, starting_sequence_number)
        )
        self._maybe_fail("get_shard_iterator")
        return self.iterator

    @override
    async def get_records(self, shard_iterator: str, limit: int | None = None) -> RecordBatch:
        self.calls.append(("get_records", shard_iterator, limit))
        self._maybe_fail("get_records")
        if self.batches:
            return self.batches.pop(0)
        return RecordBatch(records=[], next_shard_iterator="EFGH")

    def operations(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def fast_options() -> ReaderOptions:
    """Options without pacing delays."""
    return ReaderOptions(read_pause=0, cycle_pause=0)
