"""Shard traversal engine: discovery, cursors, record pulls and shard cycling."""

import asyncio
from datetime import datetime, timezone
import logging
from typing import Any

from kinesis_reader.exceptions import (
    ShardsExhaustedError,
    ThroughputExceededError,
    TransportError,
)
from kinesis_reader.options import IteratorType
from kinesis_reader.state import Phase, StreamState
from kinesis_reader.transports.base import StreamTransport

logger = logging.getLogger(__name__)


class ShardTraversalEngine:
    """
    Walk the shards of one stream, pulling one batch of records at a time.

    The engine owns its ``StreamState`` and mutates it in place. Callers must
    wait for each operation to finish before starting the next one; at most
    one remote call is in flight per engine.
    """

    def __init__(self, transport: StreamTransport, state: StreamState) -> None:
        """
        Initialize the engine.

        Args:
            transport: Client for the remote stream service.
            state: Fresh traversal state; must not be shared with another engine.
        """
        self.transport = transport
        self.state = state

    def _set_phase(self, phase: Phase) -> None:
        # A closed reader stays closed even if an in-flight call finishes later.
        if self.state.phase is not Phase.CLOSED:
            self.state.phase = phase

    async def discover(self, start_after: str | None = None) -> StreamState:
        """
        Populate ``state.shards`` with every shard of the stream.

        Pages through the stream description until the service reports no
        more shards. Shard ids are only committed to the state once the last
        page has arrived, so a failed discovery leaves the state untouched.

        Args:
            start_after: List only shards after this shard id.

        Returns:
            StreamState: The updated state.

        Raises:
            TransportError: If any page request fails.
        """
        state = self.state
        previous_phase = state.phase
        self._set_phase(Phase.DISCOVERING)

        discovered: list[str] = []
        try:
            while True:
                page = await self.transport.describe_stream(state.stream_name, start_after)
                discovered.extend(page.shard_ids)
                logger.debug(
                    "Discovered %d shards after %s (more=%s)",
                    len(page.shard_ids),
                    start_after,
                    page.has_more_shards,
                )

                if not page.has_more_shards:
                    break
                if not page.shard_ids:
                    raise TransportError(
                        "describe_stream reported more shards but returned none",
                        operation="describe_stream",
                    )
                start_after = page.shard_ids[-1]
        except Exception:
            self._set_phase(previous_phase)
            raise

        if state.shards is None:
            state.shards = []
        state.shards.extend(discovered)

        logger.info("Stream %s has %d shards", state.stream_name, len(state.shards))
        return state

    async def acquire_cursor(self) -> StreamState:
        """
        Request a fresh shard iterator for the current shard.

        Any previous iterator for the shard is replaced. No retries happen here.

        Raises:
            TransportError: If the request fails.
        """
        state = self.state
        shard_id = state.current_shard_id
        if shard_id is None:
            raise ValueError("No shard is selected")

        options = state.options
        timestamp = None
        if options.iterator_type is IteratorType.AT_TIMESTAMP:
            timestamp = options.iterator_timestamp or datetime.now(timezone.utc)
        sequence_number = None
        if options.iterator_type.needs_sequence_number:
            sequence_number = options.starting_sequence_number

        iterator = await self.transport.get_shard_iterator(
            state.stream_name,
            shard_id,
            options.iterator_type.value,
            timestamp=timestamp,
            starting_sequence_number=sequence_number,
        )
        state.shard_iterators[shard_id] = iterator

        logger.debug("Acquired %s iterator for shard %s", options.iterator_type.value, shard_id)
        return state

    async def pull_records(self) -> list[Any]:
        """
        Fetch one batch of records from the current shard.

        The shard's iterator is replaced with the one returned by the service,
        then the engine waits ``read_pause`` milliseconds.

        Returns:
            list[Any]: The records, possibly empty.

        Raises:
            TransportError: If the request fails.
            ThroughputExceededError: If the shard is being rate-limited.
        """
        state = self.state
        shard_id = state.current_shard_id
        if shard_id is None:
            raise ValueError("No shard is selected")

        batch = await self.transport.get_records(
            state.shard_iterators[shard_id],
            limit=state.options.limit,
        )
        state.shard_iterators[shard_id] = batch.next_shard_iterator

        logger.debug("Pulled %d records from shard %s", len(batch.records), shard_id)
        await asyncio.sleep(state.options.read_pause / 1000)
        return batch.records

    async def cycle(self) -> StreamState:
        """
        Select the next shard and acquire a cursor for it.

        Wraps around to the first shard when looping is allowed. Waits
        ``cycle_pause`` milliseconds before requesting the cursor.

        Raises:
            ShardsExhaustedError: If there is no next shard and looping is disabled.
            TransportError: If the cursor request fails.
        """
        state = self.state
        if not state.shards:
            self._set_phase(Phase.EXHAUSTED)
            raise ShardsExhaustedError(f"Stream {state.stream_name} has no shards")

        next_shard = state.curr_shard + 1
        if next_shard >= len(state.shards):
            if not state.options.allow_looping:
                self._set_phase(Phase.EXHAUSTED)
                raise ShardsExhaustedError(
                    f"All {len(state.shards)} shards of {state.stream_name} exhausted"
                )
            next_shard = 0

        state.curr_shard = next_shard
        self._set_phase(Phase.SELECTING)
        logger.info("Selected shard %s (%d)", state.current_shard_id, next_shard)

        await asyncio.sleep(state.options.cycle_pause / 1000)
        await self.acquire_cursor()
        self._set_phase(Phase.PULLING)
        return state

    async def next_batch(self) -> list[Any]:
        """
        Produce the next batch of records for the consumer.

        Discovers shards and selects the first one on the first call. A
        throttled call moves on to the next shard and yields an empty batch.
        Other errors propagate with the state left as it was.

        Raises:
            ShardsExhaustedError: If there are no more shards to read.
            TransportError: For any non-throttling remote failure.
        """
        state = self.state
        if state.phase is Phase.EXHAUSTED:
            raise ShardsExhaustedError(f"All shards of {state.stream_name} exhausted")

        try:
            if state.shards is None:
                await self.discover()
                await self.cycle()
            elif state.current_shard_id is None:
                await self.cycle()
            elif state.current_shard_id not in state.shard_iterators:
                await self.acquire_cursor()
            elif state.shard_iterators[state.current_shard_id] is None:
                logger.info("Shard %s is closed, moving on", state.current_shard_id)
                await self.cycle()
                return []

            return await self.pull_records()
        except ThroughputExceededError as e:
            return await self._recover_from_throttling(e)

    async def _recover_from_throttling(self, error: ThroughputExceededError) -> list[Any]:
        state = self.state
        if state.shards is None:
            logger.warning("Throttled while discovering shards of %s: %s", state.stream_name, error)
            return []

        logger.warning("Throttled on shard %s, cycling: %s", state.current_shard_id, error)
        try:
            await self.cycle()
        except ThroughputExceededError as e:
            # Cursor for the new shard is requested again on the next pull.
            logger.warning("Throttled acquiring iterator for shard %s: %s", state.current_shard_id, e)
        return []
