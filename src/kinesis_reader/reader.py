"""Unified public API for reading batches of records from a Kinesis stream."""

import logging
from typing import Any

from kinesis_reader.engine import ShardTraversalEngine
from kinesis_reader.options import ReaderOptions
from kinesis_reader.state import Phase, StreamState
from kinesis_reader.transports.base import StreamTransport
from kinesis_reader.transports.boto import BotoTransport

logger = logging.getLogger(__name__)


class KinesisReader:
    """
    Pull-based, closable sequence of record batches from one stream.

    Each ``pull()`` returns the next batch (a possibly empty list of records)
    or ``None`` once the reader is closed. Batches can also be consumed with
    ``async for``. Failures surface from the pull that hit them and do not
    close the reader; the caller decides whether to keep pulling.

    Only one pull may be in flight at a time. A reader cannot be rewound;
    construct a new one to start over.
    """

    def __init__(
        self,
        stream_name: str,
        transport: StreamTransport | None = None,
        client: Any = None,
        region: str | None = None,
        options: ReaderOptions | None = None,
        **reader_options: Any,
    ) -> None:
        """
        Initialize the reader.

        Args:
            stream_name: Name of the stream to read.
            transport: Transport to use. If None, a BotoTransport is created.
            client: Boto3 Kinesis client for the default transport.
            region: AWS region for the default transport's client.
            options: Prebuilt reader options. Cannot be combined with keyword options.
            **reader_options: Individual options, see ``ReaderOptions``:
                read_pause, cycle_pause, allow_looping, iterator_type,
                iterator_timestamp, starting_sequence_number, limit

        Raises:
            ValueError: If the stream name or an option value is invalid.
            TypeError: If an option name is not recognized.
        """
        if not stream_name:
            raise ValueError("stream_name must be non-empty")

        if options is not None and reader_options:
            raise ValueError("Pass either options or keyword options, not both")
        if options is None:
            options = ReaderOptions.from_kwargs(**reader_options)

        self.transport = transport or BotoTransport(client=client, region=region)
        self.engine = ShardTraversalEngine(
            transport=self.transport,
            state=StreamState(stream_name=stream_name, options=options),
        )

        logger.info(
            "KinesisReader initialized (stream=%s, iterator=%s, looping=%s)",
            stream_name,
            options.iterator_type.value,
            options.allow_looping,
        )

    @property
    def stream_state(self) -> StreamState:
        return self.engine.state

    @property
    def closed(self) -> bool:
        return self.engine.state.closed

    async def pull(self) -> list[Any] | None:
        """
        Fetch the next batch of records.

        Returns:
            list[Any] | None: The next batch, or None once the reader is closed.

        Raises:
            ShardsExhaustedError: If every shard was read and looping is disabled.
            TransportError: If the remote service call fails.
        """
        if self.closed:
            return None
        return await self.engine.next_batch()

    def close(self) -> None:
        """Stop reading. Later pulls return None without touching the network."""
        if self.closed:
            return
        self.engine.state.phase = Phase.CLOSED
        logger.info("KinesisReader closed (stream=%s)", self.engine.state.stream_name)

    def __aiter__(self) -> "KinesisReader":
        return self

    async def __anext__(self) -> list[Any]:
        batch = await self.pull()
        if batch is None:
            raise StopAsyncIteration
        return batch

    async def __aenter__(self) -> "KinesisReader":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()
