"""Mutable traversal state owned by a single engine."""

from dataclasses import dataclass, field
from enum import Enum

from kinesis_reader.options import ReaderOptions


class Phase(str, Enum):
    """Where the traversal state machine currently is."""

    UNINITIALIZED = "uninitialized"
    DISCOVERING = "discovering"
    SELECTING = "selecting"
    PULLING = "pulling"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"


@dataclass
class StreamState:
    """
    Everything the engine knows about the stream it is reading.

    ``shards`` is ``None`` until discovery completes. ``curr_shard`` is -1
    until the first shard is selected. A shard only has an entry in
    ``shard_iterators`` once a cursor was requested for it; the entry is
    ``None`` after the shard has been read to its end.
    """

    stream_name: str
    options: ReaderOptions = field(default_factory=ReaderOptions)
    shards: list[str] | None = None
    curr_shard: int = -1
    shard_iterators: dict[str, str | None] = field(default_factory=dict)
    phase: Phase = Phase.UNINITIALIZED

    @property
    def current_shard_id(self) -> str | None:
        if not self.shards or self.curr_shard < 0:
            return None
        return self.shards[self.curr_shard]

    @property
    def closed(self) -> bool:
        return self.phase is Phase.CLOSED
