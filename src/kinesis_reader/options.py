"""Reader configuration."""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any


class IteratorType(str, Enum):
    """Starting position of a shard iterator."""

    LATEST = "LATEST"
    TRIM_HORIZON = "TRIM_HORIZON"
    AT_TIMESTAMP = "AT_TIMESTAMP"
    AT_SEQUENCE_NUMBER = "AT_SEQUENCE_NUMBER"
    AFTER_SEQUENCE_NUMBER = "AFTER_SEQUENCE_NUMBER"

    @property
    def needs_sequence_number(self) -> bool:
        return self in (IteratorType.AT_SEQUENCE_NUMBER, IteratorType.AFTER_SEQUENCE_NUMBER)


MAX_RECORDS_LIMIT = 10000


@dataclass(frozen=True)
class ReaderOptions:
    """
    Immutable options resolved when a reader is constructed.

    Attributes:
        read_pause: Delay in milliseconds after every successful record fetch.
        cycle_pause: Delay in milliseconds after moving to another shard.
        allow_looping: Wrap around to the first shard after the last one.
        iterator_type: Where new shard iterators start reading.
        iterator_timestamp: Start time for ``AT_TIMESTAMP`` (default: now).
        starting_sequence_number: Required for the sequence-number iterator types.
        limit: Maximum records per GetRecords call (default: service maximum).
    """

    read_pause: int = 1000
    cycle_pause: int = 1000
    allow_looping: bool = False
    iterator_type: IteratorType = IteratorType.LATEST
    iterator_timestamp: datetime | None = None
    starting_sequence_number: str | None = None
    limit: int | None = None

    def __post_init__(self) -> None:
        try:
            iterator_type = IteratorType(self.iterator_type)
        except ValueError as e:
            raise ValueError(f"Unknown iterator type: {self.iterator_type}") from e
        object.__setattr__(self, "iterator_type", iterator_type)

        if self.read_pause < 0 or self.cycle_pause < 0:
            raise ValueError("read_pause and cycle_pause must be non-negative")

        if iterator_type.needs_sequence_number and not self.starting_sequence_number:
            raise ValueError(f"{iterator_type.value} requires starting_sequence_number")

        if self.limit is not None and not 1 <= self.limit <= MAX_RECORDS_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_RECORDS_LIMIT}")

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> "ReaderOptions":
        """
        Build options from keyword arguments, rejecting unknown names.

        Raises:
            TypeError: If an option name is not recognized.
            ValueError: If an option value is invalid.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise TypeError(f"Unknown reader options: {', '.join(unknown)}")
        return cls(**kwargs)
