"""Kinesis-Reader: round-robin, pull-based batch reader for Kinesis streams."""

from kinesis_reader.exceptions import (
    KinesisReaderError,
    ShardsExhaustedError,
    ThroughputExceededError,
    TransportError,
)
from kinesis_reader.options import IteratorType, ReaderOptions
from kinesis_reader.reader import KinesisReader

__all__ = [
    "IteratorType",
    "KinesisReader",
    "KinesisReaderError",
    "ReaderOptions",
    "ShardsExhaustedError",
    "ThroughputExceededError",
    "TransportError",
]
