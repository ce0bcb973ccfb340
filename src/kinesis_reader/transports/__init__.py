"""Transport layer between the reader and the remote stream service."""

from kinesis_reader.transports.base import RecordBatch, ShardPage, StreamTransport
from kinesis_reader.transports.boto import BotoTransport

__all__ = [
    "BotoTransport",
    "RecordBatch",
    "ShardPage",
    "StreamTransport",
]
