"""Exception hierarchy for the Kinesis reader."""


class KinesisReaderError(Exception):
    """Base exception for all reader errors."""

    pass


class TransportError(KinesisReaderError):
    """
    A call to the remote stream service failed.

    Attributes:
        code: Service error code (e.g. ``ResourceNotFoundException``), if known.
        operation: Name of the transport operation that failed.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.operation = operation


class ThroughputExceededError(TransportError):
    """The service is rate-limiting reads on the current shard."""

    pass


class ShardsExhaustedError(KinesisReaderError):
    """Cycled past the last shard while looping is disabled."""

    pass
