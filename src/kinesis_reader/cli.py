"""Command-line interface for reading Kinesis streams."""

import asyncio
from datetime import datetime
import logging
import sys

import typer

from kinesis_reader.exceptions import ShardsExhaustedError
from kinesis_reader.options import IteratorType
from kinesis_reader.reader import KinesisReader

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)


async def _consume(reader: KinesisReader, max_batches: int | None) -> int:
    batches = 0
    async with reader:
        async for records in reader:
            for record in records:
                sys.stdout.buffer.write(record["Data"] + b"\n")
            sys.stdout.flush()

            batches += 1
            if max_batches is not None and batches >= max_batches:
                break
    return batches


@app.command()
def main(
    stream_name: str = typer.Argument(..., help="Name of the Kinesis stream to read"),
    region: str | None = typer.Option(None, help="AWS region (default: from AWS config)"),
    iterator_type: IteratorType = typer.Option(
        IteratorType.LATEST,
        help="Where to start reading each shard",
    ),
    timestamp: datetime | None = typer.Option(
        None,
        help="Start time for AT_TIMESTAMP (default: now)",
    ),
    sequence_number: str | None = typer.Option(
        None,
        help="Sequence number for AT_SEQUENCE_NUMBER / AFTER_SEQUENCE_NUMBER",
    ),
    allow_looping: bool = typer.Option(
        False,
        "--allow-looping",
        help="Wrap around to the first shard after the last one",
    ),
    read_pause: int = typer.Option(1000, help="Pause after each fetch, in milliseconds"),
    cycle_pause: int = typer.Option(1000, help="Pause after switching shards, in milliseconds"),
    limit: int | None = typer.Option(None, help="Maximum records per fetch"),
    max_batches: int | None = typer.Option(None, help="Stop after this many batches"),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Stream record payloads from a Kinesis stream to stdout, one per line.

    Shards are read one at a time, moving to the next shard whenever the
    current one is throttled.
    """
    # Configure logging
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    try:
        reader = KinesisReader(
            stream_name,
            region=region,
            iterator_type=iterator_type,
            iterator_timestamp=timestamp,
            starting_sequence_number=sequence_number,
            allow_looping=allow_looping,
            read_pause=read_pause,
            cycle_pause=cycle_pause,
            limit=limit,
        )
        batches = asyncio.run(_consume(reader, max_batches))
        logger.info("Read %d batches from %s", batches, stream_name)

    except ShardsExhaustedError as e:
        logger.info("End of stream: %s", e)
    except ImportError as e:
        typer.echo(
            f"Error: Missing dependency: {e}\nInstall with: pip install kinesis-reader",
            err=True,
        )
        raise typer.Exit(code=1) from None
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        if verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        raise typer.Exit(code=1) from None


if __name__ == "__main__":
    app()
