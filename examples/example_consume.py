"""Example: Reading batches from a Kinesis stream."""

import asyncio

from kinesis_reader import KinesisReader, ShardsExhaustedError


async def main() -> None:
    # Uses the default boto3 credentials chain
    reader = KinesisReader(
        "my-stream",
        region="us-east-1",
        iterator_type="TRIM_HORIZON",
        read_pause=500,
    )

    # Or pass your own client
    # import boto3
    # client = boto3.client("kinesis", region_name="us-east-1")
    # reader = KinesisReader("my-stream", client=client)

    try:
        for i in range(10):
            records = await reader.pull()
            print(f"Batch {i}: {len(records)} records")
            for record in records:
                print(f"  {record['SequenceNumber']}: {record['Data']!r}")
    except ShardsExhaustedError:
        print("\n--- All shards read ---")
    finally:
        reader.close()


if __name__ == "__main__":
    asyncio.run(main())
