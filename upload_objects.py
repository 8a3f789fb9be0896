from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from tqdm import tqdm

from wvclient.exception_handler import BatchErrorLog, setup_logging
from wvclient.utils import load_items
from wvclient.vectordb.client import WeaviateClient
from wvclient.vectordb.config import ClientConfig
from wvclient.vectordb.models import BatchSummary


logger = logging.getLogger("wvclient")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Upload objects from a JSON, JSON Lines or text file into a Weaviate class"
    )
    parser.add_argument(
        "path",
        help="File holding the items to upload",
    )
    parser.add_argument(
        "--class",
        dest="class_name",
        required=True,
        help="Target class (collection) name",
    )
    parser.add_argument(
        "--batch-size",
        dest="batch_size",
        type=int,
        default=None,
        help="Objects per batch request (defaults to WEAVIATE_BATCH_SIZE or 2900)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to wait between batches (defaults to WEAVIATE_RATE_LIMIT_DELAY or 60)",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Weaviate URL (defaults to WEAVIATE_URL env variable)",
    )
    parser.add_argument(
        "--api-key",
        dest="api_key",
        default=None,
        help="Weaviate API key (defaults to WEAVIATE_API_KEY env variable)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ClientConfig:
    config = ClientConfig.from_env()
    if args.url:
        config.url = args.url
    if args.api_key:
        config.api_key = args.api_key
    if args.batch_size is not None:
        config.batch_size = args.batch_size
    if args.delay is not None:
        config.rate_limit_delay = args.delay
    return config


async def upload(args: argparse.Namespace, error_log: BatchErrorLog) -> BatchSummary:
    items = load_items(args.path)
    if not items:
        return BatchSummary()

    async with WeaviateClient(build_config(args)) as client:
        return await client.store_in_batch(items, args.class_name, error_log=error_log)


def main() -> None:
    args = parse_args()
    setup_logging(args.log_level)

    if args.batch_size is not None and args.batch_size <= 0:
        print("--batch-size must be a positive integer", file=sys.stderr)
        sys.exit(2)

    error_log = BatchErrorLog()
    try:
        summary = asyncio.run(upload(args, error_log))
    except KeyboardInterrupt:
        print("\n⚠️ Upload interrupted", file=sys.stderr)
        sys.exit(1)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        logger.exception("Failed to upload objects")
        print("❌ Upload failed. See log for details.", file=sys.stderr)
        sys.exit(1)

    if summary.batches == 0:
        print("❌ No items found to upload", file=sys.stderr)
        sys.exit(1)

    tqdm.write(
        f"✅ Uploaded {summary.vectorized} objects in {summary.batches} batches "
        f"({summary.errors} rejected, {summary.failed_batches} failed batches)"
    )

    report = error_log.format_error_report()
    if report:
        tqdm.write(report)

    if summary.failed_batches:
        sys.exit(1)


if __name__ == "__main__":
    main()
