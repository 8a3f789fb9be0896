from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Sequence

from wvclient.vectordb.client import WeaviateClient
from wvclient.vectordb.config import ClientConfig
from wvclient.vectordb.query import DEFAULT_DISTANCE, DEFAULT_LIMIT


logger = logging.getLogger("wvclient")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run a nearText similarity search against a Weaviate class",
    )
    parser.add_argument(
        "query",
        help="Free-form text used to search the class",
    )
    parser.add_argument(
        "--class",
        dest="class_name",
        required=True,
        help="Class (collection) to search",
    )
    parser.add_argument(
        "--field",
        dest="fields",
        action="append",
        required=True,
        help="Property to return for each hit (can be repeated)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help=f"Maximum number of hits to return (default: {DEFAULT_LIMIT})",
    )
    parser.add_argument(
        "--distance",
        type=float,
        default=DEFAULT_DISTANCE,
        help=f"Maximum vector distance for a hit (default: {DEFAULT_DISTANCE})",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override Weaviate URL (defaults to WEAVIATE_URL env variable)",
    )
    parser.add_argument(
        "--api-key",
        dest="api_key",
        default=None,
        help="Override Weaviate API key (defaults to WEAVIATE_API_KEY env variable)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ClientConfig:
    config = ClientConfig.from_env()
    if args.url:
        config.url = args.url
    if args.api_key:
        config.api_key = args.api_key
    return config


def format_hits(hits: Sequence[dict[str, Any]]) -> str:
    if not hits:
        return "Results (0)\nNo results found."

    lines: list[str] = [f"Results ({len(hits)})"]
    for index, hit in enumerate(hits, start=1):
        lines.append("")
        lines.append(f"{index}.")
        for line in json.dumps(hit, indent=2, ensure_ascii=False).splitlines():
            lines.append(f"   {line}")

    return "\n".join(lines)


async def run(args: argparse.Namespace) -> list[dict[str, Any]]:
    async with WeaviateClient(build_config(args)) as client:
        return await client.search(
            args.query,
            args.class_name,
            args.fields,
            limit=args.limit,
            distance=args.distance,
        )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    args = parse_args()

    if args.limit <= 0:
        print("--limit must be a positive integer", file=sys.stderr)
        sys.exit(2)

    hits = asyncio.run(run(args))
    print(format_hits(hits))


if __name__ == "__main__":
    main()
