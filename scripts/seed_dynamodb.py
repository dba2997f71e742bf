"""Create the limit catalog tables and load published IRS facts.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

import boto3

from retireplan.core.config import RedisConfig
from retireplan.core.protocols import ICacheBackend
from retireplan.persistence.dynamodb_backend import LIMITS_TABLE, PHASE_OUTS_TABLE, DynamoDBLimitCatalog
from retireplan.persistence.redis_backend import RedisCacheBackend
from retireplan.persistence.seed import DEFAULT_SEED_PATH, load_seed_file

TABLE_DEFINITIONS: list[dict[str, Any]] = [
    {"name": LIMITS_TABLE},
    {"name": PHASE_OUTS_TABLE},
]


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create both catalog tables. Skips if table already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for defn in TABLE_DEFINITIONS:
        table_name = f"{defn['name']}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"  Created table {table_name}")


def seed_limit_data(suffix: str = "", region: str = "us-east-1",
                    endpoint_url: str | None = None,
                    seed_path: Path | str = DEFAULT_SEED_PATH,
                    cache: ICacheBackend | None = None) -> tuple[int, int]:
    """Validate the seed file and write every fact through the catalog.

    Pass the service's ``cache`` so the cached year index is dropped.
    """
    catalog = DynamoDBLimitCatalog(table_suffix=suffix, region=region,
                                   endpoint_url=endpoint_url, cache=cache)
    limit_count, phase_out_count = load_seed_file(catalog, seed_path)
    print(f"  Seeded {limit_count} contribution limits")
    print(f"  Seeded {phase_out_count} phase-out ranges")
    return limit_count, phase_out_count


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed DynamoDB tables for RetirePlan")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--seed-file", default=str(DEFAULT_SEED_PATH), help="JSON file of published facts")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.table_suffix)

    redis_config = RedisConfig()
    cache = RedisCacheBackend(redis_config) if redis_config.enabled else None

    print("Seeding data...")
    seed_limit_data(
        suffix=args.table_suffix,
        region=args.region,
        endpoint_url=args.endpoint_url,
        seed_path=args.seed_file,
        cache=cache,
    )

    print("Done!")


if __name__ == "__main__":
    main()
