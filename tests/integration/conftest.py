"""Integration test fixtures: LocalStack DynamoDB."""

from __future__ import annotations

import os

import boto3
import pytest

# Default LocalStack endpoint
LOCALSTACK_URL = os.environ.get("LOCALSTACK_URL", "http://localhost:4566")
TABLE_SUFFIX = "-inttest"


def _localstack_available() -> bool:
    """Check if LocalStack is reachable."""
    try:
        client = boto3.client("dynamodb", region_name="us-east-1", endpoint_url=LOCALSTACK_URL)
        client.list_tables()
        return True
    except Exception:
        return False


skip_no_localstack = pytest.mark.skipif(
    not _localstack_available(),
    reason="LocalStack not available",
)


@pytest.fixture(scope="session")
def localstack_ddb():
    """DynamoDB resource pointing at LocalStack."""
    return boto3.resource("dynamodb", region_name="us-east-1", endpoint_url=LOCALSTACK_URL)


@pytest.fixture(scope="session")
def seeded_tables(localstack_ddb):
    """Create and seed the catalog tables via the seed script."""
    from seed_dynamodb import create_tables, seed_limit_data

    create_tables(localstack_ddb, suffix=TABLE_SUFFIX)
    seed_limit_data(suffix=TABLE_SUFFIX, endpoint_url=LOCALSTACK_URL)
    return TABLE_SUFFIX
