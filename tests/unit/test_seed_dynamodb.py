"""Tests for DynamoDB seed script."""

from __future__ import annotations

import json
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

from retireplan.core.exceptions import InvalidInputError
from retireplan.models.enums import AccountType, LimitType
from retireplan.persistence.dynamodb_backend import YEARS_CACHE_KEY, DynamoDBLimitCatalog
from retireplan.persistence.memory_backend import MemoryCacheBackend
from seed_dynamodb import create_tables, seed_limit_data


@pytest.fixture
def ddb():
    with mock_aws():
        yield boto3.resource("dynamodb", region_name="us-east-1")


class TestCreateTables:
    def test_creates_both_tables(self, ddb):
        create_tables(ddb, suffix="-test")
        client = boto3.client("dynamodb", region_name="us-east-1")
        tables = client.list_tables()["TableNames"]
        assert sorted(tables) == [
            "retireplan-contribution-limits-test",
            "retireplan-phase-out-ranges-test",
        ]

    def test_idempotent_skips_existing(self, ddb):
        create_tables(ddb, suffix="-test")
        create_tables(ddb, suffix="-test")  # should not raise
        client = boto3.client("dynamodb", region_name="us-east-1")
        assert len(client.list_tables()["TableNames"]) == 2


class TestSeedLimitData:
    def test_seeds_bundled_limits(self, ddb):
        create_tables(ddb, suffix="-test")
        assert seed_limit_data(suffix="-test") == (49, 18)
        resp = ddb.Table("retireplan-contribution-limits-test").scan()
        assert resp["Count"] == 49

    def test_seeds_phase_out_ranges(self, ddb):
        create_tables(ddb, suffix="-test")
        seed_limit_data(suffix="-test")
        resp = ddb.Table("retireplan-phase-out-ranges-test").scan()
        assert resp["Count"] == 18

    def test_seeded_catalog_is_queryable(self, ddb):
        create_tables(ddb, suffix="-test")
        seed_limit_data(suffix="-test")
        catalog = DynamoDBLimitCatalog(table_suffix="-test")
        assert catalog.years_with_data() == [2025, 2024]
        fact = catalog.find_limit(2024, AccountType.ACCOUNT_457B, LimitType.BASE)
        assert fact.amount == 23000

    def test_drops_stale_cached_years(self, ddb):
        create_tables(ddb, suffix="-test")
        cache = MemoryCacheBackend()
        cache.setex(YEARS_CACHE_KEY, 300, "[2024]")
        seed_limit_data(suffix="-test", cache=cache)
        assert cache.get(YEARS_CACHE_KEY) is None
        catalog = DynamoDBLimitCatalog(table_suffix="-test", cache=cache)
        assert catalog.years_with_data() == [2025, 2024]

    def test_rejects_malformed_seed(self, ddb, tmp_path: Path):
        create_tables(ddb, suffix="-test")
        seed = tmp_path / "bad.json"
        seed.write_text(json.dumps({"phaseOutRanges": [{
            "year": 2025, "filingStatus": "SINGLE", "accountType": "ROTH_IRA",
            "magiStart": "165000.00", "magiEnd": "150000.00",
        }]}))
        with pytest.raises(InvalidInputError):
            seed_limit_data(suffix="-test", seed_path=seed)
        assert ddb.Table("retireplan-phase-out-ranges-test").scan()["Count"] == 0
