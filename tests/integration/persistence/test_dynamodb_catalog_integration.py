"""Integration tests for DynamoDBLimitCatalog against LocalStack."""

from __future__ import annotations

from decimal import Decimal

import pytest

from retireplan.models.enums import AccountType, FilingStatus, LimitType, PhaseOutAccountType
from retireplan.persistence.dynamodb_backend import DynamoDBLimitCatalog
from retireplan.services.resolver import LimitResolver
from tests.integration.conftest import LOCALSTACK_URL, skip_no_localstack


@skip_no_localstack
class TestDynamoDBIntegration:
    @pytest.fixture
    def store(self, seeded_tables):
        return DynamoDBLimitCatalog(
            table_suffix=seeded_tables,
            region="us-east-1",
            endpoint_url=LOCALSTACK_URL,
        )

    def test_years_from_seed(self, store):
        assert store.years_with_data()[:2] == [2025, 2024]

    def test_401k_limits_2025(self, store):
        facts = store.find_limits_for_year_and_account_type(2025, AccountType.TRADITIONAL_401K)
        assert len(facts) == 5

    def test_roth_phase_out_2025(self, store):
        rng = store.find_phase_out_range(2025, FilingStatus.SINGLE, PhaseOutAccountType.ROTH_IRA)
        assert rng.magi_start == Decimal("150000")

    def test_resolves_against_seeded_tables(self, store):
        resolver = LimitResolver(store)
        amount = resolver.resolve_reduced_limit(
            2025, FilingStatus.SINGLE, Decimal("157500.00"), AccountType.ROTH_IRA, LimitType.BASE,
        )
        assert amount == Decimal("3500")
