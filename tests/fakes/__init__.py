"""Shared test doubles: re-export memory backends plus a small 2025 catalog."""

from __future__ import annotations

from decimal import Decimal

from retireplan.models.enums import AccountType, FilingStatus, LimitType, PhaseOutAccountType
from retireplan.models.limits import LimitFact, PhaseOutRangeFact
from retireplan.persistence.memory_backend import MemoryCacheBackend, MemoryLimitCatalog


def limit(year: int, account_type: AccountType, limit_type: LimitType, amount: str) -> LimitFact:
    return LimitFact(year=year, account_type=account_type, limit_type=limit_type,
                     amount=Decimal(amount))


def phase_out(year: int, filing_status: FilingStatus, account_type: PhaseOutAccountType,
              start: str, end: str) -> PhaseOutRangeFact:
    return PhaseOutRangeFact(year=year, filing_status=filing_status, account_type=account_type,
                             magi_start=Decimal(start), magi_end=Decimal(end))


def sample_catalog() -> MemoryLimitCatalog:
    """2025 401(k), 403(b) and IRA limits with Roth/Traditional IRA phase-outs."""
    return MemoryLimitCatalog(
        limits=[
            limit(2025, AccountType.TRADITIONAL_401K, LimitType.BASE, "23500.00"),
            limit(2025, AccountType.TRADITIONAL_401K, LimitType.CATCHUP_50, "7500.00"),
            limit(2025, AccountType.TRADITIONAL_401K, LimitType.CATCHUP_60_63, "11250.00"),
            limit(2025, AccountType.TRADITIONAL_401K, LimitType.EMPLOYER_TOTAL, "70000.00"),
            limit(2025, AccountType.ACCOUNT_403B, LimitType.BASE, "23500.00"),
            limit(2025, AccountType.ROTH_IRA, LimitType.BASE, "7000.00"),
            limit(2025, AccountType.ROTH_IRA, LimitType.CATCHUP_50, "1000.00"),
            limit(2025, AccountType.TRADITIONAL_IRA, LimitType.BASE, "7000.00"),
            limit(2025, AccountType.HSA_SELF, LimitType.BASE, "4300.00"),
            limit(2025, AccountType.HSA_SELF, LimitType.CATCHUP_55, "1000.00"),
            limit(2024, AccountType.ROTH_IRA, LimitType.BASE, "7000.00"),
        ],
        phase_outs=[
            phase_out(2025, FilingStatus.SINGLE, PhaseOutAccountType.ROTH_IRA,
                      "150000.00", "165000.00"),
            phase_out(2025, FilingStatus.MARRIED_FILING_JOINTLY, PhaseOutAccountType.ROTH_IRA,
                      "236000.00", "246000.00"),
            phase_out(2025, FilingStatus.SINGLE, PhaseOutAccountType.TRADITIONAL_IRA,
                      "79000.00", "89000.00"),
            phase_out(2025, FilingStatus.MARRIED_FILING_JOINTLY,
                      PhaseOutAccountType.TRADITIONAL_IRA_SPOUSE_COVERED,
                      "236000.00", "246000.00"),
        ],
    )


__all__ = ["MemoryCacheBackend", "MemoryLimitCatalog", "limit", "phase_out", "sample_catalog"]
