"""Published IRS facts: contribution limits and MAGI phase-out ranges.

Both fact types are loaded once per publication cycle and only read during
resolution, so the models are frozen. Validation here is the ingestion gate:
a malformed fact never reaches a catalog backend.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from retireplan.core.types import MAX_YEAR, MIN_YEAR
from retireplan.models.enums import AccountType, FilingStatus, LimitType, PhaseOutAccountType

# decimal(12,2)
_MONEY = {"max_digits": 12, "decimal_places": 2}

# Python names in code, camelCase keys on the wire.
_WIRE = ConfigDict(alias_generator=to_camel, populate_by_name=True)
_FROZEN_WIRE = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class LimitFact(BaseModel):
    """Dollar limit for one (year, account type, limit type)."""

    model_config = _FROZEN_WIRE

    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    account_type: AccountType
    limit_type: LimitType
    amount: Decimal = Field(ge=0, **_MONEY)

    @property
    def key(self) -> tuple[int, AccountType, LimitType]:
        return (self.year, self.account_type, self.limit_type)


class PhaseOutRangeFact(BaseModel):
    """MAGI window [magi_start, magi_end] over which a limit phases out linearly."""

    model_config = _FROZEN_WIRE

    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    filing_status: FilingStatus
    account_type: PhaseOutAccountType
    magi_start: Decimal = Field(ge=0, **_MONEY)
    magi_end: Decimal = Field(ge=0, **_MONEY)

    @model_validator(mode="after")
    def _check_threshold_order(self) -> PhaseOutRangeFact:
        if self.magi_start >= self.magi_end:
            raise ValueError(
                f"magi_start ({self.magi_start}) must be less than magi_end ({self.magi_end})"
            )
        return self

    @property
    def key(self) -> tuple[int, FilingStatus, PhaseOutAccountType]:
        return (self.year, self.filing_status, self.account_type)


_ACCOUNT_ORDER = {member: i for i, member in enumerate(AccountType)}
_LIMIT_ORDER = {member: i for i, member in enumerate(LimitType)}
_FILING_ORDER = {member: i for i, member in enumerate(FilingStatus)}
_PHASE_OUT_ORDER = {member: i for i, member in enumerate(PhaseOutAccountType)}


def limit_sort_key(fact: LimitFact) -> tuple[int, int, int]:
    """Year, then enum declaration order, so every backend lists facts alike."""
    return (fact.year, _ACCOUNT_ORDER[fact.account_type], _LIMIT_ORDER[fact.limit_type])


def phase_out_sort_key(fact: PhaseOutRangeFact) -> tuple[int, int, int]:
    return (fact.year, _FILING_ORDER[fact.filing_status], _PHASE_OUT_ORDER[fact.account_type])


class AccountTypeLimits(BaseModel):
    """Every limit published for one account type in one year."""

    model_config = _WIRE

    year: int
    account_type: AccountType
    limits: list[LimitFact] = Field(default_factory=list)


class YearlyLimits(BaseModel):
    """All limits and phase-out ranges published for a year."""

    model_config = _WIRE

    year: int
    contribution_limits: list[LimitFact] = Field(default_factory=list)
    phase_out_ranges: list[PhaseOutRangeFact] = Field(default_factory=list)


class ResolvedLimit(BaseModel):
    """Phase-out-adjusted ceiling for one person context."""

    model_config = _WIRE

    year: int
    account_type: AccountType
    limit_type: LimitType
    filing_status: FilingStatus
    magi: Decimal
    amount: Decimal
