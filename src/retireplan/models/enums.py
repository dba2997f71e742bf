"""Closed enumerations for accounts, limits, phase-outs and filing status.

Per-member metadata lives in module-level tables keyed by member, so the
enums stay plain ``StrEnum``s and serialize as their names.
"""

from __future__ import annotations

from enum import StrEnum
from typing import NamedTuple, Optional, TypeVar

from retireplan.core.exceptions import InvalidInputError
from retireplan.models.rules import LimitTypeRule

E = TypeVar("E", bound=StrEnum)


def _parse(enum_cls: type[E], token: str) -> E:
    """Case-insensitive lookup of a member by name."""
    if not isinstance(token, str) or not token.strip():
        raise InvalidInputError(f"{enum_cls.__name__} token must be a non-empty string")
    try:
        return enum_cls[token.strip().upper()]
    except KeyError:
        raise InvalidInputError(f"Unknown {enum_cls.__name__}: {token!r}") from None


class TaxTreatment(StrEnum):
    TAX_DEFERRED = "TAX_DEFERRED"
    TAX_FREE = "TAX_FREE"
    TAXABLE = "TAXABLE"

    @property
    def display_name(self) -> str:
        return _TAX_TREATMENT_NAMES[self]

    @classmethod
    def parse(cls, token: str) -> TaxTreatment:
        return _parse(cls, token)


_TAX_TREATMENT_NAMES = {
    TaxTreatment.TAX_DEFERRED: "Tax-Deferred",
    TaxTreatment.TAX_FREE: "Tax-Free",
    TaxTreatment.TAXABLE: "Taxable",
}


class PhaseOutAccountType(StrEnum):
    ROTH_IRA = "ROTH_IRA"
    TRADITIONAL_IRA = "TRADITIONAL_IRA"
    TRADITIONAL_IRA_SPOUSE_COVERED = "TRADITIONAL_IRA_SPOUSE_COVERED"

    @property
    def display_name(self) -> str:
        return _PHASE_OUT_INFO[self][0]

    @property
    def description(self) -> str:
        return _PHASE_OUT_INFO[self][1]

    @classmethod
    def parse(cls, token: str) -> PhaseOutAccountType:
        return _parse(cls, token)


_PHASE_OUT_INFO = {
    PhaseOutAccountType.ROTH_IRA: ("Roth IRA", "Contribution phase-out based on MAGI"),
    PhaseOutAccountType.TRADITIONAL_IRA: (
        "Traditional IRA", "Deduction phase-out when covered by workplace plan",
    ),
    PhaseOutAccountType.TRADITIONAL_IRA_SPOUSE_COVERED: (
        "Traditional IRA (Spouse Covered)",
        "Deduction phase-out when spouse is covered by workplace plan",
    ),
}


class _AccountInfo(NamedTuple):
    display_name: str
    tax_treatment: TaxTreatment
    employer_sponsored: bool
    phase_out: Optional[PhaseOutAccountType] = None


class AccountType(StrEnum):
    TRADITIONAL_401K = "TRADITIONAL_401K"
    ROTH_401K = "ROTH_401K"
    TRADITIONAL_IRA = "TRADITIONAL_IRA"
    ROTH_IRA = "ROTH_IRA"
    SEP_IRA = "SEP_IRA"
    SIMPLE_IRA = "SIMPLE_IRA"
    HSA_SELF = "HSA_SELF"
    HSA_FAMILY = "HSA_FAMILY"
    ACCOUNT_403B = "ACCOUNT_403B"
    ACCOUNT_457B = "ACCOUNT_457B"

    @property
    def display_name(self) -> str:
        return _ACCOUNT_INFO[self].display_name

    @property
    def tax_treatment(self) -> TaxTreatment:
        return _ACCOUNT_INFO[self].tax_treatment

    @property
    def employer_sponsored(self) -> bool:
        return _ACCOUNT_INFO[self].employer_sponsored

    @property
    def phase_out_account_type(self) -> Optional[PhaseOutAccountType]:
        """Phase-out schedule that governs this account, if any."""
        return _ACCOUNT_INFO[self].phase_out

    def to_storage_value(self) -> str:
        """Column/key token; 403(b) and 457(b) are stored as "403B" and "457B"."""
        return _STORAGE_OVERRIDES.get(self, self.name)

    @classmethod
    def from_storage_value(cls, value: str) -> AccountType:
        """Inverse of :meth:`to_storage_value`. Exact match only."""
        member = _STORAGE_LOOKUP.get(value)
        if member is None:
            raise InvalidInputError(f"Unknown stored account type: {value!r}")
        return member

    @classmethod
    def parse(cls, token: str) -> AccountType:
        """Accept a member name or storage value, ignoring case."""
        if isinstance(token, str):
            member = _STORAGE_LOOKUP.get(token.strip().upper())
            if member is not None:
                return member
        return _parse(cls, token)


_ACCOUNT_INFO = {
    AccountType.TRADITIONAL_401K: _AccountInfo("Traditional 401(k)", TaxTreatment.TAX_DEFERRED, True),
    AccountType.ROTH_401K: _AccountInfo("Roth 401(k)", TaxTreatment.TAX_FREE, True),
    AccountType.TRADITIONAL_IRA: _AccountInfo(
        "Traditional IRA", TaxTreatment.TAX_DEFERRED, False, PhaseOutAccountType.TRADITIONAL_IRA,
    ),
    AccountType.ROTH_IRA: _AccountInfo(
        "Roth IRA", TaxTreatment.TAX_FREE, False, PhaseOutAccountType.ROTH_IRA,
    ),
    AccountType.SEP_IRA: _AccountInfo("SEP IRA", TaxTreatment.TAX_DEFERRED, False),
    AccountType.SIMPLE_IRA: _AccountInfo("SIMPLE IRA", TaxTreatment.TAX_DEFERRED, True),
    AccountType.HSA_SELF: _AccountInfo("HSA (Self-only)", TaxTreatment.TAX_FREE, False),
    AccountType.HSA_FAMILY: _AccountInfo("HSA (Family)", TaxTreatment.TAX_FREE, False),
    AccountType.ACCOUNT_403B: _AccountInfo("403(b)", TaxTreatment.TAX_DEFERRED, True),
    AccountType.ACCOUNT_457B: _AccountInfo("457(b)", TaxTreatment.TAX_DEFERRED, True),
}

_STORAGE_OVERRIDES = {
    AccountType.ACCOUNT_403B: "403B",
    AccountType.ACCOUNT_457B: "457B",
}

_STORAGE_LOOKUP = {member.to_storage_value(): member for member in AccountType}


class LimitType(StrEnum):
    BASE = "BASE"
    CATCHUP_50 = "CATCHUP_50"
    CATCHUP_55 = "CATCHUP_55"
    CATCHUP_60_63 = "CATCHUP_60_63"
    EMPLOYER_TOTAL = "EMPLOYER_TOTAL"
    COMPENSATION_LIMIT = "COMPENSATION_LIMIT"

    @property
    def display_name(self) -> str:
        return _LIMIT_TYPE_INFO[self][0]

    @property
    def rule(self) -> LimitTypeRule:
        return _LIMIT_TYPE_INFO[self][1]

    @property
    def minimum_age(self) -> Optional[int]:
        return self.rule.minimum_age

    @property
    def maximum_age(self) -> Optional[int]:
        return self.rule.maximum_age

    @property
    def has_age_requirement(self) -> bool:
        return self.rule.has_age_requirement

    def is_eligible(self, age: int) -> bool:
        """Check ``age`` (as of December 31 of the contribution year)."""
        return self.rule.is_eligible(age)

    @classmethod
    def parse(cls, token: str) -> LimitType:
        return _parse(cls, token)


_LIMIT_TYPE_INFO = {
    LimitType.BASE: ("Base Limit", LimitTypeRule()),
    LimitType.CATCHUP_50: ("Catch-up (50+)", LimitTypeRule(minimum_age=50)),
    LimitType.CATCHUP_55: ("Catch-up (55+)", LimitTypeRule(minimum_age=55)),
    LimitType.CATCHUP_60_63: (
        "Super Catch-up (60-63)", LimitTypeRule(minimum_age=60, maximum_age=63),
    ),
    LimitType.EMPLOYER_TOTAL: ("Total 415(c) Limit", LimitTypeRule()),
    LimitType.COMPENSATION_LIMIT: ("Compensation Limit", LimitTypeRule()),
}


class FilingStatus(StrEnum):
    SINGLE = "SINGLE"
    MARRIED_FILING_JOINTLY = "MARRIED_FILING_JOINTLY"
    MARRIED_FILING_SEPARATELY = "MARRIED_FILING_SEPARATELY"
    HEAD_OF_HOUSEHOLD = "HEAD_OF_HOUSEHOLD"

    @property
    def display_name(self) -> str:
        return _FILING_STATUS_NAMES[self]

    @classmethod
    def parse(cls, token: str) -> FilingStatus:
        return _parse(cls, token)


_FILING_STATUS_NAMES = {
    FilingStatus.SINGLE: "Single",
    FilingStatus.MARRIED_FILING_JOINTLY: "Married Filing Jointly",
    FilingStatus.MARRIED_FILING_SEPARATELY: "Married Filing Separately",
    FilingStatus.HEAD_OF_HOUSEHOLD: "Head of Household",
}
