"""LimitResolver: catalog facts plus person context to a contribution ceiling.

Phase-out math uses two rounding stages and they must stay separate:

    pct     = (magi - start) / (end - start)   -> 4 places, ROUND_HALF_UP
    reduced = base - base * pct                -> 0 places, ROUND_UP

Collapsing them into one step changes results for some inputs.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, ROUND_UP, Context, Decimal
from typing import Optional

from retireplan.core.exceptions import InvalidInputError
from retireplan.core.protocols import ILimitCatalog
from retireplan.core.types import PERCENTAGE_PLACES, WHOLE_DOLLAR
from retireplan.models.enums import AccountType, FilingStatus, LimitType, PhaseOutAccountType
from retireplan.models.limits import LimitFact, PhaseOutRangeFact

logger = logging.getLogger(__name__)

# Wide enough that the quantize calls are the only rounding that happens.
_EXACT = Context(prec=50)

_ZERO = Decimal("0")
_ONE = Decimal("1")

# Schedules a caller may substitute for the one an account type implies.
_ALLOWED_SCHEDULES = {
    PhaseOutAccountType.ROTH_IRA: frozenset({PhaseOutAccountType.ROTH_IRA}),
    PhaseOutAccountType.TRADITIONAL_IRA: frozenset({
        PhaseOutAccountType.TRADITIONAL_IRA,
        PhaseOutAccountType.TRADITIONAL_IRA_SPOUSE_COVERED,
    }),
}


def phase_out_percentage(phase_out: PhaseOutRangeFact, magi: Decimal) -> Decimal:
    """Share of the limit phased out at ``magi``, in [0, 1].

    Flat 0 at or below ``magi_start``, flat 1 at or above ``magi_end``,
    linear in between.
    """
    if magi <= phase_out.magi_start:
        return _ZERO
    if magi >= phase_out.magi_end:
        return _ONE
    over = _EXACT.subtract(magi, phase_out.magi_start)
    width = _EXACT.subtract(phase_out.magi_end, phase_out.magi_start)
    return _EXACT.divide(over, width).quantize(PERCENTAGE_PLACES, rounding=ROUND_HALF_UP)


def reduced_limit(base_limit: Decimal, phase_out: PhaseOutRangeFact, magi: Decimal) -> Decimal:
    """Contribution ceiling after phase-out, rounded up to whole dollars."""
    pct = phase_out_percentage(phase_out, magi)
    reduction = _EXACT.multiply(base_limit, pct)
    return _EXACT.subtract(base_limit, reduction).quantize(WHOLE_DOLLAR, rounding=ROUND_UP)


def _schedule_for(
    account_type: AccountType, override: Optional[PhaseOutAccountType]
) -> Optional[PhaseOutAccountType]:
    implied = account_type.phase_out_account_type
    if override is None:
        return implied
    if override not in _ALLOWED_SCHEDULES.get(implied, frozenset()):
        raise InvalidInputError(
            f"Phase-out schedule {override} does not apply to account type {account_type}"
        )
    return override


class LimitResolver:
    """Stateless resolution over an :class:`ILimitCatalog`.

    Ages are integers as of December 31 of the contribution year; converting
    a birthdate is the caller's job.
    """

    def __init__(self, catalog: ILimitCatalog) -> None:
        self._catalog = catalog

    def eligible_limit_types(
        self, account_type: AccountType, year: int, age_at_year_end: int
    ) -> list[LimitFact]:
        """Facts for (year, account type) whose age rule admits ``age_at_year_end``.

        Returns the matched set; summing base and catch-up amounts is left
        to the caller.
        """
        if age_at_year_end < 0:
            raise InvalidInputError(f"age must be non-negative, got {age_at_year_end}")
        facts = self._catalog.find_limits_for_year_and_account_type(year, account_type)
        eligible = [f for f in facts if f.limit_type.is_eligible(age_at_year_end)]
        logger.debug(
            "Eligible limits for %s/%s at age %d: %s",
            year, account_type, age_at_year_end, [f.limit_type.value for f in eligible],
        )
        return eligible

    def resolve_reduced_limit(
        self,
        year: int,
        filing_status: FilingStatus,
        magi: Decimal,
        account_type: AccountType,
        limit_type: LimitType = LimitType.BASE,
        phase_out_account_type: Optional[PhaseOutAccountType] = None,
    ) -> Optional[Decimal]:
        """Phase-out-adjusted limit, or ``None`` when no base limit is published.

        ``phase_out_account_type`` overrides the schedule implied by the
        account type, e.g. TRADITIONAL_IRA_SPOUSE_COVERED for a traditional
        IRA. Only schedules of the same IRA family are accepted; anything else
        raises InvalidInputError. With no schedule or no range on file the base
        amount applies unmodified.
        """
        if magi < 0:
            raise InvalidInputError(f"magi must be non-negative, got {magi}")
        schedule = _schedule_for(account_type, phase_out_account_type)

        base = self._catalog.find_limit(year, account_type, limit_type)
        if base is None:
            logger.debug("No %s limit for %s in %s", limit_type, account_type, year)
            return None

        if schedule is None:
            return base.amount

        phase_out = self._catalog.find_phase_out_range(year, filing_status, schedule)
        if phase_out is None:
            logger.debug("No %s phase-out for %s in %s; full limit applies",
                         schedule, filing_status, year)
            return base.amount

        reduced = reduced_limit(base.amount, phase_out, magi)
        logger.debug(
            "Reduced %s %s limit for %s in %s at MAGI %s: %s -> %s",
            account_type, limit_type, filing_status, year, magi, base.amount, reduced,
        )
        return reduced

    def calculate_reduced_roth_ira_limit(
        self, year: int, filing_status: FilingStatus, magi: Decimal
    ) -> Optional[Decimal]:
        return self.resolve_reduced_limit(year, filing_status, magi, AccountType.ROTH_IRA)
