"""ContributionLimitsService: year/account/filing-status views over the catalog."""

from __future__ import annotations

import logging
from typing import Optional

from retireplan.core.exceptions import InvalidInputError
from retireplan.core.protocols import ILimitCatalog
from retireplan.core.types import MAX_YEAR, MIN_YEAR
from retireplan.models.enums import AccountType, FilingStatus, LimitType, PhaseOutAccountType
from retireplan.models.limits import AccountTypeLimits, LimitFact, PhaseOutRangeFact, YearlyLimits

logger = logging.getLogger(__name__)


def validate_year(year: int) -> int:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidInputError(f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")
    return year


class ContributionLimitsService:
    """Read-only lookups; every "nothing published" answer is ``None`` or ``[]``."""

    def __init__(self, catalog: ILimitCatalog) -> None:
        self._catalog = catalog

    def get_limits_by_year(self, year: int) -> Optional[YearlyLimits]:
        validate_year(year)
        if not self._catalog.has_data_for_year(year):
            logger.info("No contribution limits published for %s", year)
            return None
        return YearlyLimits(
            year=year,
            contribution_limits=self.get_contribution_limits(year),
            phase_out_ranges=self.get_phase_out_ranges(year),
        )

    def get_limits_by_year_and_account_type(
        self, year: int, account_type: AccountType
    ) -> Optional[AccountTypeLimits]:
        validate_year(year)
        limits = self._catalog.find_limits_for_year_and_account_type(year, account_type)
        if not limits:
            return None
        return AccountTypeLimits(year=year, account_type=account_type, limits=limits)

    def get_limit(
        self, year: int, account_type: AccountType, limit_type: LimitType
    ) -> Optional[LimitFact]:
        validate_year(year)
        return self._catalog.find_limit(year, account_type, limit_type)

    def get_contribution_limits(self, year: int) -> list[LimitFact]:
        return self._catalog.find_limits_for_year(validate_year(year))

    def get_phase_out_ranges(self, year: int) -> list[PhaseOutRangeFact]:
        return self._catalog.find_phase_out_ranges_for_year(validate_year(year))

    def get_phase_out_ranges_by_filing_status(
        self, year: int, filing_status: FilingStatus
    ) -> list[PhaseOutRangeFact]:
        return [r for r in self.get_phase_out_ranges(year) if r.filing_status == filing_status]

    def get_phase_out_range(
        self, year: int, filing_status: FilingStatus, account_type: PhaseOutAccountType
    ) -> Optional[PhaseOutRangeFact]:
        validate_year(year)
        return self._catalog.find_phase_out_range(year, filing_status, account_type)

    def get_available_years(self) -> list[int]:
        return self._catalog.years_with_data()

    def has_data_for_year(self, year: int) -> bool:
        return self._catalog.has_data_for_year(year)
