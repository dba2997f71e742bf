"""Contribution limit endpoints."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Query, Request

from retireplan.core.exceptions import DataNotFoundError
from retireplan.models.enums import AccountType, FilingStatus, LimitType, PhaseOutAccountType
from retireplan.models.limits import AccountTypeLimits, LimitFact, ResolvedLimit, YearlyLimits
from retireplan.services.limits_service import ContributionLimitsService, validate_year
from retireplan.services.resolver import LimitResolver

router = APIRouter(tags=["limits"])


def _service(request: Request) -> ContributionLimitsService:
    return request.app.state.limits_service


def _resolver(request: Request) -> LimitResolver:
    return request.app.state.resolver


@router.get("/years")
def get_available_years(request: Request) -> list[int]:
    """Years with published limits, newest first."""
    return _service(request).get_available_years()


@router.get("/{year}")
def get_limits_by_year(request: Request, year: int) -> YearlyLimits:
    limits = _service(request).get_limits_by_year(year)
    if limits is None:
        raise DataNotFoundError("Contribution limits", f"year: {year}")
    return limits


@router.get("/{year}/{account_type}")
def get_limits_by_year_and_account_type(
    request: Request, year: int, account_type: str
) -> AccountTypeLimits:
    parsed = AccountType.parse(account_type)
    limits = _service(request).get_limits_by_year_and_account_type(year, parsed)
    if limits is None:
        raise DataNotFoundError("Contribution limits", f"year: {year}, account type: {parsed}")
    return limits


@router.get("/{year}/{account_type}/eligible")
def get_eligible_limits(
    request: Request,
    year: int,
    account_type: str,
    age: int = Query(ge=0, description="Age as of December 31 of the contribution year"),
) -> list[LimitFact]:
    """Limit types the contributor qualifies for at ``age``."""
    validate_year(year)
    return _resolver(request).eligible_limit_types(AccountType.parse(account_type), year, age)


@router.get("/{year}/{account_type}/reduced")
def get_reduced_limit(
    request: Request,
    year: int,
    account_type: str,
    filing_status: str,
    magi: Decimal = Query(ge=0, max_digits=12, decimal_places=2),
    limit_type: str = LimitType.BASE.value,
    phase_out_account_type: str | None = None,
) -> ResolvedLimit:
    """Phase-out-adjusted limit for a filing status and MAGI."""
    validate_year(year)
    parsed_account = AccountType.parse(account_type)
    parsed_status = FilingStatus.parse(filing_status)
    parsed_limit = LimitType.parse(limit_type)
    schedule = (
        PhaseOutAccountType.parse(phase_out_account_type) if phase_out_account_type else None
    )

    amount = _resolver(request).resolve_reduced_limit(
        year, parsed_status, magi, parsed_account, parsed_limit, schedule,
    )
    if amount is None:
        raise DataNotFoundError(
            "Contribution limit",
            f"year: {year}, account type: {parsed_account}, limit type: {parsed_limit}",
        )
    return ResolvedLimit(
        year=year,
        account_type=parsed_account,
        limit_type=parsed_limit,
        filing_status=parsed_status,
        magi=magi,
        amount=amount,
    )
