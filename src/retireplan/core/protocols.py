"""Protocol interfaces for RetirePlan abstractions.

The service and API layers talk to storage only through these Protocols;
structural typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from retireplan.models.enums import AccountType, FilingStatus, LimitType, PhaseOutAccountType
    from retireplan.models.limits import LimitFact, PhaseOutRangeFact


# ---------------------------------------------------------------------------
# Limit Catalog
# ---------------------------------------------------------------------------

@runtime_checkable
class ILimitCatalog(Protocol):
    """Published contribution limits and MAGI phase-out ranges, keyed by natural key."""

    def find_limit(
        self, year: int, account_type: AccountType, limit_type: LimitType
    ) -> LimitFact | None: ...

    def find_limits_for_year(self, year: int) -> list[LimitFact]: ...

    def find_limits_for_year_and_account_type(
        self, year: int, account_type: AccountType
    ) -> list[LimitFact]: ...

    def find_phase_out_range(
        self, year: int, filing_status: FilingStatus, account_type: PhaseOutAccountType
    ) -> PhaseOutRangeFact | None: ...

    def find_phase_out_ranges_for_year(self, year: int) -> list[PhaseOutRangeFact]: ...

    def years_with_data(self) -> list[int]: ...

    def has_data_for_year(self, year: int) -> bool: ...

    def put_limit(self, fact: LimitFact) -> None: ...

    def put_phase_out_range(self, fact: PhaseOutRangeFact) -> None: ...


# ---------------------------------------------------------------------------
# Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...
