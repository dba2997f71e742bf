"""In-memory backends: dict-backed catalog and cache for tests and local runs."""

from __future__ import annotations

from typing import Optional

from retireplan.models.enums import AccountType, FilingStatus, LimitType, PhaseOutAccountType
from retireplan.models.limits import (
    LimitFact,
    PhaseOutRangeFact,
    limit_sort_key,
    phase_out_sort_key,
)


class MemoryLimitCatalog:
    """Dict-backed ILimitCatalog keyed by each fact's natural key."""

    def __init__(
        self,
        limits: Optional[list[LimitFact]] = None,
        phase_outs: Optional[list[PhaseOutRangeFact]] = None,
    ) -> None:
        self._limits: dict[tuple[int, AccountType, LimitType], LimitFact] = {}
        self._phase_outs: dict[tuple[int, FilingStatus, PhaseOutAccountType], PhaseOutRangeFact] = {}
        for fact in limits or []:
            self.put_limit(fact)
        for fact in phase_outs or []:
            self.put_phase_out_range(fact)

    def find_limit(
        self, year: int, account_type: AccountType, limit_type: LimitType
    ) -> LimitFact | None:
        return self._limits.get((year, account_type, limit_type))

    def find_limits_for_year(self, year: int) -> list[LimitFact]:
        return sorted((f for f in self._limits.values() if f.year == year), key=limit_sort_key)

    def find_limits_for_year_and_account_type(
        self, year: int, account_type: AccountType
    ) -> list[LimitFact]:
        return [f for f in self.find_limits_for_year(year) if f.account_type == account_type]

    def find_phase_out_range(
        self, year: int, filing_status: FilingStatus, account_type: PhaseOutAccountType
    ) -> PhaseOutRangeFact | None:
        return self._phase_outs.get((year, filing_status, account_type))

    def find_phase_out_ranges_for_year(self, year: int) -> list[PhaseOutRangeFact]:
        return sorted(
            (f for f in self._phase_outs.values() if f.year == year), key=phase_out_sort_key
        )

    def years_with_data(self) -> list[int]:
        return sorted({year for year, _, _ in self._limits}, reverse=True)

    def has_data_for_year(self, year: int) -> bool:
        return any(key[0] == year for key in self._limits)

    def put_limit(self, fact: LimitFact) -> None:
        self._limits[fact.key] = fact

    def put_phase_out_range(self, fact: PhaseOutRangeFact) -> None:
        self._phase_outs[fact.key] = fact


class MemoryCacheBackend:
    """Dict-backed ICacheBackend for tests and local runs.

    Entries never expire; the TTL each key was written with is kept in
    ``ttls`` so callers can check what a catalog asked for.
    """

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value
        self.ttls[key] = ttl

    def delete(self, key: str) -> None:
        self._store.pop(key, None)
        self.ttls.pop(key, None)
