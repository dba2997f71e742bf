"""DynamoDB backend implementing ILimitCatalog with optional Redis caching."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any

import boto3
from botocore.exceptions import ClientError

from retireplan.core.exceptions import CacheError, CatalogError
from retireplan.models.enums import AccountType, FilingStatus, LimitType, PhaseOutAccountType
from retireplan.models.limits import (
    LimitFact,
    PhaseOutRangeFact,
    limit_sort_key,
    phase_out_sort_key,
)

logger = logging.getLogger(__name__)

LIMITS_TABLE = "retireplan-contribution-limits"
PHASE_OUTS_TABLE = "retireplan-phase-out-ranges"

YEARS_CACHE_KEY = "limits:years"


def _year_pk(year: int) -> str:
    return f"YEAR#{year}"


def _limit_sk(account_type: AccountType, limit_type: LimitType | None = None) -> str:
    prefix = f"LIMIT#{account_type.to_storage_value()}#"
    return prefix if limit_type is None else f"{prefix}{limit_type.value}"


def _phase_out_sk(filing_status: FilingStatus, account_type: PhaseOutAccountType) -> str:
    return f"PHASEOUT#{filing_status.value}#{account_type.value}"


def limit_to_item(fact: LimitFact) -> dict[str, Any]:
    """Serialize a LimitFact into a DynamoDB item."""
    return {
        "PK": _year_pk(fact.year),
        "SK": _limit_sk(fact.account_type, fact.limit_type),
        "year": fact.year,
        "accountType": fact.account_type.to_storage_value(),
        "limitType": fact.limit_type.value,
        "amount": fact.amount,
    }


def item_to_limit(item: dict[str, Any]) -> LimitFact:
    return LimitFact(
        year=int(item["year"]),
        account_type=AccountType.from_storage_value(item["accountType"]),
        limit_type=LimitType(item["limitType"]),
        amount=Decimal(item["amount"]),
    )


def phase_out_to_item(fact: PhaseOutRangeFact) -> dict[str, Any]:
    """Serialize a PhaseOutRangeFact into a DynamoDB item."""
    return {
        "PK": _year_pk(fact.year),
        "SK": _phase_out_sk(fact.filing_status, fact.account_type),
        "year": fact.year,
        "filingStatus": fact.filing_status.value,
        "accountType": fact.account_type.value,
        "magiStart": fact.magi_start,
        "magiEnd": fact.magi_end,
    }


def item_to_phase_out(item: dict[str, Any]) -> PhaseOutRangeFact:
    return PhaseOutRangeFact(
        year=int(item["year"]),
        filing_status=FilingStatus(item["filingStatus"]),
        account_type=PhaseOutAccountType(item["accountType"]),
        magi_start=Decimal(item["magiStart"]),
        magi_end=Decimal(item["magiEnd"]),
    )


class DynamoDBLimitCatalog:
    """Production ILimitCatalog backed by DynamoDB + optional Redis cache."""

    CACHE_TTL = 300  # 5 minutes

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None, cache: Any = None,
                 cache_ttl: int | None = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        self._cache = cache
        self._cache_ttl = cache_ttl if cache_ttl is not None else self.CACHE_TTL
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    def _table(self, base: str):
        return self._ddb.Table(f"{base}{self._table_suffix}")

    def _get_item(self, table_base: str, pk: str, sk: str) -> dict[str, Any] | None:
        """Get a single item by PK + SK. Returns None if not found."""
        try:
            resp = self._table(table_base).get_item(Key={"PK": pk, "SK": sk})
        except ClientError as exc:
            raise CatalogError(f"DynamoDB get_item failed for {pk}/{sk}: {exc}") from exc
        return resp.get("Item")

    def _query(self, table_base: str, pk: str, sk_prefix: str | None = None,
               limit: int | None = None) -> list[dict[str, Any]]:
        """Query all items under a partition key, following pagination."""
        kwargs: dict[str, Any] = {
            "KeyConditionExpression": "PK = :pk",
            "ExpressionAttributeValues": {":pk": pk},
        }
        if sk_prefix is not None:
            kwargs["KeyConditionExpression"] = "PK = :pk AND begins_with(SK, :prefix)"
            kwargs["ExpressionAttributeValues"][":prefix"] = sk_prefix
        if limit is not None:
            kwargs["Limit"] = limit

        items: list[dict[str, Any]] = []
        tbl = self._table(table_base)
        try:
            while True:
                resp = tbl.query(**kwargs)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if last_key is None or (limit is not None and items):
                    return items
                kwargs["ExclusiveStartKey"] = last_key
        except ClientError as exc:
            raise CatalogError(f"DynamoDB query failed for {pk}: {exc}") from exc

    def _put_item(self, table_base: str, item: dict[str, Any]) -> None:
        try:
            self._table(table_base).put_item(Item=item)
        except ClientError as exc:
            raise CatalogError(
                f"DynamoDB put_item failed for {item['PK']}/{item['SK']}: {exc}"
            ) from exc

    # ---- ILimitCatalog methods ----

    def find_limit(
        self, year: int, account_type: AccountType, limit_type: LimitType
    ) -> LimitFact | None:
        item = self._get_item(LIMITS_TABLE, _year_pk(year), _limit_sk(account_type, limit_type))
        return item_to_limit(item) if item else None

    def find_limits_for_year(self, year: int) -> list[LimitFact]:
        items = self._query(LIMITS_TABLE, _year_pk(year))
        return sorted((item_to_limit(i) for i in items), key=limit_sort_key)

    def find_limits_for_year_and_account_type(
        self, year: int, account_type: AccountType
    ) -> list[LimitFact]:
        items = self._query(LIMITS_TABLE, _year_pk(year), sk_prefix=_limit_sk(account_type))
        return sorted((item_to_limit(i) for i in items), key=limit_sort_key)

    def find_phase_out_range(
        self, year: int, filing_status: FilingStatus, account_type: PhaseOutAccountType
    ) -> PhaseOutRangeFact | None:
        item = self._get_item(
            PHASE_OUTS_TABLE, _year_pk(year), _phase_out_sk(filing_status, account_type)
        )
        return item_to_phase_out(item) if item else None

    def find_phase_out_ranges_for_year(self, year: int) -> list[PhaseOutRangeFact]:
        items = self._query(PHASE_OUTS_TABLE, _year_pk(year))
        return sorted((item_to_phase_out(i) for i in items), key=phase_out_sort_key)

    def _cached_years(self) -> list[int] | None:
        if self._cache is None:
            return None
        try:
            cached = self._cache.get(YEARS_CACHE_KEY)
        except CacheError as exc:
            logger.warning("Year index cache read failed, scanning instead: %s", exc)
            return None
        return json.loads(cached) if cached is not None else None

    def _cache_years(self, years: list[int]) -> None:
        if self._cache is None:
            return
        try:
            self._cache.setex(YEARS_CACHE_KEY, self._cache_ttl, json.dumps(years))
        except CacheError as exc:
            logger.warning("Year index cache write failed: %s", exc)

    def _invalidate_years(self) -> None:
        if self._cache is None:
            return
        try:
            self._cache.delete(YEARS_CACHE_KEY)
        except CacheError as exc:
            logger.warning("Could not invalidate cached year index: %s", exc)

    def years_with_data(self) -> list[int]:
        cached = self._cached_years()
        if cached is not None:
            return cached

        years: set[int] = set()
        kwargs: dict[str, Any] = {
            "ProjectionExpression": "#y",
            "ExpressionAttributeNames": {"#y": "year"},
        }
        tbl = self._table(LIMITS_TABLE)
        try:
            while True:
                resp = tbl.scan(**kwargs)
                years.update(int(item["year"]) for item in resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if last_key is None:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except ClientError as exc:
            raise CatalogError(f"DynamoDB scan of {LIMITS_TABLE} failed: {exc}") from exc

        result = sorted(years, reverse=True)
        self._cache_years(result)
        return result

    def has_data_for_year(self, year: int) -> bool:
        return bool(self._query(LIMITS_TABLE, _year_pk(year), limit=1))

    def put_limit(self, fact: LimitFact) -> None:
        self._put_item(LIMITS_TABLE, limit_to_item(fact))
        self._invalidate_years()
        logger.debug("Stored limit %s", fact.key)

    def put_phase_out_range(self, fact: PhaseOutRangeFact) -> None:
        self._put_item(PHASE_OUTS_TABLE, phase_out_to_item(fact))
        logger.debug("Stored phase-out range %s", fact.key)
