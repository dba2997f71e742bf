"""RetirePlan exception hierarchy."""

from __future__ import annotations


class RetirePlanError(Exception):
    """Base exception for all RetirePlan errors."""


class InvalidInputError(RetirePlanError):
    """Caller supplied a malformed token, out-of-range year, or negative amount."""


class DataNotFoundError(RetirePlanError):
    """No published fact matches the requested criteria."""

    def __init__(self, resource: str, criteria: str) -> None:
        self.resource = resource
        self.criteria = criteria
        super().__init__(f"{resource} not found for {criteria}")


class CatalogError(RetirePlanError):
    """Limit catalog storage operation failed."""


class CacheError(RetirePlanError):
    """Redis cache operation failed."""
