"""Shared constants for years and money precision."""

from __future__ import annotations

from decimal import Decimal

MIN_YEAR = 1900
MAX_YEAR = 2200

PERCENTAGE_PLACES = Decimal("0.0001")
WHOLE_DOLLAR = Decimal("1")
