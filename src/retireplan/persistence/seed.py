"""Load published limit facts from a JSON seed file into a catalog.

Every record passes through the pydantic fact models, so a malformed row
(e.g. magiStart >= magiEnd) fails the whole load before anything is written.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from retireplan.core.exceptions import InvalidInputError
from retireplan.core.protocols import ILimitCatalog
from retireplan.models.enums import AccountType, FilingStatus, LimitType, PhaseOutAccountType
from retireplan.models.limits import LimitFact, PhaseOutRangeFact

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = Path(__file__).resolve().parent / "data" / "limits_seed.json"


def parse_limit(record: dict[str, Any]) -> LimitFact:
    """Build a LimitFact from a camelCase seed record."""
    try:
        return LimitFact(
            year=record["year"],
            account_type=AccountType.parse(record["accountType"]),
            limit_type=LimitType.parse(record["limitType"]),
            amount=str(record["amount"]),
        )
    except (KeyError, ValidationError) as exc:
        raise InvalidInputError(f"Malformed limit record {record!r}: {exc}") from exc


def parse_phase_out(record: dict[str, Any]) -> PhaseOutRangeFact:
    """Build a PhaseOutRangeFact from a camelCase seed record."""
    try:
        return PhaseOutRangeFact(
            year=record["year"],
            filing_status=FilingStatus.parse(record["filingStatus"]),
            account_type=PhaseOutAccountType.parse(record["accountType"]),
            magi_start=str(record["magiStart"]),
            magi_end=str(record["magiEnd"]),
        )
    except (KeyError, ValidationError) as exc:
        raise InvalidInputError(f"Malformed phase-out record {record!r}: {exc}") from exc


def parse_seed(data: dict[str, Any]) -> tuple[list[LimitFact], list[PhaseOutRangeFact]]:
    limits = [parse_limit(r) for r in data.get("limits", [])]
    phase_outs = [parse_phase_out(r) for r in data.get("phaseOutRanges", [])]
    return limits, phase_outs


def load_seed_file(catalog: ILimitCatalog, path: Path | str = DEFAULT_SEED_PATH) -> tuple[int, int]:
    """Validate and write every fact in ``path``.

    Returns:
        Tuple of (limit count, phase-out range count).
    """
    data = json.loads(Path(path).read_text())
    limits, phase_outs = parse_seed(data)

    for fact in limits:
        catalog.put_limit(fact)
    for fact in phase_outs:
        catalog.put_phase_out_range(fact)

    logger.info("Loaded %d limits and %d phase-out ranges from %s",
                len(limits), len(phase_outs), path)
    return len(limits), len(phase_outs)
