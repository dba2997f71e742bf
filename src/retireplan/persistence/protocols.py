"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from retireplan.core.protocols import ICacheBackend, ILimitCatalog

__all__ = ["ICacheBackend", "ILimitCatalog"]
