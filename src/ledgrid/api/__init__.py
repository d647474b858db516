"""ledgrid の公開 API。"""

from __future__ import annotations

from .export import Export
from .run import run

__all__ = ["Export", "run"]
