"""ledgrid: 3 チャンネルの手続き的波形で LED 風セルグリッドをアニメーションさせるエンジン。"""

from __future__ import annotations

from ledgrid.core.grid import Grid
from ledgrid.core.signal import Signal

__all__ = ["Grid", "Signal"]
