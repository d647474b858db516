"""対話実行のランタイム（フレームループ / 描画ウィンドウ）。"""

from __future__ import annotations

from .frame_loop import FrameLoop

__all__ = ["FrameLoop"]
