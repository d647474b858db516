"""フレーム書き出し。"""

from __future__ import annotations

from .image import export_png, render_image

__all__ = ["export_png", "render_image"]
