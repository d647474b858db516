"""パラメータ GUI（コントロール面）。"""

from __future__ import annotations

from .rows import ParameterRow, apply_parameter_edit, build_parameter_rows

__all__ = ["ParameterRow", "apply_parameter_edit", "build_parameter_rows"]
