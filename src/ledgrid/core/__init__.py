"""ledgrid のコア（波形シェイパー / Signal / mirror / Grid / パラメータ）。"""

from __future__ import annotations

from .grid import Cell, Grid, PixelRect, clamp_grid_size, quantize, speed_from_control
from .mirror import fold, mirror_amounts
from .parameters import (
    GRID_PARAM_META,
    SIGNAL_PARAM_META,
    GridParam,
    ParamMeta,
    SignalParam,
    format_param,
    grid_param_value,
    set_grid_param,
    set_signal_param,
    signal_param_value,
)
from .signal import Signal, apply_cutoff, frequency_from_control
from .waveform import shape_wave

__all__ = [
    "Cell",
    "GRID_PARAM_META",
    "Grid",
    "GridParam",
    "ParamMeta",
    "PixelRect",
    "SIGNAL_PARAM_META",
    "Signal",
    "SignalParam",
    "apply_cutoff",
    "clamp_grid_size",
    "fold",
    "format_param",
    "frequency_from_control",
    "grid_param_value",
    "mirror_amounts",
    "quantize",
    "set_grid_param",
    "set_signal_param",
    "shape_wave",
    "signal_param_value",
    "speed_from_control",
]
