"""
どこで: `src/ledgrid/core/parameters.py`。
何を: Signal / Grid の名前付き・範囲付きパラメータ（ParamMeta）と、タグ付き setter/getter を提供する。
なぜ: コントロール面（GUI / MIDI）が `signal[key] = value` のような動的代入に頼らず、
      列挙型のタグから型付きフィールドへ書き込めるようにするため。

Notes
-----
- setter は範囲の再検証をしない（範囲外を防ぐのはコントロール面の責務）。
  例外はグリッド寸法で、`Grid.resize()` 側で [2, 128] に丸める。
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ledgrid.core.grid import GRID_SIZE_MAX, GRID_SIZE_MIN, Grid, speed_from_control
from ledgrid.core.signal import Signal, frequency_from_control


def _fmt_float(value: float) -> str:
    return f"{float(value):.2f}"


def _fmt_frequency(value: float) -> str:
    return f"{frequency_from_control(value):.3f} hz"


def _fmt_shape(value: float) -> str:
    v = float(value)
    if v < 0.5:
        name = "tri→sin"
    elif v > 0.5:
        name = "sin→sqr"
    else:
        name = "sine"
    return f"{v:.2f} {name}"


def _fmt_drift(value: float) -> str:
    v = float(value)
    if v < 0.0:
        return f"snap {-v:.3f}"
    if v > 0.0:
        return f"+{v:.3f}/f"
    return "frozen"


def _fmt_speed(value: float) -> str:
    return f"{speed_from_control(value):.1f} t/f"


def _fmt_int(value: float) -> str:
    return str(int(round(float(value))))


@dataclass(frozen=True, slots=True)
class ParamMeta:
    """1 パラメータ分の UI メタ情報。

    Attributes
    ----------
    kind:
        `"float"` または `"int"`。
    ui_min, ui_max:
        コントロール面のレンジ。
    step:
        コントロールの刻み。
    group:
        表示上のグループ名。
    fmt:
        値 → 表示文字列のフォーマッタ。
    """

    kind: str
    ui_min: float
    ui_max: float
    step: float
    group: str
    fmt: Callable[[float], str] = _fmt_float


# Grid 全体のコントロールを指す target 名（チャンネル名と並べて使う）。
GRID_TARGET = "grid"


class SignalParam(str, Enum):
    """Signal のパラメータ種別。値は外部キー。"""

    GEOMETRY = "geometry"
    FREQ_X = "freqX"
    FREQ_Y = "freqY"
    DRIFT = "drift"
    SHAPE = "shape"
    CUTOFF = "cutoff"
    MOD = "mod"


class GridParam(str, Enum):
    """Grid 全体のコントロール種別。値は外部キー。"""

    SPEED = "speed"
    MIRROR = "mirror"
    GRID_X = "gridX"
    GRID_Y = "gridY"


SIGNAL_PARAM_META: dict[SignalParam, ParamMeta] = {
    SignalParam.GEOMETRY: ParamMeta(kind="float", ui_min=-1.0, ui_max=1.0, step=0.01, group="space"),
    SignalParam.FREQ_X: ParamMeta(
        kind="float", ui_min=-1.0, ui_max=1.0, step=0.001, group="space", fmt=_fmt_frequency
    ),
    SignalParam.FREQ_Y: ParamMeta(
        kind="float", ui_min=-1.0, ui_max=1.0, step=0.001, group="space", fmt=_fmt_frequency
    ),
    SignalParam.DRIFT: ParamMeta(
        kind="float", ui_min=-1.0, ui_max=1.0, step=0.001, group="time", fmt=_fmt_drift
    ),
    SignalParam.SHAPE: ParamMeta(
        kind="float", ui_min=0.0, ui_max=1.0, step=0.01, group="wave", fmt=_fmt_shape
    ),
    SignalParam.CUTOFF: ParamMeta(kind="float", ui_min=-1.0, ui_max=1.0, step=0.01, group="wave"),
    SignalParam.MOD: ParamMeta(kind="float", ui_min=-1.0, ui_max=1.0, step=0.01, group="mod"),
}

GRID_PARAM_META: dict[GridParam, ParamMeta] = {
    GridParam.SPEED: ParamMeta(
        kind="float", ui_min=-1.0, ui_max=1.0, step=0.001, group="time", fmt=_fmt_speed
    ),
    GridParam.MIRROR: ParamMeta(kind="float", ui_min=0.0, ui_max=1.0, step=0.01, group="space"),
    GridParam.GRID_X: ParamMeta(
        kind="int",
        ui_min=float(GRID_SIZE_MIN),
        ui_max=float(GRID_SIZE_MAX),
        step=1.0,
        group="grid",
        fmt=_fmt_int,
    ),
    GridParam.GRID_Y: ParamMeta(
        kind="int",
        ui_min=float(GRID_SIZE_MIN),
        ui_max=float(GRID_SIZE_MAX),
        step=1.0,
        group="grid",
        fmt=_fmt_int,
    ),
}

_SIGNAL_FIELDS: dict[SignalParam, str] = {
    SignalParam.GEOMETRY: "geometry",
    SignalParam.FREQ_X: "freq_x",
    SignalParam.FREQ_Y: "freq_y",
    SignalParam.DRIFT: "drift",
    SignalParam.SHAPE: "shape",
    SignalParam.CUTOFF: "cutoff",
    SignalParam.MOD: "mod",
}


def set_signal_param(signal: Signal, param: SignalParam | str, value: float) -> None:
    """タグ `param` が指す Signal のフィールドへ値を書き込む。"""

    field = _SIGNAL_FIELDS[SignalParam(param)]
    setattr(signal, field, float(value))


def signal_param_value(signal: Signal, param: SignalParam | str) -> float:
    field = _SIGNAL_FIELDS[SignalParam(param)]
    return float(getattr(signal, field))


def set_grid_param(grid: Grid, param: GridParam | str, value: float) -> None:
    """タグ `param` が指す Grid のコントロールへ値を書き込む。

    speed は 3 乗写像を通し、gridX/gridY は `Grid.resize()` でセル列を作り直す。
    寸法が変わらない書き込みでは作り直さない。
    """

    p = GridParam(param)
    if p is GridParam.SPEED:
        grid.set_speed_control(float(value))
    elif p is GridParam.MIRROR:
        grid.mirror = float(value)
    elif p is GridParam.GRID_X:
        if value != grid.grid_x:
            grid.resize(value, grid.grid_y)
    else:
        if value != grid.grid_y:
            grid.resize(grid.grid_x, value)


def grid_param_value(grid: Grid, param: GridParam | str) -> float:
    p = GridParam(param)
    if p is GridParam.SPEED:
        return float(grid.speed_control)
    if p is GridParam.MIRROR:
        return float(grid.mirror)
    if p is GridParam.GRID_X:
        return float(grid.grid_x)
    return float(grid.grid_y)


def format_param(meta: ParamMeta, value: float) -> str:
    """表示用ラベル文字列を返す。"""

    return meta.fmt(value)


def clamp_to_meta(meta: ParamMeta, value: float) -> float:
    """値を meta のレンジへ丸める（int は四捨五入）。

    コントロール面（GUI / MIDI）が書き込み前に使う。setter 自体は丸めない。
    """

    v = min(max(float(value), float(meta.ui_min)), float(meta.ui_max))
    if meta.kind == "int":
        v = float(int(round(v)))
    return v


__all__ = [
    "GRID_PARAM_META",
    "GRID_TARGET",
    "GridParam",
    "ParamMeta",
    "SIGNAL_PARAM_META",
    "SignalParam",
    "clamp_to_meta",
    "format_param",
    "grid_param_value",
    "set_grid_param",
    "set_signal_param",
    "signal_param_value",
]
