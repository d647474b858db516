# どこで: `src/ledgrid/interactive/midi/bindings.py`。
# 何を: CC 番号とパラメータ（`red.freqX` / `grid.mirror` 等）の割り当てを解釈し、CC 値を反映する。
# なぜ: MIDI ポートの有無に依存せず、写像ロジックだけをテストできるようにするため。

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ledgrid.core.grid import CHANNEL_NAMES, Grid
from ledgrid.core.parameters import (
    GRID_PARAM_META,
    GRID_TARGET,
    SIGNAL_PARAM_META,
    GridParam,
    ParamMeta,
    SignalParam,
    clamp_to_meta,
    grid_param_value,
    set_grid_param,
    set_signal_param,
    signal_param_value,
)


@dataclass(frozen=True, slots=True)
class BindingTarget:
    """CC の書き込み先。target は `"grid"` またはチャンネル名。"""

    target: str
    param: SignalParam | GridParam
    meta: ParamMeta


def parse_binding_target(text: str) -> BindingTarget:
    """`"<target>.<key>"` をパースして返す。

    Raises
    ------
    ValueError
        形式・target・key のいずれかが不正な場合。
    """

    target, sep, key = str(text).strip().partition(".")
    if not sep or not target or not key:
        raise ValueError(f"binding は '<target>.<key>' 形式で指定してください: got={text!r}")

    if target == GRID_TARGET:
        try:
            gp = GridParam(key)
        except ValueError as exc:
            raise ValueError(f"未知の grid パラメータです: {key!r}") from exc
        return BindingTarget(target=target, param=gp, meta=GRID_PARAM_META[gp])

    if target not in CHANNEL_NAMES:
        raise ValueError(f"未知の binding target です: {target!r}")
    try:
        sp = SignalParam(key)
    except ValueError as exc:
        raise ValueError(f"未知の signal パラメータです: {key!r}") from exc
    return BindingTarget(target=target, param=sp, meta=SIGNAL_PARAM_META[sp])


def cc_value_to_param(meta: ParamMeta, value01: float) -> float:
    """0..1 の CC 値を meta のレンジへ線形に写像する（int は四捨五入）。"""

    v = min(max(float(value01), 0.0), 1.0)
    raw = float(meta.ui_min) + (float(meta.ui_max) - float(meta.ui_min)) * v
    return clamp_to_meta(meta, raw)


def apply_cc_bindings(
    grid: Grid,
    cc_values: Mapping[int, float],
    bindings: Iterable[tuple[int, BindingTarget]],
) -> bool:
    """割り当て済み CC の値を grid へ書き込み、どれか変わったら True を返す。"""

    changed_any = False
    for cc, binding in bindings:
        value01 = cc_values.get(int(cc))
        if value01 is None:
            continue
        value = cc_value_to_param(binding.meta, value01)
        if binding.target == GRID_TARGET:
            gp = GridParam(binding.param)
            if grid_param_value(grid, gp) == value:
                continue
            set_grid_param(grid, gp, value)
        else:
            signal = grid.signal(binding.target)
            sp = SignalParam(binding.param)
            if signal_param_value(signal, sp) == value:
                continue
            set_signal_param(signal, sp, value)
        changed_any = True
    return changed_any


__all__ = ["BindingTarget", "apply_cc_bindings", "cc_value_to_param", "parse_binding_target"]
