# どこで: `src/ledgrid/interactive/parameter_gui/rows.py`。
# 何を: コントロール面の行モデル（対象・パラメータ種別・メタ・現在値）と、編集の反映ロジックを提供する。
# なぜ: imgui の配線から切り離し、テスト可能に保つため。

from __future__ import annotations

from dataclasses import dataclass

from ledgrid.core.grid import Grid
from ledgrid.core.parameters import (
    GRID_PARAM_META,
    GRID_TARGET,
    SIGNAL_PARAM_META,
    GridParam,
    ParamMeta,
    SignalParam,
    clamp_to_meta,
    format_param,
    grid_param_value,
    set_grid_param,
    set_signal_param,
    signal_param_value,
)


@dataclass(frozen=True, slots=True)
class ParameterRow:
    """コントロール面の 1 行。

    target は `"grid"` またはチャンネル名（`"red"` 等）。
    """

    target: str
    param: SignalParam | GridParam
    meta: ParamMeta
    value: float

    @property
    def key(self) -> str:
        return f"{self.target}.{self.param.value}"

    @property
    def label(self) -> str:
        return f"{self.param.value}: {format_param(self.meta, self.value)}"


def build_parameter_rows(grid: Grid) -> list[ParameterRow]:
    """grid の現在値から、グローバル行 → チャンネル行（red, green, blue）の順で行を返す。"""

    rows: list[ParameterRow] = []
    for gp, meta in GRID_PARAM_META.items():
        rows.append(
            ParameterRow(target=GRID_TARGET, param=gp, meta=meta, value=grid_param_value(grid, gp))
        )
    for signal in grid.signals:
        for sp, meta in SIGNAL_PARAM_META.items():
            rows.append(
                ParameterRow(
                    target=signal.name,
                    param=sp,
                    meta=meta,
                    value=signal_param_value(signal, sp),
                )
            )
    return rows


def apply_parameter_edit(grid: Grid, row: ParameterRow, value: float) -> bool:
    """編集値をレンジに丸めて grid へ書き込み、値が変わったら True を返す。"""

    v = clamp_to_meta(row.meta, value)
    if v == row.value:
        return False
    if row.target == GRID_TARGET:
        set_grid_param(grid, GridParam(row.param), v)
    else:
        set_signal_param(grid.signal(row.target), SignalParam(row.param), v)
    return True


__all__ = ["ParameterRow", "apply_parameter_edit", "build_parameter_rows"]
