"""parameter_gui.rows（行モデルと編集の反映）をテスト。"""

from __future__ import annotations

from ledgrid.core.grid import Grid
from ledgrid.core.parameters import GRID_TARGET, GridParam, SignalParam
from ledgrid.interactive.parameter_gui.rows import apply_parameter_edit, build_parameter_rows


def _row(grid: Grid, key: str):
    return next(r for r in build_parameter_rows(grid) if r.key == key)


def test_build_parameter_rows_orders_global_then_channels() -> None:
    grid = Grid(10.0, 10.0, grid_x=4, grid_y=3)
    rows = build_parameter_rows(grid)

    assert len(rows) == len(GridParam) + 3 * len(SignalParam)
    assert [r.target for r in rows[: len(GridParam)]] == [GRID_TARGET] * len(GridParam)
    targets = [r.target for r in rows[len(GridParam) :]]
    assert targets == ["red"] * 7 + ["green"] * 7 + ["blue"] * 7
    assert _row(grid, "grid.gridY").value == 3.0
    assert _row(grid, "grid.gridY").label == "gridY: 3"


def test_apply_parameter_edit_clamps_and_writes_signal() -> None:
    grid = Grid(10.0, 10.0, grid_x=4, grid_y=4)
    row = _row(grid, "green.shape")

    assert apply_parameter_edit(grid, row, 1.7)
    assert grid.signal("green").shape == 1.0

    row = _row(grid, "green.shape")
    assert not apply_parameter_edit(grid, row, 5.0)


def test_apply_parameter_edit_resizes_grid() -> None:
    grid = Grid(10.0, 10.0, grid_x=4, grid_y=4)
    assert apply_parameter_edit(grid, _row(grid, "grid.gridX"), 9.4)
    assert grid.grid_x == 9
    assert len(grid.cells) == 36


def test_apply_parameter_edit_speed_uses_cubic_remap() -> None:
    grid = Grid(10.0, 10.0, grid_x=2, grid_y=2)
    assert apply_parameter_edit(grid, _row(grid, "grid.speed"), -0.1)
    assert grid.speed_control == -0.1
    assert grid.speed < 0.0
