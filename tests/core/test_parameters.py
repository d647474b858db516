from __future__ import annotations

import pytest

from ledgrid.core.grid import Grid
from ledgrid.core.parameters import (
    GRID_PARAM_META,
    SIGNAL_PARAM_META,
    GridParam,
    SignalParam,
    clamp_to_meta,
    format_param,
    grid_param_value,
    set_grid_param,
    set_signal_param,
    signal_param_value,
)
from ledgrid.core.signal import Signal


def test_every_param_tag_has_meta() -> None:
    assert set(SIGNAL_PARAM_META) == set(SignalParam)
    assert set(GRID_PARAM_META) == set(GridParam)
    assert SIGNAL_PARAM_META[SignalParam.SHAPE].ui_min == 0.0
    assert GRID_PARAM_META[GridParam.MIRROR].ui_max == 1.0
    assert GRID_PARAM_META[GridParam.GRID_X].kind == "int"


def test_signal_param_setter_writes_typed_field() -> None:
    s = Signal("red")
    set_signal_param(s, SignalParam.FREQ_Y, 0.5)
    set_signal_param(s, "cutoff", -0.25)

    assert s.freq_y == 0.5
    assert s.cutoff == -0.25
    assert signal_param_value(s, "freqY") == 0.5


def test_signal_param_setter_does_not_clamp() -> None:
    s = Signal("red")
    set_signal_param(s, SignalParam.SHAPE, 3.0)
    assert s.shape == 3.0


def test_unknown_param_tag_raises() -> None:
    with pytest.raises(ValueError):
        set_signal_param(Signal("red"), "speed", 0.1)
    with pytest.raises(ValueError):
        set_grid_param(Grid(10.0, 10.0, grid_x=2, grid_y=2), "freqX", 0.1)


def test_grid_param_setter_routes_to_grid() -> None:
    grid = Grid(100.0, 100.0, grid_x=4, grid_y=4)

    set_grid_param(grid, GridParam.SPEED, 0.2)
    assert grid.speed_control == 0.2
    assert grid.speed == pytest.approx(8.0)

    set_grid_param(grid, GridParam.MIRROR, 0.75)
    assert grid.mirror == 0.75
    assert grid_param_value(grid, "mirror") == 0.75


def test_grid_size_param_resizes_only_when_changed() -> None:
    grid = Grid(100.0, 100.0, grid_x=4, grid_y=4)
    cells = grid.cells

    set_grid_param(grid, GridParam.GRID_X, 4)
    assert grid.cells is cells

    set_grid_param(grid, GridParam.GRID_Y, 6)
    assert grid.cells is not cells
    assert (grid.grid_x, grid.grid_y) == (4, 6)
    assert grid_param_value(grid, GridParam.GRID_Y) == 6.0

    set_grid_param(grid, GridParam.GRID_X, 1000)
    assert grid.grid_x == 128


def test_format_param_labels() -> None:
    freq = SIGNAL_PARAM_META[SignalParam.FREQ_X]
    assert format_param(freq, 0.5) == "1.250 hz"
    assert format_param(SIGNAL_PARAM_META[SignalParam.SHAPE], 0.5) == "0.50 sine"
    assert format_param(SIGNAL_PARAM_META[SignalParam.DRIFT], 0.0) == "frozen"
    assert format_param(SIGNAL_PARAM_META[SignalParam.DRIFT], -0.5) == "snap 0.500"
    assert format_param(GRID_PARAM_META[GridParam.SPEED], 0.1) == "1.0 t/f"
    assert format_param(GRID_PARAM_META[GridParam.GRID_X], 16.0) == "16"


def test_clamp_to_meta() -> None:
    shape = SIGNAL_PARAM_META[SignalParam.SHAPE]
    assert clamp_to_meta(shape, 1.5) == 1.0
    assert clamp_to_meta(shape, -0.5) == 0.0

    gx = GRID_PARAM_META[GridParam.GRID_X]
    assert clamp_to_meta(gx, 16.6) == 17.0
    assert clamp_to_meta(gx, 0.0) == 2.0
    assert clamp_to_meta(gx, 500.0) == 128.0
