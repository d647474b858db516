from __future__ import annotations

import pytest

from ledgrid.core.grid import Grid
from ledgrid.core.parameters import GridParam, SignalParam
from ledgrid.interactive.midi.bindings import (
    apply_cc_bindings,
    cc_value_to_param,
    parse_binding_target,
)


def test_parse_binding_target() -> None:
    b = parse_binding_target("red.freqX")
    assert b.target == "red"
    assert b.param is SignalParam.FREQ_X

    g = parse_binding_target(" grid.mirror ")
    assert g.target == "grid"
    assert g.param is GridParam.MIRROR


@pytest.mark.parametrize("text", ["red", "red.", ".freqX", "purple.shape", "red.speed", "grid.shape"])
def test_parse_binding_target_rejects_invalid(text: str) -> None:
    with pytest.raises(ValueError):
        parse_binding_target(text)


def test_cc_value_to_param_maps_to_meta_range() -> None:
    geometry = parse_binding_target("blue.geometry").meta
    assert cc_value_to_param(geometry, 0.0) == -1.0
    assert cc_value_to_param(geometry, 0.5) == 0.0
    assert cc_value_to_param(geometry, 1.0) == 1.0
    assert cc_value_to_param(geometry, 2.0) == 1.0

    grid_x = parse_binding_target("grid.gridX").meta
    assert cc_value_to_param(grid_x, 0.0) == 2.0
    assert cc_value_to_param(grid_x, 1.0) == 128.0
    assert cc_value_to_param(grid_x, 0.5) == 65.0


def test_apply_cc_bindings_writes_only_bound_and_changed_values() -> None:
    grid = Grid(10.0, 10.0, grid_x=4, grid_y=4)
    bindings = [
        (1, parse_binding_target("grid.mirror")),
        (21, parse_binding_target("green.mod")),
        (22, parse_binding_target("blue.cutoff")),
    ]

    assert apply_cc_bindings(grid, {1: 0.5, 21: 1.0, 99: 0.3}, bindings)
    assert grid.mirror == 0.5
    assert grid.signal("green").mod == 1.0
    assert grid.signal("blue").cutoff == 0.0

    assert not apply_cc_bindings(grid, {1: 0.5, 21: 1.0}, bindings)


def test_apply_cc_bindings_grid_size() -> None:
    grid = Grid(10.0, 10.0, grid_x=4, grid_y=4)
    bindings = [(7, parse_binding_target("grid.gridY"))]
    assert apply_cc_bindings(grid, {7: 0.0}, bindings)
    assert grid.grid_y == 2
