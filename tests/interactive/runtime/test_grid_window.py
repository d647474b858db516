from __future__ import annotations

from ledgrid.interactive.runtime.grid_window import flip_rect_y


def test_flip_rect_y_converts_top_left_to_bottom_left_origin() -> None:
    assert flip_rect_y(0.0, 100.0, 800.0) == 700.0
    assert flip_rect_y(700.0, 100.0, 800.0) == 0.0
    assert flip_rect_y(25.0, 50.0, 100.0) == 25.0
