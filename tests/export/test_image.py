"""export.image（セル矩形のラスタライズと PNG 保存）をテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from ledgrid.core.grid import Grid
from ledgrid.export.image import export_png, render_image


def _evaluated_grid() -> Grid:
    grid = Grid(40.0, 20.0, grid_x=4, grid_y=2)
    grid.evaluate()
    return grid


def test_render_image_fills_each_cell_with_its_color() -> None:
    grid = _evaluated_grid()
    image = render_image(grid)

    assert image.mode == "RGB"
    assert image.size == (40, 20)
    for cell in grid.cells:
        cx = int(cell.rect.x + cell.rect.width / 2)
        cy = int(cell.rect.y + cell.rect.height / 2)
        assert image.getpixel((cx, cy)) == cell.color
        # 矩形の四隅も同じセル色で塗られている（隙間なし）。
        assert image.getpixel((int(cell.rect.x), int(cell.rect.y))) == cell.color
        x1 = int(cell.rect.x + cell.rect.width) - 1
        y1 = int(cell.rect.y + cell.rect.height) - 1
        assert image.getpixel((x1, y1)) == cell.color


def test_render_image_scale() -> None:
    grid = _evaluated_grid()
    image = render_image(grid, scale=2.5)
    assert image.size == (100, 50)
    last = grid.cells[-1]
    assert image.getpixel((99, 49)) == last.color


@pytest.mark.parametrize("scale", [0.0, -1.0])
def test_render_image_rejects_non_positive_scale(scale: float) -> None:
    with pytest.raises(ValueError):
        render_image(_evaluated_grid(), scale=scale)


def test_export_png_creates_parent_dirs(tmp_path: Path) -> None:
    grid = _evaluated_grid()
    out = export_png(grid, tmp_path / "nested" / "frame.png")

    assert out == tmp_path / "nested" / "frame.png"
    with Image.open(out) as loaded:
        assert loaded.size == (40, 20)
        assert loaded.convert("RGB").getpixel((15, 5)) == grid.cells[2].color
