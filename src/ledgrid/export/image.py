"""
どこで: `src/ledgrid/export/image.py`。
何を: Grid の直近フレーム（セルごとの RGB と矩形）を Pillow の画像へラスタライズし、PNG に保存する。
なぜ: 対話ウィンドウ無しでもフレームを確認・比較できるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageDraw

from ledgrid.core.grid import Grid


def _scaled_edge(value: float, scale: float) -> int:
    return int(round(float(value) * float(scale)))


def render_image(grid: Grid, *, scale: float = 1.0) -> Image.Image:
    """各セル矩形を単色で塗った RGB 画像を返す。

    Parameters
    ----------
    grid : Grid
        評価済みの Grid（`evaluate()` / `update()` 後の色を使う）。
    scale : float, default 1.0
        キャンバス寸法に対する拡大率。正の値のみ。

    Notes
    -----
    矩形の辺は `round(edge * scale)` の整数ピクセルへ丸めるため、隣接セル間に隙間は出ない。
    """

    s = float(scale)
    if s <= 0.0:
        raise ValueError(f"scale は正の値である必要があります: got={scale!r}")

    canvas_w, canvas_h = grid.canvas_size
    width_px = max(1, _scaled_edge(canvas_w, s))
    height_px = max(1, _scaled_edge(canvas_h, s))
    image = Image.new("RGB", (width_px, height_px), (0, 0, 0))
    draw = ImageDraw.Draw(image)

    for cell in grid.cells:
        rect = cell.rect
        x0 = _scaled_edge(rect.x, s)
        y0 = _scaled_edge(rect.y, s)
        x1 = _scaled_edge(rect.x + rect.width, s)
        y1 = _scaled_edge(rect.y + rect.height, s)
        if x1 <= x0 or y1 <= y0:
            continue
        # ImageDraw の矩形は終端を含むので 1px 手前までを塗る。
        draw.rectangle((x0, y0, x1 - 1, y1 - 1), fill=cell.color)

    return image


def export_png(grid: Grid, path: str | Path, *, scale: float = 1.0) -> Path:
    """`render_image()` の結果を PNG として保存し、保存先パスを返す。"""

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    render_image(grid, scale=scale).save(out, format="PNG")
    return out


__all__ = ["export_png", "render_image"]
