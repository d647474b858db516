# どこで: `src/ledgrid/interactive/runtime/grid_window.py`。
# 何を: Grid のセルを pyglet の矩形として描く描画ウィンドウを提供する。
# なぜ: ラスタ表示（1 セル = 1 矩形の塗り）を core から切り離し、pyglet 依存をここに閉じ込めるため。

from __future__ import annotations

from typing import Any

from ledgrid.core.grid import Cell, Grid


def flip_rect_y(y: float, height: float, canvas_height: float) -> float:
    """左上原点の矩形 y を pyglet（左下原点）の y に変換する。"""

    return float(canvas_height) - float(y) - float(height)


class GridWindow:
    """Grid の色を毎フレーム反映して描く pyglet ウィンドウ。

    セル列が作り直された（resize）ときは矩形バッチも作り直す。
    """

    def __init__(
        self,
        grid: Grid,
        *,
        title: str = "ledgrid",
        position: tuple[int, int] | None = None,
    ) -> None:
        import pyglet

        self._pyglet = pyglet
        self._grid = grid
        w, h = grid.canvas_size
        self.window = pyglet.window.Window(
            width=int(round(w)),
            height=int(round(h)),
            caption=str(title),
            resizable=True,
        )
        if position is not None:
            self.window.set_location(int(position[0]), int(position[1]))

        self._batch: Any = None
        self._shapes: list[Any] = []
        self._cells_ref: list[Cell] | None = None
        self.window.push_handlers(on_draw=self._on_draw, on_resize=self._on_resize)
        self._closed = False

    def _rebuild(self) -> None:
        pyglet = self._pyglet
        grid = self._grid
        _canvas_w, canvas_h = grid.canvas_size
        batch = pyglet.graphics.Batch()
        shapes = []
        for cell in grid.cells:
            rect = cell.rect
            shapes.append(
                pyglet.shapes.Rectangle(
                    rect.x,
                    flip_rect_y(rect.y, rect.height, canvas_h),
                    rect.width,
                    rect.height,
                    color=cell.color,
                    batch=batch,
                )
            )
        self._batch = batch
        self._shapes = shapes
        self._cells_ref = grid.cells

    def sync(self) -> None:
        """Grid の直近フレームの色を矩形へ反映する。"""

        if self._cells_ref is not self._grid.cells:
            self._rebuild()
            return
        for shape, cell in zip(self._shapes, self._grid.cells):
            shape.color = cell.color

    def _on_draw(self) -> None:
        self.window.clear()
        if self._batch is not None:
            self._batch.draw()

    def _on_resize(self, width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            # 最小化などで 0 サイズになったときは寸法を据え置く。
            return
        self._grid.resize_canvas(float(width), float(height))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._shapes = []
        self._batch = None
        self.window.close()


__all__ = ["GridWindow", "flip_rect_y"]
