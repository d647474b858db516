# どこで: `src/ledgrid/interactive/parameter_gui/gui.py`。
# 何を: Grid / Signal のパラメータを pyimgui で編集する GUI（初期化/1フレーム描画/破棄）を提供する。
# なぜ: 依存の重いライフサイクル管理を 1 箇所に閉じ込め、他モジュールを純粋に保つため。

from __future__ import annotations

import time
from itertools import groupby
from typing import Any

from ledgrid.core.grid import Grid
from ledgrid.core.parameters import GRID_TARGET

from .rows import ParameterRow, apply_parameter_edit, build_parameter_rows


def _compute_window_backing_scale(gui_window: Any) -> float:
    """ウィンドウの backing scale（DPI 倍率）を返す。"""

    scale = getattr(gui_window, "scale", None)
    if scale is not None:
        return float(max(float(scale), 1.0))

    get_pixel_ratio = getattr(gui_window, "get_pixel_ratio", None)
    if callable(get_pixel_ratio):
        return float(max(float(get_pixel_ratio()), 1.0))  # type: ignore[call-arg]

    return 1.0


def section_title(target: str) -> str:
    """行グループの見出しを返す。"""

    if target == GRID_TARGET:
        return "global"
    return f"{target} signal"


class ParameterGUI:
    """pyimgui で Grid のパラメータを編集するための GUI。

    `draw_frame()` を呼ぶことで 1 フレーム分の UI を描画する。
    書き込み先は コンストラクタで受け取った `grid` だけで、グローバル状態は持たない。
    """

    def __init__(
        self,
        gui_window: Any,
        *,
        grid: Grid,
        title: str = "Parameters",
        font_size_base_px: float = 12.0,
    ) -> None:
        import imgui  # type: ignore[import-untyped]

        try:
            from imgui.integrations import (
                pyglet as imgui_pyglet,  # type: ignore[import-untyped]
            )
        except Exception as exc:
            raise RuntimeError(f"imgui.integrations.pyglet を import できない: {exc}") from exc

        self._window = gui_window
        self._grid = grid
        self._title = str(title)

        # ImGui は「グローバルな current context」を前提にするため、自前コンテキストを作って切り替えながら使う。
        self._imgui = imgui
        self._context = imgui.create_context()
        imgui.style_colors_dark()
        imgui.set_current_context(self._context)

        scale = _compute_window_backing_scale(gui_window)
        imgui.get_io().font_global_scale = float(font_size_base_px) / 13.0 * (1.0 / scale)

        self._renderer = imgui_pyglet.create_renderer(gui_window)
        self._prev_time = time.monotonic()
        self._closed = False

    def _draw_row(self, row: ParameterRow) -> bool:
        imgui = self._imgui
        meta = row.meta
        imgui.push_item_width(-220)
        if meta.kind == "int":
            changed, value = imgui.slider_int(
                f"##{row.key}", int(row.value), int(meta.ui_min), int(meta.ui_max)
            )
        else:
            changed, value = imgui.slider_float(
                f"##{row.key}",
                float(row.value),
                float(meta.ui_min),
                float(meta.ui_max),
                format="%.3f",
            )
        imgui.pop_item_width()
        imgui.same_line()
        imgui.text(row.label)
        if not changed:
            return False
        return apply_parameter_edit(self._grid, row, float(value))

    def draw_frame(self) -> bool:
        """1 フレーム分の GUI を描画し、変更があれば grid に反映して True を返す。

        `flip()` は呼ばない。呼び出し側がウィンドウのイベント駆動に任せる。
        """

        if self._closed:
            return False

        now = time.monotonic()
        dt = now - self._prev_time
        self._prev_time = now

        imgui = self._imgui
        imgui.set_current_context(self._context)

        io = imgui.get_io()
        io.display_size = (float(self._window.width), float(self._window.height))
        io.delta_time = float(max(dt, 1e-6))

        imgui.new_frame()
        imgui.set_next_window_position(0, 0)
        imgui.set_next_window_size(self._window.width, self._window.height)
        imgui.begin(
            self._title,
            flags=imgui.WINDOW_NO_RESIZE | imgui.WINDOW_NO_COLLAPSE | imgui.WINDOW_NO_TITLE_BAR,
        )

        grid = self._grid
        imgui.text(f"tick {grid.tick:.1f}  speed {grid.speed:.2f}  cells {len(grid.cells)}")
        if imgui.button("Reset clock"):
            grid.reset_clock()

        changed_any = False
        rows = build_parameter_rows(grid)
        for target, group in groupby(rows, key=lambda r: r.target):
            expanded, _visible = imgui.collapsing_header(
                section_title(target), flags=imgui.TREE_NODE_DEFAULT_OPEN
            )
            if not expanded:
                continue
            for row in group:
                changed_any = self._draw_row(row) or changed_any

        imgui.end()
        imgui.render()

        import pyglet

        pyglet.gl.glClearColor(0.12, 0.12, 0.12, 1.0)
        self._window.clear()
        self._renderer.render(imgui.get_draw_data())
        return bool(changed_any)

    def close(self) -> None:
        """GUI を終了し、コンテキストとウィンドウを破棄する。"""

        if self._closed:
            return
        self._closed = True

        shutdown = getattr(self._renderer, "shutdown", None)
        if callable(shutdown):
            shutdown()
        self._imgui.destroy_context(self._context)
        self._window.close()


__all__ = ["ParameterGUI", "section_title"]
