"""
どこで: `src/ledgrid/api/run.py`。
何を: 描画ウィンドウ・パラメータ GUI・MIDI・フレームループを配線して対話実行する。
なぜ: 各コンポーネントに Grid を明示的に渡して組み立て、プロセス全体のシングルトンを持たないため。
"""

from __future__ import annotations

import logging
from pathlib import Path

from ledgrid.core.grid import Grid
from ledgrid.core.runtime_config import runtime_config, set_config_path
from ledgrid.interactive.midi import (
    BindingTarget,
    MidiController,
    apply_cc_bindings,
    create_midi_controller,
    parse_binding_target,
)
from ledgrid.interactive.runtime.frame_loop import FrameLoop

_logger = logging.getLogger(__name__)


def _make_on_frame(
    sync_view,
    midi: MidiController | None,
    bindings: list[tuple[int, BindingTarget]],
):
    """フレーム評価後に呼ぶコールバック（MIDI 反映 → 描画同期）を返す。"""

    def on_frame(grid: Grid) -> None:
        if midi is not None and midi.poll():
            apply_cc_bindings(grid, midi.cc, bindings)
        sync_view()

    return on_frame


def run(
    *,
    config_path: str | Path | None = None,
    grid_size: tuple[int, int] | None = None,
) -> None:
    """対話ウィンドウを開き、閉じられるまでアニメーションを実行する。

    Parameters
    ----------
    config_path : str | Path | None
        明示的に使う `config.yaml`。None の場合は既定の探索に従う。
    grid_size : tuple[int, int] | None
        初期グリッド寸法。None の場合は `config.yaml` の `grid.size`。
    """

    import pyglet

    from ledgrid.interactive.parameter_gui.gui import ParameterGUI
    from ledgrid.interactive.runtime.grid_window import GridWindow

    if config_path is not None:
        set_config_path(config_path)
    cfg = runtime_config()

    gx, gy = cfg.grid_size if grid_size is None else grid_size
    canvas_w, canvas_h = cfg.canvas_size
    grid = Grid(
        float(canvas_w),
        float(canvas_h),
        grid_x=gx,
        grid_y=gy,
        speed_control=cfg.speed_control,
        mirror=cfg.mirror,
    )
    grid.evaluate()

    bindings = [(cc, parse_binding_target(target)) for cc, target in cfg.midi_cc_bindings]
    midi = create_midi_controller(port_name=cfg.midi_port_name, priority_inputs=cfg.midi_inputs)
    if midi is not None:
        _logger.info("MIDI input: %s (%d bindings)", midi.port_name, len(bindings))

    draw_window = GridWindow(grid, position=cfg.window_pos_draw)
    gui_w, gui_h = cfg.parameter_gui_window_size
    gui_window = pyglet.window.Window(
        width=int(gui_w),
        height=int(gui_h),
        caption="ledgrid parameters",
        resizable=True,
    )
    gui_window.set_location(*cfg.window_pos_parameter_gui)
    gui = ParameterGUI(
        gui_window,
        grid=grid,
        font_size_base_px=cfg.parameter_gui_font_size_base_px,
    )

    def on_gui_draw() -> None:
        gui.draw_frame()

    def on_close() -> None:
        pyglet.app.exit()

    gui_window.push_handlers(on_draw=on_gui_draw, on_close=on_close)
    draw_window.window.push_handlers(on_close=on_close)

    loop = FrameLoop(grid, fps=cfg.fps, on_frame=_make_on_frame(draw_window.sync, midi, bindings))
    draw_window.sync()
    loop.start()
    try:
        pyglet.app.run(1.0 / float(cfg.fps))
    finally:
        loop.stop()
        if midi is not None:
            midi.close()
        gui.close()
        draw_window.close()


__all__ = ["run"]
