# どこで: `src/ledgrid/interactive/runtime/frame_loop.py`。
# 何を: 一定間隔で Grid のフレーム更新を呼び出すフレームループ（start/stop 付き）を提供する。
# なぜ: ホストのスケジューラ（pyglet.clock）と Grid の 1 フレーム処理を切り離し、停止経路を明示するため。

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ledgrid.core.grid import Grid

_logger = logging.getLogger(__name__)


class FrameLoop:
    """Grid を 1/fps 秒ごとに 1 フレーム進める。

    1 回の `step()` は「Grid.update()（tick/位相/全セル評価）→ on_frame」を最後まで実行し、
    途中でスケジューラへ制御を戻さない。パラメータの書き換えはフレーム間にだけ起きる前提。

    Parameters
    ----------
    grid : Grid
        更新対象。
    fps : float
        目標フレームレート。正の値のみ。
    on_frame : Callable[[Grid], None] | None
        各フレームの評価後に呼ぶコールバック（描画同期や MIDI 反映など）。
    clock : Any | None
        `schedule_interval(fn, interval)` / `unschedule(fn)` を持つスケジューラ。
        None の場合は `pyglet.clock` を使う。
    """

    def __init__(
        self,
        grid: Grid,
        *,
        fps: float,
        on_frame: Callable[[Grid], None] | None = None,
        clock: Any | None = None,
    ) -> None:
        fps_f = float(fps)
        if fps_f <= 0.0:
            raise ValueError(f"fps は正の値である必要があります: got={fps!r}")
        self._grid = grid
        self._interval = 1.0 / fps_f
        self._on_frame = on_frame
        self._clock = clock
        self._running = False
        self.frame_count = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def interval(self) -> float:
        return self._interval

    def _resolve_clock(self) -> Any:
        if self._clock is None:
            import pyglet

            self._clock = pyglet.clock
        return self._clock

    def _on_tick(self, _dt: float) -> None:
        self.step()

    def step(self) -> None:
        """1 フレーム分を実行する。"""

        self._grid.update()
        self.frame_count += 1
        if self._on_frame is not None:
            self._on_frame(self._grid)

    def start(self) -> None:
        """フレームループを開始する（開始済みなら何もしない）。"""

        if self._running:
            return
        self._resolve_clock().schedule_interval(self._on_tick, self._interval)
        self._running = True
        _logger.info("frame loop started: interval=%.4fs", self._interval)

    def stop(self) -> None:
        """フレームループを停止する（停止済みなら何もしない）。"""

        if not self._running:
            return
        self._resolve_clock().unschedule(self._on_tick)
        self._running = False
        _logger.info("frame loop stopped after %d frames", self.frame_count)


__all__ = ["FrameLoop"]
