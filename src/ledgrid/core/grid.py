"""
どこで: `src/ledgrid/core/grid.py`。
何を: セルグリッドの寸法・3 本の Signal（red/green/blue）・セルごとの色状態を保持し、
      1 フレーム分の折り返し → Signal 評価 → チャンネル間変調 → 量子化を実行する。
なぜ: フレーム単位の状態遷移を 1 クラスに集約し、描画側は色配列と矩形だけを読めば済むようにするため。

変調チェーン
------------
red は `mod_input=0`、green は red の出力、blue は green の出力を位相変調入力として受け取る。
循環はなく、評価は常にこの順で直列に行う。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numba import njit  # type: ignore[import-untyped]

from ledgrid.core.mirror import fold_index, mirror_amounts
from ledgrid.core.signal import Signal, signal_value

_logger = logging.getLogger(__name__)

GRID_SIZE_MIN = 2
GRID_SIZE_MAX = 128
DEFAULT_GRID_SIZE = 32
SPEED_SCALE = 1000.0
# speed = 0.1³ × 1000 ≈ 1 tick / frame
DEFAULT_SPEED_CONTROL = 0.1

CHANNEL_NAMES = ("red", "green", "blue")


def clamp_grid_size(value: object, *, default: int = DEFAULT_GRID_SIZE) -> int:
    """グリッド 1 軸分のサイズ要求を [2, 128] の整数へ丸めて返す。

    数値として解釈できない入力（None / 文字列 / NaN / inf）は `default` を返す。
    """

    try:
        n = int(round(float(value)))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return int(default)
    return int(min(max(n, GRID_SIZE_MIN), GRID_SIZE_MAX))


def speed_from_control(control: float) -> float:
    """[-1, 1] の速度コントロールを符号付き speed へ写像する（`control³ × 1000`）。"""

    c = float(control)
    return c * c * c * SPEED_SCALE


@njit(cache=True)
def quantize_unit(value: float) -> int:
    """[0, 1] の値を 0..255 の整数へ量子化する（round-half-up, Numba）。"""
    q = math.floor(value * 255.0 + 0.5)
    if q < 0.0:
        return 0
    if q > 255.0:
        return 255
    return int(q)


@njit(cache=True)
def _evaluate_cells(
    cols: np.ndarray,
    rows: np.ndarray,
    grid_x: float,
    grid_y: float,
    tick: float,
    mx: float,
    my: float,
    params: np.ndarray,
    out: np.ndarray,
) -> None:
    """全セルを index 順に評価し、量子化した RGB を out へ書き込む（Numba）。

    params は shape (3, 7) で、各行が (fx, fy, geometry, shape, cutoff, phase, mod)。
    """
    n = cols.shape[0]
    n_channels = params.shape[0]
    for i in range(n):
        col = fold_index(cols[i], grid_x, mx)
        row = fold_index(rows[i], grid_y, my)
        mod_input = 0.0
        for ch in range(n_channels):
            v = signal_value(
                col,
                row,
                tick,
                grid_x,
                grid_y,
                params[ch, 0],
                params[ch, 1],
                params[ch, 2],
                params[ch, 3],
                params[ch, 4],
                params[ch, 5],
                params[ch, 6],
                mod_input,
            )
            out[i, ch] = quantize_unit(v)
            mod_input = v


@dataclass(frozen=True, slots=True)
class PixelRect:
    """キャンバス上のセル矩形（左上原点, px）。"""

    x: float
    y: float
    width: float
    height: float


@dataclass(slots=True)
class Cell:
    """1 セル分の静的な位置情報と、直近フレームの量子化 RGB。"""

    index: int
    col: int
    row: int
    rect: PixelRect
    color: tuple[int, int, int] = (0, 0, 0)


def _validate_canvas_dim(value: float, *, name: str) -> float:
    v = float(value)
    if not math.isfinite(v) or v <= 0.0:
        raise ValueError(f"{name} は正の有限値である必要があります: got={value!r}")
    return v


class Grid:
    """LED 風セルグリッドの状態とフレーム評価を担当する。

    Parameters
    ----------
    canvas_width, canvas_height : float
        描画キャンバスの寸法 [px]。正の有限値以外は `ValueError`。
    grid_x, grid_y : int
        列数/行数。[2, 128] へ丸める。
    speed_control : float
        速度コントロール（`speed = control³ × 1000`）。
    mirror : float
        折り返し量 [0, 1]。
    """

    def __init__(
        self,
        canvas_width: float = 800.0,
        canvas_height: float = 800.0,
        *,
        grid_x: object = DEFAULT_GRID_SIZE,
        grid_y: object = DEFAULT_GRID_SIZE,
        speed_control: float = DEFAULT_SPEED_CONTROL,
        mirror: float = 0.0,
    ) -> None:
        self._canvas_width = _validate_canvas_dim(canvas_width, name="canvas_width")
        self._canvas_height = _validate_canvas_dim(canvas_height, name="canvas_height")
        self.signals: tuple[Signal, Signal, Signal] = (
            Signal(CHANNEL_NAMES[0]),
            Signal(CHANNEL_NAMES[1]),
            Signal(CHANNEL_NAMES[2]),
        )
        self.tick = 0.0
        self.mirror = float(mirror)
        self.speed_control = 0.0
        self.speed = 0.0
        self.set_speed_control(speed_control)

        self._grid_x = clamp_grid_size(grid_x)
        self._grid_y = clamp_grid_size(grid_y)
        self._cells: list[Cell] = []
        self._cols = np.zeros((0,), dtype=np.float64)
        self._rows = np.zeros((0,), dtype=np.float64)
        self._colors = np.zeros((0, 3), dtype=np.uint8)
        self._build_cells()

    # --- 読み取り専用ビュー ---

    @property
    def grid_x(self) -> int:
        return self._grid_x

    @property
    def grid_y(self) -> int:
        return self._grid_y

    @property
    def canvas_size(self) -> tuple[float, float]:
        return self._canvas_width, self._canvas_height

    @property
    def cells(self) -> list[Cell]:
        """index 順のセル列。resize ごとに新しいリストへ置き換わる。"""
        return self._cells

    @property
    def colors(self) -> np.ndarray:
        """直近フレームの RGB（shape (N, 3), uint8）。次のフレームで上書きされる。"""
        return self._colors

    def signal(self, name: str) -> Signal:
        """チャンネル名（red/green/blue）から Signal を返す。"""

        for s in self.signals:
            if s.name == name:
                return s
        raise KeyError(f"未知のチャンネル名です: {name!r}")

    # --- 構築 / リサイズ ---

    def _build_cells(self) -> None:
        gx = self._grid_x
        gy = self._grid_y
        cell_w = self._canvas_width / gx
        cell_h = self._canvas_height / gy

        cells: list[Cell] = []
        for col in range(gx):
            for row in range(gy):
                rect = PixelRect(
                    x=col / gx * self._canvas_width,
                    y=row / gy * self._canvas_height,
                    width=cell_w,
                    height=cell_h,
                )
                cells.append(Cell(index=len(cells), col=col, row=row, rect=rect))

        # 列外側・行内側の index 順（index = col * grid_y + row）。
        self._cols = np.repeat(np.arange(gx, dtype=np.float64), gy)
        self._rows = np.tile(np.arange(gy, dtype=np.float64), gx)
        self._colors = np.zeros((gx * gy, 3), dtype=np.uint8)
        self._cells = cells

    def resize(self, grid_x: object, grid_y: object) -> None:
        """グリッド寸法を変更し、セル列を作り直す（前フレームの色は引き継がない）。"""

        self._grid_x = clamp_grid_size(grid_x)
        self._grid_y = clamp_grid_size(grid_y)
        self._build_cells()
        _logger.debug("grid resized: %dx%d (%d cells)", self._grid_x, self._grid_y, len(self._cells))

    def resize_canvas(self, canvas_width: float, canvas_height: float) -> None:
        """キャンバス寸法を変更し、セル矩形を再計算する。"""

        self._canvas_width = _validate_canvas_dim(canvas_width, name="canvas_width")
        self._canvas_height = _validate_canvas_dim(canvas_height, name="canvas_height")
        self._build_cells()

    # --- クロック ---

    def set_speed_control(self, control: float) -> None:
        self.speed_control = float(control)
        self.speed = speed_from_control(self.speed_control)

    def reset_clock(self) -> None:
        """tick と全チャンネルの位相を 0 に戻す。"""

        self.tick = 0.0
        for s in self.signals:
            s.phase = 0.0

    # --- フレーム評価 ---

    def evaluate(self) -> np.ndarray:
        """現在の (signals, tick, mirror) で全セルを評価し、RGB 配列を返す。

        クロックや位相は進めない。周波数キャッシュはここで 1 回だけ更新する。
        """

        for s in self.signals:
            s.refresh_frequencies()

        params = np.array(
            [[s.fx, s.fy, s.geometry, s.shape, s.cutoff, s.phase, s.mod] for s in self.signals],
            dtype=np.float64,
        )
        mx, my = mirror_amounts(self.mirror)
        _evaluate_cells(
            self._cols,
            self._rows,
            float(self._grid_x),
            float(self._grid_y),
            float(self.tick),
            float(mx),
            float(my),
            params,
            self._colors,
        )

        for cell, (r, g, b) in zip(self._cells, self._colors.tolist()):
            cell.color = (r, g, b)
        return self._colors

    def update(self) -> np.ndarray:
        """1 フレーム分進める（tick += speed → 位相ドリフト → evaluate）。"""

        self.tick += self.speed
        for s in self.signals:
            s.advance_phase()
        return self.evaluate()


def quantize(value: float) -> int:
    """[0, 1] の値を 0..255 へ量子化する（`round(value*255)`, 0.5 は切り上げ）。"""

    return int(quantize_unit(float(value)))


__all__ = [
    "CHANNEL_NAMES",
    "Cell",
    "DEFAULT_GRID_SIZE",
    "DEFAULT_SPEED_CONTROL",
    "GRID_SIZE_MAX",
    "GRID_SIZE_MIN",
    "Grid",
    "PixelRect",
    "clamp_grid_size",
    "quantize",
    "quantize_unit",
    "speed_from_control",
]
