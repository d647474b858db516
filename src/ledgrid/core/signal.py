"""
どこで: `src/ledgrid/core/signal.py`。
何を: 1 色チャンネル分の手続き的波形（Signal）と、そのセル単位評価カーネルを提供する。
なぜ: 空間ジオメトリ補間・波形モーフ・カットオフ窓・位相ドリフト・チャンネル間変調を
      1 箇所にまとめ、単セル評価と grid 一括評価で同じカーネルを使うため。

評価の流れ（`signal_value`）
----------------------------
1. temporal = tick / TICK_RATE、phase_offset = (phase + mod_input*mod*MOD_DEPTH) * 2π
2. geometry に応じて Linear / Radial / Grid-product の波を選択・補間する
3. (wave + 1) / 2 で [0, 1] に正規化する
4. cutoff 窓を適用する
"""

from __future__ import annotations

import math

from numba import njit  # type: ignore[import-untyped]

from ledgrid.core.waveform import shape_wave

FREQ_SCALE = 10.0
TICK_RATE = 100.0
MOD_DEPTH = 3.0
DRIFT_SCALE = 0.002

_TWO_PI = 2.0 * math.pi

# freq_x の既定値は「実周波数 1.0」になる生値（cbrt(0.1)）。
DEFAULT_FREQ_X = 0.1 ** (1.0 / 3.0)


def frequency_from_control(raw: float) -> float:
    """生のコントロール値を実周波数へ写像する（`raw³ × FREQ_SCALE`）。

    3 乗写像にすることで 0 付近は細かく、両端では広いレンジを扱える。
    """

    r = float(raw)
    return r * r * r * FREQ_SCALE


@njit(cache=True)
def apply_cutoff(v: float, cutoff: float) -> float:
    """[0, 1] の値へ cutoff 窓を適用する（Numba）。

    - `cutoff > 0`: `v <= cutoff` を 0 に落とし、残りを `(v-c)/(1-c)` で [0, 1] に戻す。
    - `cutoff < 0`: `ceil = 1 + cutoff` 以上を 0 に落とし、残りを `v/ceil` で戻す。
    - `cutoff == 0`: 何もしない。

    境界（`cutoff >= 1` / `ceil <= 0`）はゼロ除算せず 0 を返す。
    """
    if cutoff > 0.0:
        if cutoff >= 1.0 or v <= cutoff:
            return 0.0
        return (v - cutoff) / (1.0 - cutoff)
    if cutoff < 0.0:
        ceil = 1.0 + cutoff
        if ceil <= 0.0 or v >= ceil:
            return 0.0
        return v / ceil
    return v


@njit(cache=True)
def _linear_wave(
    u: float, w: float, fx: float, fy: float, temporal: float, phase_offset: float, shape: float
) -> float:
    spatial = u * fx + w * fy
    return shape_wave((spatial + temporal) * _TWO_PI + phase_offset, shape)


@njit(cache=True)
def _grid_product_wave(
    u: float, w: float, fx: float, fy: float, temporal: float, phase_offset: float, shape: float
) -> float:
    wave_x = shape_wave((u * fx + temporal) * _TWO_PI + phase_offset, shape)
    wave_y = shape_wave((w * fy + temporal) * _TWO_PI + phase_offset, shape)
    return wave_x * wave_y


@njit(cache=True)
def _radial_wave(
    u: float, w: float, fx: float, fy: float, temporal: float, phase_offset: float, shape: float
) -> float:
    # 中心基準の座標で、半径を fx、角度を fy に割り当てる。
    nx = u - 0.5
    ny = w - 0.5
    r_spatial = 2.0 * math.sqrt(nx * nx + ny * ny) * fx + (math.atan2(ny, nx) / _TWO_PI) * fy
    return shape_wave((r_spatial + temporal) * _TWO_PI + phase_offset, shape)


@njit(cache=True)
def signal_value(
    col: float,
    row: float,
    tick: float,
    grid_x: float,
    grid_y: float,
    fx: float,
    fy: float,
    geometry: float,
    shape: float,
    cutoff: float,
    phase: float,
    mod: float,
    mod_input: float,
) -> float:
    """1 セル分の Signal 値を [0, 1] で返す（Numba）。

    Parameters
    ----------
    col, row : float
        （mirror 後の）セル座標。
    tick : float
        アニメーションクロック。
    grid_x, grid_y : float
        グリッドの列数/行数（2 以上）。
    fx, fy : float
        キャッシュ済みの実周波数。
    geometry : float
        -1 で Grid-product、0 で Radial、1 で Linear。中間は線形補間。
    shape : float
        波形モーフ位置（`shape_wave` 参照）。
    cutoff : float
        cutoff 窓（`apply_cutoff` 参照）。
    phase : float
        ドリフトで進む位相オフセット（0..1 周）。
    mod : float
        前段チャンネル出力による位相変調の深さ。
    mod_input : float
        前段チャンネルの出力値（先頭チャンネルは 0）。
    """
    u = col / grid_x
    w = row / grid_y
    temporal = tick / TICK_RATE
    phase_offset = phase * _TWO_PI + mod_input * mod * MOD_DEPTH * _TWO_PI

    if geometry >= 1.0:
        wave = _linear_wave(u, w, fx, fy, temporal, phase_offset, shape)
    elif geometry <= -1.0:
        wave = _grid_product_wave(u, w, fx, fy, temporal, phase_offset, shape)
    else:
        r_wave = _radial_wave(u, w, fx, fy, temporal, phase_offset, shape)
        if geometry > 0.0:
            target = _linear_wave(u, w, fx, fy, temporal, phase_offset, shape)
            wave = r_wave + (target - r_wave) * geometry
        else:
            target = _grid_product_wave(u, w, fx, fy, temporal, phase_offset, shape)
            wave = r_wave + (target - r_wave) * -geometry

    v = (wave + 1.0) * 0.5
    # 補間の丸め誤差や範囲外の shape で [0, 1] を外れないよう固定する。
    # 周波数や tick が巨大で角度が inf になったときの NaN も 0 へ落とす。
    if not v >= 0.0:
        v = 0.0
    elif v > 1.0:
        v = 1.0
    return apply_cutoff(v, cutoff)


class Signal:
    """1 色チャンネル分の波形パラメータと派生キャッシュを保持する。

    パラメータはコントロール面から直接書き換えられる（範囲の再検証はしない）。
    実周波数 `_fx/_fy` は `refresh_frequencies()` でフレームごとに 1 回だけ再計算する。
    freq_x/freq_y への書き込み後は、次に `fx/fy` か `value_at()` を読んだ時点でも再計算する。
    """

    def __init__(
        self,
        name: str,
        *,
        geometry: float = 1.0,
        freq_x: float = DEFAULT_FREQ_X,
        freq_y: float = 0.0,
        drift: float = 0.0,
        shape: float = 0.5,
        cutoff: float = 0.0,
        mod: float = 0.0,
    ) -> None:
        self.name = str(name)
        self.geometry = float(geometry)
        self._freq_x = float(freq_x)
        self._freq_y = float(freq_y)
        self._freq_dirty = True
        self.drift = float(drift)
        self.shape = float(shape)
        self.cutoff = float(cutoff)
        self.mod = float(mod)
        self.phase = 0.0
        self._fx = 0.0
        self._fy = 0.0
        self.refresh_frequencies()

    def __repr__(self) -> str:
        return (
            f"Signal({self.name!r}, geometry={self.geometry}, freq_x={self.freq_x},"
            f" freq_y={self.freq_y}, drift={self.drift}, shape={self.shape},"
            f" cutoff={self.cutoff}, mod={self.mod}, phase={self.phase})"
        )

    @property
    def freq_x(self) -> float:
        return self._freq_x

    @freq_x.setter
    def freq_x(self, value: float) -> None:
        self._freq_x = float(value)
        self._freq_dirty = True

    @property
    def freq_y(self) -> float:
        return self._freq_y

    @freq_y.setter
    def freq_y(self, value: float) -> None:
        self._freq_y = float(value)
        self._freq_dirty = True

    @property
    def fx(self) -> float:
        if self._freq_dirty:
            self.refresh_frequencies()
        return self._fx

    @property
    def fy(self) -> float:
        if self._freq_dirty:
            self.refresh_frequencies()
        return self._fy

    def refresh_frequencies(self) -> None:
        """freq_x/freq_y から実周波数キャッシュを再計算する。"""

        self._fx = frequency_from_control(self._freq_x)
        self._fy = frequency_from_control(self._freq_y)
        self._freq_dirty = False

    def advance_phase(self) -> None:
        """drift に従って位相を 1 フレーム分進める。

        - `drift < 0`: `phase = -drift` へ即座にスナップする（累積しない）。
        - `drift > 0`: `phase = (phase + drift * DRIFT_SCALE) mod 1`。
        - `drift == 0`: 位相は固定。
        """

        drift = self.drift
        if drift < 0.0:
            self.phase = -drift
        elif drift > 0.0:
            self.phase = (self.phase + drift * DRIFT_SCALE) % 1.0

    def value_at(
        self,
        col: float,
        row: float,
        tick: float,
        grid_x: float,
        grid_y: float,
        mod_input: float = 0.0,
    ) -> float:
        """セル (col, row) の値を [0, 1] で返す。

        freq_x/freq_y が書き換えられていれば、評価前に実周波数キャッシュを更新する。
        """

        if self._freq_dirty:
            self.refresh_frequencies()
        return float(
            signal_value(
                float(col),
                float(row),
                float(tick),
                float(grid_x),
                float(grid_y),
                self._fx,
                self._fy,
                self.geometry,
                self.shape,
                self.cutoff,
                self.phase,
                self.mod,
                float(mod_input),
            )
        )


__all__ = [
    "DEFAULT_FREQ_X",
    "DRIFT_SCALE",
    "FREQ_SCALE",
    "MOD_DEPTH",
    "Signal",
    "TICK_RATE",
    "apply_cutoff",
    "frequency_from_control",
    "signal_value",
]
