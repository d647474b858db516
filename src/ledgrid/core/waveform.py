"""
どこで: `src/ledgrid/core/waveform.py`。
何を: 位相角と shape パラメータから [-1, 1] の波形値を返す波形シェイパー。
なぜ: 三角波 → サイン波 → 矩形波の連続モーフを 1 つの純関数に閉じ込め、Signal と grid パスで共有するため。
"""

from __future__ import annotations

import math

from numba import njit  # type: ignore[import-untyped]

# shape パラメータの代表点。0.5 で純粋なサイン波になる。
SHAPE_TRIANGLE = 0.0
SHAPE_SINE = 0.5
SHAPE_SQUARE = 1.0

_TWO_OVER_PI = 2.0 / math.pi


@njit(cache=True)
def shape_wave(angle: float, shape: float) -> float:
    """位相角 `angle` [rad] の波形値を返す（Numba）。

    Parameters
    ----------
    angle : float
        位相角 [rad]。
    shape : float
        波形モーフ位置。0 で三角波、0.5 でサイン波、1 で矩形波。

    Returns
    -------
    float
        [-1, 1] の波形値。

    Notes
    -----
    - `shape <= 0.5` は三角波 `(2/π)·asin(sin)` とサイン波の線形補間（係数 `shape*2`）。
    - `shape > 0.5` はサイン波と矩形波 `sign(sin)` の線形補間（係数 `(shape-0.5)*2`）。
      `sign(0)` は +1 とする。
    - `shape == 0.5` ではどちらの分岐でも `sin(angle)` と厳密に一致する。
    """
    s = math.sin(angle)
    if shape <= 0.5:
        t = shape * 2.0
        tri = _TWO_OVER_PI * math.asin(s)
        return tri * (1.0 - t) + s * t

    t = (shape - 0.5) * 2.0
    square = 1.0 if s >= 0.0 else -1.0
    return s * (1.0 - t) + square * t


__all__ = ["SHAPE_SINE", "SHAPE_SQUARE", "SHAPE_TRIANGLE", "shape_wave"]
