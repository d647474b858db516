"""
どこで: `src/ledgrid/core/mirror.py`。
何を: 単一スカラー `mirror` から 2 軸の折り返し量を決め、セル座標を中央線で折り返す。
なぜ: 座標変換を純関数に保ち、grid パスの Numba カーネルからも同じ式で呼べるようにするため。
"""

from __future__ import annotations

from numba import njit  # type: ignore[import-untyped]

_ONE_THIRD = 1.0 / 3.0
_TWO_THIRDS = 2.0 / 3.0


def _clamp01(x: float) -> float:
    return min(max(float(x), 0.0), 1.0)


def mirror_amounts(mirror: float) -> tuple[float, float]:
    """`mirror` ∈ [0, 1] を 3 区間スケジュールで (mx, my) に展開して返す。

    - `mirror <= 1/3`: 横方向の折り返しがフェードイン（`mx = mirror*3`, `my = 0`）。
    - `1/3 < mirror <= 2/3`: 横がフェードアウトし、縦がフェードイン。
    - `mirror > 2/3`: 縦は全量のまま、横が再びフェードインする（`mx = (mirror-2/3)*3`, `my = 1`）。

    戻り値は丸め誤差を含めて [0, 1] に固定する。
    """

    m = float(mirror)
    if m <= _ONE_THIRD:
        mx = m * 3.0
        my = 0.0
    elif m <= _TWO_THIRDS:
        mx = 1.0 - (m - _ONE_THIRD) * 3.0
        my = (m - _ONE_THIRD) * 3.0
    else:
        mx = (m - _TWO_THIRDS) * 3.0
        my = 1.0
    return _clamp01(mx), _clamp01(my)


@njit(cache=True)
def fold_index(index: float, size: float, amount: float) -> float:
    """1 軸分の折り返し（Numba）。

    中央線以降（`index >= size/2`）のみ、`size-1-index` へ `amount` だけ近づける。
    `amount=0` は恒等、`amount=1` は完全な鏡像。
    """
    if amount > 0.0 and index >= size / 2.0:
        return index + ((size - 1.0 - index) - index) * amount
    return index


def fold(col: float, row: float, grid_x: int, grid_y: int, mirror: float) -> tuple[float, float]:
    """セル (col, row) を `mirror` に従って折り返した (col', row') を返す。"""

    mx, my = mirror_amounts(mirror)
    col_f = float(fold_index(float(col), float(grid_x), mx))
    row_f = float(fold_index(float(row), float(grid_y), my))
    return col_f, row_f


__all__ = ["fold", "fold_index", "mirror_amounts"]
