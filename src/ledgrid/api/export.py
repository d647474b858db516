"""
どこで: `src/ledgrid/api/export.py`。
何を: ヘッドレス export の公開導線 `Export` を提供する。
なぜ: 対話ウィンドウを立ち上げずに、指定 tick のフレームを PNG として保存できるようにするため。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ledgrid.core.grid import Grid
from ledgrid.core.output_paths import default_png_output_path, frame_output_paths
from ledgrid.export.image import export_png

_logger = logging.getLogger(__name__)


class Export:
    """Grid の指定 tick のフレームを PNG へ書き出す。

    各 tick について `grid.tick` を設定して `evaluate()` を実行する。
    位相ドリフトは進めない（export 前の位相がそのまま使われる）。
    """

    def __init__(
        self,
        grid: Grid,
        ticks: Sequence[float] = (0.0,),
        *,
        path: str | Path | None = None,
        out_dir: str | Path | None = None,
        scale: float = 1.0,
        run_id: str | None = None,
    ) -> None:
        """export を実行する。

        Parameters
        ----------
        grid : Grid
            書き出し対象。tick は書き出し後、最後の値のまま残る。
        ticks : Sequence[float]
            書き出す tick の列。
        path : str | Path | None
            出力 PNG パス（ticks が 1 つのときのみ）。
        out_dir : str | Path | None
            既定ファイル名で保存するディレクトリ。`path` と同時指定は不可。
        scale : float
            キャンバスに対する拡大率。
        run_id : str | None
            既定ファイル名の接尾辞。
        """

        ts = [float(t) for t in ticks]
        if not ts:
            raise ValueError("ticks は 1 つ以上必要です")
        if path is not None and out_dir is not None:
            raise ValueError("path と out_dir は同時に指定できません")
        if path is not None and len(ts) != 1:
            raise ValueError("path は ticks が 1 つのときだけ指定できます（複数枚は out_dir を使ってください）")

        if path is not None:
            paths = [Path(path)]
        else:
            base = default_png_output_path(
                grid,
                run_id=run_id,
                output_dir=None if out_dir is None else Path(out_dir),
            )
            if out_dir is not None:
                base = Path(out_dir) / base.name
            paths = frame_output_paths(base, n_frames=len(ts))

        self.paths: list[Path] = []
        for t, out in zip(ts, paths, strict=True):
            grid.tick = float(t)
            grid.evaluate()
            self.paths.append(export_png(grid, out, scale=scale))
            _logger.info("Saved PNG: %s (tick=%s)", out, t)


__all__ = ["Export"]
