# どこで: `src/ledgrid/core/output_paths.py`。
# 何を: 書き出しフレーム（PNG）の保存先パスを決める。
# なぜ: `output/png/` 配下に、グリッド寸法とキャンバス寸法が分かる名前で整理するため。

from __future__ import annotations

import re
from pathlib import Path

from ledgrid.core.grid import Grid
from ledgrid.core.runtime_config import output_root_dir


def _sanitize_run_id(run_id: str) -> str:
    """run_id をファイル名の一部として使える形に正規化して返す。"""

    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(run_id))


def _run_id_suffix(run_id: str | None) -> str:
    """run_id の接尾辞（例: `_v1`）を返す。未指定なら空文字を返す。"""

    if run_id is None:
        return ""
    s = str(run_id).strip()
    if not s:
        return ""
    sanitized = _sanitize_run_id(s)
    if not sanitized:
        return ""
    return f"_{sanitized}"


def _fmt_canvas_dim_for_filename(value: float | int) -> str:
    """canvas の寸法をファイル名に埋め込むための短い表現にして返す。"""

    v = float(value)
    if v <= 0:
        raise ValueError("canvas_size は正の値である必要がある")
    if abs(v - round(v)) < 1e-9:
        return str(int(round(v)))

    s = f"{v:.3f}".rstrip("0").rstrip(".")
    return s if s else "0"


def default_png_output_path(
    grid: Grid,
    *,
    run_id: str | None = None,
    output_dir: Path | None = None,
) -> Path:
    """PNG の既定保存先を返す。

    ファイル名は `ledgrid_<gx>x<gy>_<W>x<H>[_<run_id>].png`。
    `output_dir` を省略した場合は `config.yaml` の `paths.output_dir` を使う。
    """

    root = output_root_dir() if output_dir is None else Path(output_dir)
    w, h = grid.canvas_size
    name = (
        f"ledgrid_{grid.grid_x}x{grid.grid_y}"
        f"_{_fmt_canvas_dim_for_filename(w)}x{_fmt_canvas_dim_for_filename(h)}"
        f"{_run_id_suffix(run_id)}.png"
    )
    return root / "png" / name


def frame_output_paths(base_path: Path, *, n_frames: int) -> list[Path]:
    """複数フレーム書き出し用に `<stem>_f001<suffix>` 形式のパス列を返す。

    1 フレームのときは `base_path` をそのまま返す。
    """

    n = int(n_frames)
    if n <= 0:
        return []
    if n == 1:
        return [base_path]

    width = max(3, len(str(n)))
    return [
        base_path.with_name(f"{base_path.stem}_f{i:0{int(width)}d}{base_path.suffix}")
        for i in range(1, n + 1)
    ]


__all__ = ["default_png_output_path", "frame_output_paths"]
