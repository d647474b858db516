# どこで: `src/ledgrid/__main__.py`。
# 何を: `python -m ledgrid ...` の CLI エントリポイントを提供する。
# なぜ: 対話実行とヘッドレス書き出しを短い導線で実行できるようにするため。

from __future__ import annotations

import argparse
import logging
import sys


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="python -m ledgrid")
    p.add_argument("-v", "--verbose", action="store_true", help="DEBUG ログを出力する")
    sub = p.add_subparsers(dest="cmd", required=True)

    run_p = sub.add_parser("run", help="描画ウィンドウとパラメータ GUI を開く")
    run_p.add_argument("--config", default=None, help="config.yaml のパス（探索より優先）")
    run_p.add_argument(
        "--grid", nargs=2, type=int, default=None, metavar=("GX", "GY"), help="初期グリッド寸法"
    )

    exp_p = sub.add_parser("export", help="指定 tick のフレームを PNG に書き出す")
    exp_p.add_argument(
        "--tick", nargs="+", type=float, default=None, help="書き出す tick（複数指定可、既定: 0.0）"
    )
    exp_p.add_argument(
        "--grid", nargs=2, type=int, default=None, metavar=("GX", "GY"), help="グリッド寸法"
    )
    exp_p.add_argument(
        "--canvas", nargs=2, type=int, default=None, metavar=("W", "H"), help="キャンバス寸法"
    )
    exp_p.add_argument("--mirror", type=float, default=None, help="mirror 量 [0, 1]")
    exp_p.add_argument("--scale", type=float, default=None, help="PNG の拡大率")
    exp_p.add_argument("--out", default=None, help="出力 PNG パス（--tick が 1 つのときのみ）")
    exp_p.add_argument("--out-dir", default=None, help="出力ディレクトリ（省略時: 既定の出力先）")
    exp_p.add_argument("--run-id", default=None, help="既定ファイル名の接尾辞")
    exp_p.add_argument("--config", default=None, help="config.yaml のパス（探索より優先）")
    return p


def _run_export(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    from ledgrid.api.export import Export
    from ledgrid.core.grid import Grid
    from ledgrid.core.runtime_config import runtime_config, set_config_path

    ticks = [0.0] if args.tick is None else [float(t) for t in args.tick]
    if args.out is not None and args.out_dir is not None:
        parser.error("--out と --out-dir は同時に指定できません")
    if args.out is not None and len(ticks) != 1:
        parser.error("--out は --tick が 1 つのときだけ指定できます（複数枚は --out-dir を使ってください）")

    if args.config is not None:
        set_config_path(args.config)
    cfg = runtime_config()

    canvas_w, canvas_h = cfg.canvas_size if args.canvas is None else args.canvas
    gx, gy = cfg.grid_size if args.grid is None else args.grid
    grid = Grid(
        float(canvas_w),
        float(canvas_h),
        grid_x=gx,
        grid_y=gy,
        speed_control=cfg.speed_control,
        mirror=cfg.mirror if args.mirror is None else float(args.mirror),
    )
    export = Export(
        grid,
        ticks,
        path=args.out,
        out_dir=args.out_dir,
        scale=cfg.png_scale if args.scale is None else float(args.scale),
        run_id=args.run_id,
    )
    for path, t in zip(export.paths, ticks, strict=True):
        print(f"Saved PNG: {path} (tick={t})")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "run":
        from ledgrid.api.run import run

        run(config_path=args.config, grid_size=None if args.grid is None else tuple(args.grid))
        return 0

    if args.cmd == "export":
        return _run_export(args, parser)

    raise AssertionError(f"unknown cmd: {args.cmd!r}")


if __name__ == "__main__":
    raise SystemExit(main())
