# どこで: `src/ledgrid/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: キャンバス寸法・初期グリッド・出力先・MIDI 割り当てをコード外から指定できるようにするため。

"""実行時設定（`config.yaml`）の探索・ロード・キャッシュを担当する。

- `config.yaml` を「同梱デフォルト → 探索で見つかったユーザー設定 → 明示指定」の順に適用する
- 1 回ロードした結果をプロセス内でキャッシュする（切り替えは `set_config_path()`）

実装メモ
--------
- ユーザー設定の適用は `dict.update()`（トップレベルの浅い上書き）で行う。
  ネストした mapping は「部分的にマージ」されず「丸ごと置換」される。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

_logger = logging.getLogger(__name__)

_PARAMETER_GUI_FONT_SIZE_BASE_PX_DEFAULT = 12.0


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """ledgrid の実行時設定。

    Attributes
    ----------
    config_path:
        実際に採用されたユーザー設定ファイルのパス。無ければ None。
    output_dir:
        書き出し（PNG）の出力先ルート。
    canvas_size:
        描画キャンバスの (width, height) [px]。
    grid_size:
        初期グリッドの (grid_x, grid_y)。
    fps:
        フレームループの目標フレームレート。
    speed_control:
        初期速度コントロール（`speed = control³ × 1000`）。
    mirror:
        初期 mirror 量。
    window_pos_draw:
        描画ウィンドウの左上座標。
    window_pos_parameter_gui:
        パラメータ GUI ウィンドウの左上座標。
    parameter_gui_window_size:
        パラメータ GUI のウィンドウサイズ (w, h)。
    parameter_gui_font_size_base_px:
        パラメータ GUI の基準フォントサイズ。
    png_scale:
        PNG 書き出しの拡大率。
    midi_port_name:
        MIDI 入力ポート名。None で無効、`"auto"` で自動選択。
    midi_inputs:
        自動選択時の優先ポート候補。
    midi_cc_bindings:
        CC 番号 → バインド先（`"red.freqX"` / `"grid.mirror"` 等）。
    """

    config_path: Path | None
    output_dir: Path
    canvas_size: tuple[int, int]
    grid_size: tuple[int, int]
    fps: float
    speed_control: float
    mirror: float
    window_pos_draw: tuple[int, int]
    window_pos_parameter_gui: tuple[int, int]
    parameter_gui_window_size: tuple[int, int]
    parameter_gui_font_size_base_px: float
    png_scale: float
    midi_port_name: str | None
    midi_inputs: tuple[str, ...]
    midi_cc_bindings: tuple[tuple[int, str], ...]


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する（キャッシュは破棄する）。"""

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _CONFIG_CACHE = None
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()


def _default_config_candidates() -> tuple[Path, ...]:
    """既定の `config.yaml` 探索候補（先勝ち）を返す。"""

    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".ledgrid" / "config.yaml",
        home / ".config" / "ledgrid" / "config.yaml",
    )


def _expand_path_text(text: str) -> str:
    """パス文字列内の `~` と環境変数を展開して返す。"""

    return os.path.expanduser(os.path.expandvars(str(text)))


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(_expand_path_text(s))


def _as_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return None if not s else s


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    """任意値を mapping として解釈し、dict に正規化して返す。"""

    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int] | None:
    """任意値を (x, y) の整数ペアとして解釈して返す。"""

    if value is None:
        return None
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        x = int(seq[0])
        y = int(seq[1])
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc
    return (x, y)


def _as_float(value: Any, *, key: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_str_list(value: Any) -> list[str]:
    """midi.inputs を空でない文字列の list として解釈する（不正な要素は無視）。"""

    if value is None:
        return []
    if isinstance(value, str):
        s = value.strip()
        return [s] if s else []
    try:
        seq = list(value)
    except Exception:
        return []
    return [str(v).strip() for v in seq if v is not None and str(v).strip()]


def _as_cc_bindings(value: Any, *, key: str) -> list[tuple[int, str]]:
    """`{cc: "target"}` を (cc, target) の list（cc 昇順）として解釈して返す。"""

    mapping = _as_mapping(value, key=key)
    out: list[tuple[int, str]] = []
    for cc, target in mapping.items():
        try:
            cc_i = int(cc)
        except Exception as exc:
            raise RuntimeError(f"{key} のキーは CC 番号である必要があります: got={cc!r}") from exc
        if not 0 <= cc_i <= 127:
            raise ValueError(f"{key} の CC 番号は 0..127 である必要があります: got={cc_i}")
        target_s = _as_optional_str(target)
        if target_s is None:
            continue
        out.append((cc_i, target_s))
    out.sort(key=lambda item: item[0])
    return out


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    """YAML テキストを読み、トップレベル mapping を dict として返す。"""

    try:
        import yaml  # type: ignore[import-untyped]
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(f"PyYAML を import できません: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")
    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config（`ledgrid/resource/default_config.yaml`）を読み込む。"""

    try:
        blob = (
            resources.files("ledgrid")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc
    return _load_yaml_text(blob, source="ledgrid/resource/default_config.yaml")


def _require(value: Any, *, key: str) -> Any:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    return value


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    読み込み元の優先順位（後勝ち）:
    1) 同梱 `ledgrid/resource/default_config.yaml`
    2) 探索で見つかった `config.yaml`（任意）
    3) `set_config_path()` で明示指定された `config.yaml`（任意）
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        _logger.info("config.yaml を読み込みます: %s", discovered_path)
        payload.update(_load_yaml_config(discovered_path))
    if explicit_path is not None:
        _logger.info("config.yaml を読み込みます: %s", explicit_path)
        payload.update(_load_yaml_config(explicit_path))

    version = _require(payload.get("version"), key="version")
    try:
        version_i = int(version)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    output_dir = _require(_as_optional_path(paths.get("output_dir")), key="paths.output_dir")

    canvas = _as_mapping(payload.get("canvas"), key="canvas")
    canvas_size = _require(_as_int_pair(canvas.get("size"), key="canvas.size"), key="canvas.size")
    if canvas_size[0] <= 0 or canvas_size[1] <= 0:
        raise ValueError(f"canvas.size は正の値である必要があります: got={canvas_size}")

    grid = _as_mapping(payload.get("grid"), key="grid")
    grid_size = _require(_as_int_pair(grid.get("size"), key="grid.size"), key="grid.size")
    speed_control = _require(
        _as_float(grid.get("speed_control"), key="grid.speed_control"), key="grid.speed_control"
    )
    mirror = _require(_as_float(grid.get("mirror"), key="grid.mirror"), key="grid.mirror")

    animation = _as_mapping(payload.get("animation"), key="animation")
    fps = _require(_as_float(animation.get("fps"), key="animation.fps"), key="animation.fps")
    if fps <= 0.0:
        raise ValueError(f"animation.fps は正の値である必要があります: got={fps}")

    ui = _as_mapping(payload.get("ui"), key="ui")
    window_positions = _as_mapping(ui.get("window_positions"), key="ui.window_positions")
    window_pos_draw = _require(
        _as_int_pair(window_positions.get("draw"), key="ui.window_positions.draw"),
        key="ui.window_positions.draw",
    )
    window_pos_parameter_gui = _require(
        _as_int_pair(window_positions.get("parameter_gui"), key="ui.window_positions.parameter_gui"),
        key="ui.window_positions.parameter_gui",
    )

    parameter_gui = _as_mapping(ui.get("parameter_gui"), key="ui.parameter_gui")
    parameter_gui_window_size = _require(
        _as_int_pair(parameter_gui.get("window_size"), key="ui.parameter_gui.window_size"),
        key="ui.parameter_gui.window_size",
    )
    font_size = _as_float(
        parameter_gui.get("font_size_base_px"), key="ui.parameter_gui.font_size_base_px"
    )
    if font_size is None:
        font_size = float(_PARAMETER_GUI_FONT_SIZE_BASE_PX_DEFAULT)
    if font_size <= 0.0:
        raise ValueError(
            f"ui.parameter_gui.font_size_base_px は正の値である必要があります: got={font_size}"
        )

    export = _as_mapping(payload.get("export"), key="export")
    png = _as_mapping(export.get("png"), key="export.png")
    png_scale = _require(_as_float(png.get("scale"), key="export.png.scale"), key="export.png.scale")
    if png_scale <= 0.0:
        raise ValueError(f"export.png.scale は正の値である必要があります: got={png_scale}")

    midi = _as_mapping(payload.get("midi"), key="midi")
    midi_port_name = _as_optional_str(midi.get("port_name"))
    midi_inputs = _as_str_list(midi.get("inputs"))
    midi_cc_bindings = _as_cc_bindings(midi.get("cc_bindings"), key="midi.cc_bindings")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        output_dir=output_dir,
        canvas_size=canvas_size,
        grid_size=grid_size,
        fps=float(fps),
        speed_control=float(speed_control),
        mirror=float(mirror),
        window_pos_draw=window_pos_draw,
        window_pos_parameter_gui=window_pos_parameter_gui,
        parameter_gui_window_size=parameter_gui_window_size,
        parameter_gui_font_size_base_px=float(font_size),
        png_scale=float(png_scale),
        midi_port_name=midi_port_name,
        midi_inputs=tuple(midi_inputs),
        midi_cc_bindings=tuple(midi_cc_bindings),
    )
    _CONFIG_CACHE = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。"""

    return Path(runtime_config().output_dir)


__all__ = [
    "RuntimeConfig",
    "output_root_dir",
    "runtime_config",
    "set_config_path",
]
