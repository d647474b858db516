"""core.runtime_config（config.yaml の層状ロード）をテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from ledgrid.core.runtime_config import output_root_dir, runtime_config, set_config_path


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_packaged_defaults() -> None:
    cfg = runtime_config()

    assert cfg.config_path is None
    assert cfg.canvas_size == (800, 800)
    assert cfg.grid_size == (32, 32)
    assert cfg.fps == 60.0
    assert cfg.speed_control == pytest.approx(0.1)
    assert cfg.mirror == 0.0
    assert cfg.png_scale == 1.0
    assert cfg.midi_port_name is None
    assert cfg.midi_inputs == ()
    assert cfg.midi_cc_bindings == ()
    assert output_root_dir() == Path("data/output")


def test_runtime_config_is_cached_until_path_changes(tmp_path: Path) -> None:
    first = runtime_config()
    assert runtime_config() is first

    cfg_path = _write(
        tmp_path / "custom.yaml",
        "grid:\n  size: [8, 4]\n  speed_control: 0.2\n  mirror: 0.5\n",
    )
    set_config_path(cfg_path)
    cfg = runtime_config()

    assert cfg is not first
    assert cfg.config_path == cfg_path
    assert cfg.grid_size == (8, 4)
    assert cfg.mirror == 0.5
    # トップレベルの上書きなので、他のセクションは同梱デフォルトのまま。
    assert cfg.canvas_size == (800, 800)


def test_discovered_config_in_cwd(tmp_path: Path) -> None:
    path = _write(tmp_path / ".ledgrid" / "config.yaml", "canvas:\n  size: [640, 480]\n")
    cfg = runtime_config()
    assert cfg.config_path == path
    assert cfg.canvas_size == (640, 480)


def test_explicit_config_wins_over_discovered(tmp_path: Path) -> None:
    _write(tmp_path / ".ledgrid" / "config.yaml", "animation:\n  fps: 30\n")
    explicit = _write(tmp_path / "explicit.yaml", "animation:\n  fps: 24\n")
    set_config_path(explicit)
    assert runtime_config().fps == 24.0


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    set_config_path(tmp_path / "nope.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


@pytest.mark.parametrize(
    ("text", "exc"),
    [
        ("version: 2\n", RuntimeError),
        ("animation:\n  fps: 0\n", ValueError),
        ("canvas:\n  size: [0, 100]\n", ValueError),
        ("canvas:\n  size: [1, 2, 3]\n", RuntimeError),
        ("export:\n  png:\n    scale: -1\n", ValueError),
        ("midi:\n  cc_bindings:\n    200: red.mod\n", ValueError),
        ("- just\n- a list\n", RuntimeError),
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str, exc: type[Exception]) -> None:
    set_config_path(_write(tmp_path / "bad.yaml", text))
    with pytest.raises(exc):
        runtime_config()


def test_midi_section_is_normalized(tmp_path: Path) -> None:
    text = (
        "midi:\n"
        "  port_name: auto\n"
        "  inputs: [\"Grid Controller\", \"\", null]\n"
        "  cc_bindings:\n"
        "    21: red.freqX\n"
        "    1: grid.mirror\n"
        "    5: \"\"\n"
    )
    set_config_path(_write(tmp_path / "midi.yaml", text))
    cfg = runtime_config()

    assert cfg.midi_port_name == "auto"
    assert cfg.midi_inputs == ("Grid Controller",)
    assert cfg.midi_cc_bindings == ((1, "grid.mirror"), (21, "red.freqX"))


def test_output_dir_expands_env_vars(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGRID_TEST_OUT", str(tmp_path / "renders"))
    set_config_path(_write(tmp_path / "out.yaml", "paths:\n  output_dir: $LEDGRID_TEST_OUT\n"))
    assert output_root_dir() == tmp_path / "renders"
