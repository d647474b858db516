from __future__ import annotations

import pytest

from ledgrid.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _isolated_runtime_config(tmp_path, monkeypatch):
    """ユーザー環境の config.yaml を拾わないよう、CWD/HOME を一時ディレクトリへ切り替える。"""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)
