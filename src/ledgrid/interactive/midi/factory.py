# どこで: `src/ledgrid/interactive/midi/factory.py`。
# 何を: port_name に従って MidiController を生成する（auto 接続 / mido 有無を含む）。
# なぜ: ランナー側を配線に寄せ、MIDI 依存ロジックを interactive 側に閉じ込めるため。

"""MIDI 設定を `MidiController` の生成に落とす factory。

- `mido` は optional dependency なので、`port_name="auto"` のときは未導入でも静かに無効化する。
- 一方で、ユーザーが明示的にポート名を指定したときは意図が強いので、未導入ならエラーにする。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .midi_controller import MidiController

_logger = logging.getLogger(__name__)

# 設定値で使う特別な文字列（自動接続の合図）。
_AUTO_MIDI_PORT = "auto"


def create_midi_controller(
    *,
    port_name: str | None,
    priority_inputs: Sequence[str] = (),
) -> MidiController | None:
    """設定値に従って `MidiController` を生成する。

    Parameters
    ----------
    port_name
        MIDI 入力ポート名。`None` なら MIDI 無効。`"auto"` なら利用可能な入力ポートから自動選択する。
    priority_inputs
        `port_name="auto"` のときに優先して接続するポート名の候補（先頭から順に試す）。

    Returns
    -------
    MidiController | None
        接続できた場合は `MidiController`。MIDI 無効または自動接続に失敗した場合は `None`。

    Raises
    ------
    RuntimeError
        `port_name` が明示指定かつ `mido` が導入されていない場合。
    """

    if port_name is None:
        return None

    if port_name == _AUTO_MIDI_PORT:
        try:
            import mido  # type: ignore
        except Exception:
            _logger.info("mido が無いため MIDI 入力を無効化します")
            return None

        names = list(mido.get_input_names())  # type: ignore
        for candidate in priority_inputs:
            port_s = str(candidate).strip()
            if port_s and port_s in names:
                return MidiController(port_s)

        if not names:
            _logger.info("MIDI 入力ポートが見つからないため無効化します")
            return None
        return MidiController(names[0])

    try:
        import mido  # type: ignore  # noqa: F401
    except Exception as exc:
        raise RuntimeError(
            "midi port_name を指定するには mido が必要です（pip install 'ledgrid[midi]'）。"
        ) from exc
    return MidiController(port_name)


__all__ = ["create_midi_controller"]
