# どこで: `src/ledgrid/interactive/midi/midi_controller.py`。
# 何を: MIDI 入力ポートから CC メッセージを取り込み、CC 番号 → 0..1 値のスナップショットを保持する。
# なぜ: ポート I/O を 1 クラスに閉じ込め、パラメータへの反映（bindings）を純粋ロジックに保つため。

from __future__ import annotations

import logging
from typing import Any

_logger = logging.getLogger(__name__)

_CC_MAX = 127.0


class MidiController:
    """MIDI 入力ポートの CC 値をポーリングで取り込む。

    Parameters
    ----------
    port_name : str
        入力ポート名。
    port : Any | None
        `iter_pending()` / `close()` を持つ開いた入力ポート。None の場合は
        `mido.open_input(port_name)` で開く。
    """

    def __init__(self, port_name: str, *, port: Any | None = None) -> None:
        if port is None:
            import mido  # type: ignore

            port = mido.open_input(str(port_name))
            _logger.info("MIDI input opened: %s", port_name)
        self.port_name = str(port_name)
        self._port = port
        self.cc: dict[int, float] = {}
        # (通し番号, CC 番号)。最後に値が変わった CC を表す。
        self.last_cc_change: tuple[int, int] | None = None
        self._seq = 0
        self._closed = False

    def poll(self) -> bool:
        """未処理の CC メッセージを取り込み、値が変わったら True を返す。"""

        if self._closed:
            return False
        changed = False
        for msg in self._port.iter_pending():
            if getattr(msg, "type", None) != "control_change":
                continue
            cc = int(msg.control)
            value = min(max(float(msg.value) / _CC_MAX, 0.0), 1.0)
            if self.cc.get(cc) == value:
                continue
            self.cc[cc] = value
            self._seq += 1
            self.last_cc_change = (self._seq, cc)
            changed = True
        return changed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._port.close()


__all__ = ["MidiController"]
