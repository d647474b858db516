from __future__ import annotations

from types import SimpleNamespace

from ledgrid.interactive.midi.midi_controller import MidiController


class _FakePort:
    def __init__(self) -> None:
        self.pending: list[SimpleNamespace] = []
        self.closed = 0

    def iter_pending(self):
        msgs, self.pending = self.pending, []
        yield from msgs

    def close(self) -> None:
        self.closed += 1


def _cc(control: int, value: int) -> SimpleNamespace:
    return SimpleNamespace(type="control_change", control=control, value=value)


def test_poll_collects_cc_values_as_unit_range() -> None:
    port = _FakePort()
    midi = MidiController("fake", port=port)

    port.pending = [_cc(1, 127), SimpleNamespace(type="note_on", note=60, velocity=100), _cc(2, 0)]
    assert midi.poll()
    assert midi.cc == {1: 1.0, 2: 0.0}
    assert midi.last_cc_change == (2, 2)

    assert not midi.poll()

    port.pending = [_cc(1, 127)]
    assert not midi.poll()
    assert midi.last_cc_change == (2, 2)


def test_close_is_idempotent_and_stops_polling() -> None:
    port = _FakePort()
    midi = MidiController("fake", port=port)
    midi.close()
    midi.close()
    assert port.closed == 1

    port.pending = [_cc(5, 64)]
    assert not midi.poll()
    assert midi.cc == {}
