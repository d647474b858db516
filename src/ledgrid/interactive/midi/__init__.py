"""MIDI CC によるパラメータ操作（optional: mido）。"""

from __future__ import annotations

from .bindings import BindingTarget, apply_cc_bindings, cc_value_to_param, parse_binding_target
from .factory import create_midi_controller
from .midi_controller import MidiController

__all__ = [
    "BindingTarget",
    "MidiController",
    "apply_cc_bindings",
    "cc_value_to_param",
    "create_midi_controller",
    "parse_binding_target",
]
