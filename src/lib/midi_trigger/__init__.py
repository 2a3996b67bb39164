"""
MIDI Trigger - Platform-independent edge-triggered MIDI note output.
"""

from .constants import Midi, Kind, Velocity, Uart, Drum, Defaults
from .midi_event import MidiEvent, NoteOn, NoteOff, ProgramChange
from .edge_translator import InputChannel, EdgeState, EdgeTranslator
from .hal_protocol import (
    InputsHAL,
    MidiOutputHAL,
    DisplayHAL,
    HardwarePort,
)
from .layouts import (
    LAYOUTS,
    button_notes_layout,
    percussion_layout,
    knock_layout,
    get_layout,
    get_layout_names,
)
from .trigger_app import TriggerApp

__all__ = [
    # Constants
    "Midi",
    "Kind",
    "Velocity",
    "Uart",
    "Drum",
    "Defaults",
    # Events
    "MidiEvent",
    "NoteOn",
    "NoteOff",
    "ProgramChange",
    # Translator
    "InputChannel",
    "EdgeState",
    "EdgeTranslator",
    # HAL Protocol
    "InputsHAL",
    "MidiOutputHAL",
    "DisplayHAL",
    "HardwarePort",
    # Layouts
    "LAYOUTS",
    "button_notes_layout",
    "percussion_layout",
    "knock_layout",
    "get_layout",
    "get_layout_names",
    # Application
    "TriggerApp",
]

__version__ = "0.1.0"
