"""
Hardware Abstraction Layer Protocol Definitions.
These are abstract base classes that each platform must implement.

This allows the same trigger logic to run on:
- MicroPython on ESP32/RP2040
- Desktop Python (USB MIDI or serial MIDI) for testing
"""
from .midi_event import NoteOn, NoteOff, ProgramChange
from .constants import Velocity


class InputsHAL:
    """Abstract interface for raw sensor input (buttons and analog pins)."""

    def update(self):
        """Poll input states. Call once per loop iteration."""
        raise NotImplementedError

    def read(self, source):
        """
        Read the current raw value of an input.

        Args:
            source: Input index

        Returns:
            bool for digital inputs (True = pressed),
            int for analog inputs (0-1023)
        """
        raise NotImplementedError

    def count(self):
        """Number of inputs available."""
        raise NotImplementedError


class MidiOutputHAL:
    """Abstract interface for MIDI output."""

    def send(self, event):
        """
        Send one MIDI event.

        Args:
            event: MidiEvent (NoteOn, NoteOff or ProgramChange)
        """
        raise NotImplementedError

    def send_note_on(self, channel, note, velocity=Velocity.ON):
        """
        Convenience: send a Note On.

        Args:
            channel: MIDI channel 1-16
            note: MIDI note number 0-127
            velocity: Note velocity 0-127
        """
        self.send(NoteOn(channel, note, velocity))

    def send_note_off(self, channel, note, velocity=Velocity.OFF):
        self.send(NoteOff(channel, note, velocity))

    def send_program_change(self, channel, program):
        """
        Convenience: select an instrument.

        Args:
            channel: MIDI channel 1-16
            program: Program number 0-127
        """
        self.send(ProgramChange(channel, program))

    def close(self):
        """Release the underlying port. Optional."""
        pass


class DisplayHAL:
    """Abstract interface for visual feedback (LED, OLED, console)."""

    def clear(self):
        """Clear the display."""
        raise NotImplementedError

    def show_event(self, event):
        """
        Reflect a MIDI event that was just sent.

        Args:
            event: MidiEvent
        """
        raise NotImplementedError

    def show_message(self, message):
        """
        Display a status message.

        Args:
            message: Message string
        """
        raise NotImplementedError


class HardwarePort:
    """
    Complete hardware port interface.
    A platform provides an instance of this with all HAL implementations.
    """

    def __init__(self, inputs, midi_output, display=None):
        """
        Args:
            inputs: InputsHAL implementation
            midi_output: MidiOutputHAL implementation
            display: Optional DisplayHAL implementation
        """
        self.inputs = inputs
        self.midi_output = midi_output
        self.display = display

    def update_inputs(self):
        """Poll all input devices."""
        self.inputs.update()
