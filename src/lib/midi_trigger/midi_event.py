"""
MIDI event values and their 3-byte (or 2-byte) wire encoding.
Pure logic, no hardware imports - runs on CPython and MicroPython.
"""
from .constants import Midi, Kind, Velocity


def _check_range(name, value, low, high):
    if not isinstance(value, int) or isinstance(value, bool) or value < low or value > high:
        raise ValueError(
            name + " must be an int in " + str(low) + "-" + str(high) + ", got " + repr(value)
        )
    return value


def check_channel(channel):
    """Validate a user-facing MIDI channel (1-16)."""
    return _check_range("channel", channel, Midi.CHANNEL_MIN, Midi.CHANNEL_MAX)


def check_data(name, value):
    """Validate a 7-bit data byte (note, velocity, program)."""
    return _check_range(name, value, Midi.DATA_MIN, Midi.DATA_MAX)


class MidiEvent:
    """
    Base class for outgoing MIDI events.

    Subclasses set KIND and STATUS and list their data fields in FIELDS.
    Events are values: they compare equal by kind and field values.
    """

    KIND = None
    STATUS = None
    FIELDS = ()

    def __init__(self, channel):
        self.channel = check_channel(channel)

    @property
    def kind(self):
        return self.KIND

    @property
    def status_byte(self):
        """Status byte with the channel nibble applied."""
        return self.STATUS | (self.channel - 1)

    def data_bytes(self):
        return [getattr(self, name) for name in self.FIELDS]

    def to_bytes(self):
        """Encode as raw MIDI bytes ready for a UART or serial port."""
        return bytes([self.status_byte] + self.data_bytes())

    def _key(self):
        return (self.KIND, self.channel) + tuple(self.data_bytes())

    def __eq__(self, other):
        if not isinstance(other, MidiEvent):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        parts = ["channel=" + str(self.channel)]
        for name in self.FIELDS:
            parts.append(name + "=" + str(getattr(self, name)))
        return self.__class__.__name__ + "(" + ", ".join(parts) + ")"


class NoteOn(MidiEvent):
    """Note On: [0x90 | (channel - 1), note, velocity]."""

    KIND = Kind.NOTE_ON
    STATUS = Midi.NOTE_ON
    FIELDS = ("note", "velocity")

    def __init__(self, channel, note, velocity=Velocity.ON):
        super().__init__(channel)
        self.note = check_data("note", note)
        self.velocity = check_data("velocity", velocity)


class NoteOff(MidiEvent):
    """Note Off: [0x80 | (channel - 1), note, velocity]."""

    KIND = Kind.NOTE_OFF
    STATUS = Midi.NOTE_OFF
    FIELDS = ("note", "velocity")

    def __init__(self, channel, note, velocity=Velocity.OFF):
        super().__init__(channel)
        self.note = check_data("note", note)
        self.velocity = check_data("velocity", velocity)


class ProgramChange(MidiEvent):
    """Program (instrument) change: [0xC0 | (channel - 1), program]."""

    KIND = Kind.PROGRAM_CHANGE
    STATUS = Midi.PROGRAM_CHANGE
    FIELDS = ("program",)

    def __init__(self, channel, program):
        super().__init__(channel)
        self.program = check_data("program", program)
