"""
Edge-triggered input to MIDI event translation - platform independent.

The translator keeps one EdgeState flag per InputChannel. A rising edge of the channel's
sample produces a Note On, a falling edge a Note Off, and repeated samples
in the same state produce nothing.
"""
from .constants import Velocity
from .midi_event import NoteOn, NoteOff, check_channel, check_data


class InputChannel:
    """
    One physical sensor (button or analog pin) and the voice it plays.
    Immutable once configured.
    """

    def __init__(self, name, source, note, midi_channel=1, threshold=None, program=None):
        """
        Args:
            name: Unique channel name (e.g. "button_a")
            source: Input index on the platform's InputsHAL
            note: MIDI note number 0-127
            midi_channel: MIDI channel 1-16
            threshold: None for digital inputs, otherwise an analog reading
                above this value counts as active
            program: Optional instrument 0-127 selected at startup
        """
        if source < 0:
            raise ValueError("source must be >= 0, got " + str(source))
        if program is not None:
            check_data("program", program)
        self._name = name
        self._source = source
        self._note = check_data("note", note)
        self._midi_channel = check_channel(midi_channel)
        self._threshold = threshold
        self._program = program

    @property
    def name(self):
        return self._name

    @property
    def source(self):
        return self._source

    @property
    def note(self):
        return self._note

    @property
    def midi_channel(self):
        return self._midi_channel

    @property
    def threshold(self):
        return self._threshold

    @property
    def program(self):
        return self._program

    @property
    def is_analog(self):
        return self.threshold is not None

    def sample(self, reading):
        """Turn a raw reading into an active/inactive sample."""
        if self.threshold is None:
            return bool(reading)
        return reading > self.threshold

    def __repr__(self):
        return (
            "InputChannel(" + repr(self.name)
            + ", source=" + str(self.source)
            + ", note=" + str(self.note)
            + ", midi_channel=" + str(self.midi_channel)
            + ", threshold=" + repr(self.threshold) + ")"
        )


class EdgeState:
    """Last observed state of one channel."""

    def __init__(self):
        self.active = False


class EdgeTranslator:
    """
    Converts per-channel samples into Note On / Note Off events.
    State is keyed by the InputChannel object itself, so two channels
    never share a flag even if their names collide.
    """

    def __init__(self, channels=()):
        self._states = {}
        for channel in channels:
            self._states[channel] = EdgeState()

    def _state(self, channel):
        state = self._states.get(channel)
        if state is None:
            state = EdgeState()
            self._states[channel] = state
        return state

    def poll(self, channel, sample):
        """
        Feed one sample for a channel.

        Args:
            channel: InputChannel
            sample: True if the sensor is currently active

        Returns:
            NoteOn on a rising edge, NoteOff on a falling edge, otherwise None
        """
        state = self._state(channel)
        if sample and not state.active:
            state.active = True
            return NoteOn(channel.midi_channel, channel.note, Velocity.ON)
        if not sample and state.active:
            state.active = False
            return NoteOff(channel.midi_channel, channel.note, Velocity.OFF)
        return None

    def is_active(self, channel):
        state = self._states.get(channel)
        return state is not None and state.active

    def release_all(self, channels):
        """
        Shutdown helper: Note Off for every active channel.

        Args:
            channels: Iterable of InputChannel to check, in order

        Returns:
            List of NoteOff events, one per channel that was active
        """
        events = []
        for channel in channels:
            state = self._states.get(channel)
            if state is not None and state.active:
                state.active = False
                events.append(NoteOff(channel.midi_channel, channel.note, Velocity.OFF))
        return events
