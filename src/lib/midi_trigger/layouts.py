"""
Ready-made channel layouts for the tutorial boards.
"""
from .constants import Midi, Drum, Defaults
from .edge_translator import InputChannel


def button_notes_layout():
    """Two buttons playing C4 and E4 on channel 1 with a piano."""
    return [
        InputChannel("button_a", 0, 60, midi_channel=1, program=0),
        InputChannel("button_b", 1, 64, midi_channel=1),
    ]


def percussion_layout():
    """Two buttons as kick and snare pads on the drum channel."""
    return [
        InputChannel("kick", 0, Drum.KICK, midi_channel=Midi.PERCUSSION_CHANNEL),
        InputChannel("snare", 1, Drum.SNARE, midi_channel=Midi.PERCUSSION_CHANNEL),
    ]


def knock_layout(threshold=Defaults.ANALOG_THRESHOLD):
    """
    Button A plays a kick, a piezo knock sensor on the analog input plays
    a snare once per hit above the threshold.
    """
    if threshold < 0 or threshold >= Defaults.ANALOG_MAX:
        raise ValueError(
            "knock threshold must be 0.." + str(Defaults.ANALOG_MAX - 1) + ", got " + str(threshold)
        )
    return [
        InputChannel("kick", 0, Drum.KICK, midi_channel=Midi.PERCUSSION_CHANNEL),
        InputChannel(
            "knock", 1, Drum.SNARE,
            midi_channel=Midi.PERCUSSION_CHANNEL,
            threshold=threshold,
        ),
    ]


LAYOUTS = {
    "button_notes": button_notes_layout,
    "percussion": percussion_layout,
    "knock": knock_layout,
}


def get_layout_names():
    return sorted(LAYOUTS.keys())


def get_layout(name):
    """Build the channel list for a layout name."""
    if name not in LAYOUTS:
        raise ValueError(
            "Unknown layout " + repr(name) + ", choose from: " + ", ".join(get_layout_names())
        )
    return LAYOUTS[name]()
