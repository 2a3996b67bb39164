"""
Constants for the MIDI Trigger library.
All magic strings and numbers are defined here for easy maintenance.
"""


# ============================================================================
# MIDI CONSTANTS
# ============================================================================
class Midi:
    """MIDI wire format constants."""
    # Status bytes (upper nibble), OR'ed with channel - 1
    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    PROGRAM_CHANGE = 0xC0

    # User-facing channel range (wire nibble is channel - 1)
    CHANNEL_MIN = 1
    CHANNEL_MAX = 16
    PERCUSSION_CHANNEL = 10

    # Data byte range (note, velocity, program)
    DATA_MIN = 0
    DATA_MAX = 127


# ============================================================================
# EVENT KINDS (same names as mido message types)
# ============================================================================
class Kind:
    """Event kind constants."""
    NOTE_ON = "note_on"
    NOTE_OFF = "note_off"
    PROGRAM_CHANGE = "program_change"


# ============================================================================
# VELOCITIES
# ============================================================================
class Velocity:
    """Fixed velocities - no velocity curve is modelled."""
    ON = 127
    OFF = 0


# ============================================================================
# UART (MIDI 1.0 DIN: 31250 baud, 8N1)
# ============================================================================
class Uart:
    """Serial line settings for DIN/TRS MIDI."""
    BAUDRATE = 31250
    BITS = 8
    PARITY = None
    STOP = 1


# ============================================================================
# GENERAL MIDI DRUMS (channel 10)
# ============================================================================
class Drum:
    """A few General MIDI percussion notes."""
    KICK = 35
    SNARE = 38


# ============================================================================
# DEFAULTS
# ============================================================================
class Defaults:
    """Runtime defaults."""
    # Polling cadence - only affects latency, not event order
    POLL_INTERVAL_MS = 10

    # Analog knock sensor threshold (readings are 0-1023)
    ANALOG_THRESHOLD = 500
    ANALOG_MAX = 1023

    # Button contact bounce filter
    DEBOUNCE_MS = 20

    LAYOUT = "button_notes"
