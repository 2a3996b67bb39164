"""
MicroPython MCU Hardware Implementation.
For an ESP32/RP2040 board with two push buttons, a piezo knock sensor,
a status LED, and a TRS/DIN MIDI output on a UART.

This file contains all hardware-specific code. When changing hardware:
1. Update PinConfig class with new pin assignments
2. Modify HAL implementations if hardware interface differs
3. Update create_mcu_hardware_port() factory function
"""
from machine import Pin
from lib.midi import Midi
from utils import Button, AnalogSensor

from lib.midi_trigger.hal_protocol import (
    InputsHAL,
    MidiOutputHAL,
    DisplayHAL,
    HardwarePort,
)
from lib.midi_trigger.constants import Defaults, Kind


# ============================================================================
# PIN CONFIGURATION - Change these when hardware changes
# ============================================================================
class PinConfig:
    """
    Centralized pin assignments for the MCU.
    Modify this class when changing hardware connections.
    """

    # Push buttons to GND, internal pull-ups (source 0 and 1)
    BUTTON_A = 12
    BUTTON_B = 13

    # Piezo knock sensor on an ADC-capable pin (replaces button B as source 1)
    KNOCK_SENSOR = 26

    # Held at boot: skip MIDI setup and fall back to the REPL
    SAFE_MODE_BUTTON = BUTTON_A

    # MIDI UART (TRS Type-A / DIN via 220 ohm)
    MIDI_UART_ID = 1
    MIDI_TX = 4
    MIDI_RX = 5

    # Status LED
    LED = 25


# ============================================================================
# HAL IMPLEMENTATIONS
# ============================================================================


class MCUInputsHAL(InputsHAL):
    """Buttons (digital) and analog sensors, indexed by source number."""

    def __init__(self, sources):
        """
        Args:
            sources: List of Button or AnalogSensor, position = source index
        """
        self.sources = list(sources)

    def update(self):
        for src in self.sources:
            src.update()

    def read(self, source):
        if 0 <= source < len(self.sources):
            src = self.sources[source]
            if isinstance(src, AnalogSensor):
                return src.value()
            return src.is_pressed()
        return False

    def count(self):
        return len(self.sources)


class MCUMidiOutputHAL(MidiOutputHAL):
    """TRS MIDI output implementation using UART."""

    def __init__(self, uart_id, tx_pin, rx_pin):
        """
        Args:
            uart_id: UART peripheral ID
            tx_pin: GPIO Pin for MIDI TX
            rx_pin: GPIO Pin for MIDI RX
        """
        self.midi = Midi(uart_id, tx=tx_pin, rx=rx_pin)

    def send(self, event):
        # lib.midi channels are 0-15
        channel = event.channel - 1
        if event.kind == Kind.NOTE_ON:
            self.midi.send_note_on(channel, event.note, velocity=event.velocity)
        elif event.kind == Kind.NOTE_OFF:
            self.midi.send_note_off(channel, event.note)
        elif event.kind == Kind.PROGRAM_CHANGE:
            self.midi.send_program_change(channel, event.program)


class MCULedDisplayHAL(DisplayHAL):
    """Single status LED - lit while at least one note is on."""

    def __init__(self, pin):
        self.led = pin
        self._notes_on = 0
        self.led.value(0)

    def clear(self):
        self._notes_on = 0
        self.led.value(0)

    def show_event(self, event):
        if event.kind == Kind.NOTE_ON:
            self._notes_on += 1
        elif event.kind == Kind.NOTE_OFF and self._notes_on > 0:
            self._notes_on -= 1
        self.led.value(1 if self._notes_on else 0)

    def show_message(self, message):
        print(message)


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================


def safe_mode_requested():
    """True if the safe-mode button is held down right now."""
    pin = Pin(PinConfig.SAFE_MODE_BUTTON, Pin.IN, Pin.PULL_UP)
    return pin.value() == 0


def create_mcu_hardware_port(use_knock_sensor=False):
    """
    Factory function to create fully configured MCU hardware.

    Args:
        use_knock_sensor: Source 1 is the analog knock sensor instead of button B

    Returns:
        HardwarePort instance with all HAL implementations configured
    """
    sources = [Button(PinConfig.BUTTON_A, debounce_ms=Defaults.DEBOUNCE_MS)]
    if use_knock_sensor:
        sources.append(AnalogSensor(PinConfig.KNOCK_SENSOR))
    else:
        sources.append(Button(PinConfig.BUTTON_B, debounce_ms=Defaults.DEBOUNCE_MS))

    inputs = MCUInputsHAL(sources)

    midi_output = MCUMidiOutputHAL(
        PinConfig.MIDI_UART_ID,
        Pin(PinConfig.MIDI_TX),
        Pin(PinConfig.MIDI_RX),
    )

    display = MCULedDisplayHAL(Pin(PinConfig.LED, Pin.OUT))

    return HardwarePort(inputs, midi_output, display)
