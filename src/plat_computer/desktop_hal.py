"""
Desktop Hardware Implementation.

MIDI goes out either through a USB MIDI port (mido) or straight onto a
serial line at MIDI baud rate (pyserial). Inputs are replayed from
recorded sample frames so the trigger logic can be exercised without a
board attached.
"""
import logging
from typing import List, Optional, Sequence

import mido
import serial

from midi_trigger.constants import Kind, Uart
from midi_trigger.hal_protocol import InputsHAL, MidiOutputHAL, DisplayHAL, HardwarePort
from midi_trigger.midi_event import MidiEvent

log = logging.getLogger(__name__)


def event_to_mido(event: MidiEvent) -> mido.Message:
    """Convert a MidiEvent to a mido Message (mido channels are 0-15)."""
    channel = event.channel - 1
    if event.kind == Kind.PROGRAM_CHANGE:
        return mido.Message(event.kind, channel=channel, program=event.program)
    return mido.Message(event.kind, channel=channel, note=event.note, velocity=event.velocity)


def list_outputs() -> List[str]:
    """List all available MIDI output ports."""
    return mido.get_output_names()


class MidoMidiOutputHAL(MidiOutputHAL):
    """USB / virtual MIDI output through a mido port."""

    def __init__(self, port_name: Optional[str] = None, port=None):
        """
        Args:
            port_name: Output port to open; first available if None
            port: Already opened mido output port (takes precedence)
        """
        if port is None:
            if port_name is None:
                outputs = list_outputs()
                if not outputs:
                    raise OSError("No MIDI output ports found")
                port_name = outputs[0]
                log.info(f"Using first available port: {port_name}")
            port = mido.open_output(port_name)
            log.info(f"Opened port: {port_name}")
        self.port = port

    def send(self, event):
        message = event_to_mido(event)
        log.debug(f"Sending: {message}")
        self.port.send(message)

    def close(self):
        self.port.close()


class SerialMidiOutputHAL(MidiOutputHAL):
    """Raw MIDI bytes on a serial line (USB-serial adapter wired to a MIDI jack)."""

    def __init__(self, device: Optional[str] = None, serial_port=None,
                 baudrate: int = Uart.BAUDRATE):
        """
        Args:
            device: Serial device path, e.g. /dev/ttyUSB0
            serial_port: Already opened serial-like object with write()
            baudrate: Line speed, 31250 for real MIDI
        """
        if serial_port is None:
            if device is None:
                raise ValueError("Either device or serial_port is required")
            serial_port = serial.Serial(
                device,
                baudrate=baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
            )
            log.info(f"Opened serial MIDI on {device} at {baudrate} baud")
        self.serial_port = serial_port

    def send(self, event):
        data = event.to_bytes()
        log.debug(f"Serial write: {data.hex()}")
        self.serial_port.write(data)

    def close(self):
        self.serial_port.close()


class ScriptedInputsHAL(InputsHAL):
    """Replays recorded raw readings, one frame per update()."""

    def __init__(self, frames: Sequence[Sequence], loop: bool = False):
        """
        Args:
            frames: List of frames; frame[i] is the raw reading of source i
            loop: Start over after the last frame instead of holding it
        """
        if not frames:
            raise ValueError("At least one frame is required")
        width = len(frames[0])
        for frame in frames:
            if len(frame) != width:
                raise ValueError("All frames must have the same number of sources")
        self.frames = [list(frame) for frame in frames]
        self.loop = loop
        self._index = -1

    def update(self):
        if self._index + 1 < len(self.frames):
            self._index += 1
        elif self.loop:
            self._index = 0

    def read(self, source):
        if self._index < 0:
            return False
        frame = self.frames[self._index]
        if 0 <= source < len(frame):
            return frame[source]
        return False

    def count(self):
        return len(self.frames[0])

    @property
    def finished(self) -> bool:
        return not self.loop and self._index == len(self.frames) - 1


class ConsoleDisplayHAL(DisplayHAL):
    """Logs every event instead of lighting an LED."""

    def __init__(self):
        self.shown = 0

    def clear(self):
        log.debug("Display cleared")

    def show_event(self, event):
        self.shown += 1
        log.info(f"[{self.shown}] {event!r}")

    def show_message(self, message):
        log.info(message)


def create_desktop_hardware_port(frames, midi_output: MidiOutputHAL, loop: bool = False):
    """
    Factory function for the desktop platform.

    Returns:
        HardwarePort with scripted inputs, the given output and console feedback
    """
    return HardwarePort(ScriptedInputsHAL(frames, loop=loop), midi_output, ConsoleDisplayHAL())
