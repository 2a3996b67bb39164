"""
Main MIDI Trigger Application.
Ties together the edge translator, the channel layout, and hardware.
Platform-independent - receives hardware through dependency injection.
"""
import time

from .constants import Defaults
from .edge_translator import EdgeTranslator
from .midi_event import ProgramChange


class TriggerApp:
    """
    Polling loop that turns sensor edges into MIDI notes.
    Single-threaded: every channel is polled in order once per update().
    """

    def __init__(self, hardware, channels, poll_interval_ms=Defaults.POLL_INTERVAL_MS):
        """
        Initialize the trigger app.

        Args:
            hardware: HardwarePort instance with all HAL implementations
            channels: List of InputChannel, polled in this order
            poll_interval_ms: Delay between polls in run()
        """
        if poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be positive, got " + str(poll_interval_ms))

        available = hardware.inputs.count()
        names = set()
        for channel in channels:
            if channel.name in names:
                raise ValueError("Duplicate channel name: " + repr(channel.name))
            names.add(channel.name)
            if channel.source >= available:
                raise ValueError(
                    "Channel " + repr(channel.name) + " reads source " + str(channel.source)
                    + " but the hardware has " + str(available) + " inputs"
                )

        self.hw = hardware
        self.channels = list(channels)
        self.poll_interval_ms = poll_interval_ms
        self.translator = EdgeTranslator(self.channels)
        self._started = False

    def _dispatch(self, event):
        """Forward one event to the MIDI output and the display."""
        self.hw.midi_output.send(event)
        if self.hw.display is not None:
            self.hw.display.show_event(event)

    def start(self):
        """Select the configured instruments before the first poll."""
        if self._started:
            return
        selected = set()
        for channel in self.channels:
            if channel.program is None:
                continue
            key = (channel.midi_channel, channel.program)
            if key in selected:
                continue
            selected.add(key)
            self.hw.midi_output.send(ProgramChange(channel.midi_channel, channel.program))

        if self.hw.display is not None:
            self.hw.display.show_message("ready")
        self._started = True

    def update(self):
        """
        One polling iteration - call this at a fixed cadence.

        Returns:
            List of events sent during this iteration
        """
        self.hw.update_inputs()

        events = []
        for channel in self.channels:
            reading = self.hw.inputs.read(channel.source)
            event = self.translator.poll(channel, channel.sample(reading))
            if event is not None:
                self._dispatch(event)
                events.append(event)
        return events

    def run(self, iterations=None, sleep=None):
        """
        Blocking loop: start, then update every poll_interval_ms.

        Args:
            iterations: Number of updates, or None to run until interrupted
            sleep: Optional sleep function taking seconds (defaults to time.sleep)
        """
        if sleep is None:
            sleep = time.sleep
        interval_s = self.poll_interval_ms / 1000

        self.start()
        count = 0
        try:
            while iterations is None or count < iterations:
                self.update()
                count += 1
                sleep(interval_s)
        except KeyboardInterrupt:
            pass
        finally:
            self.cleanup()
        return count

    def cleanup(self):
        """Clean shutdown - turn off every note still sounding."""
        for event in self.translator.release_all(self.channels):
            self._dispatch(event)

        if self.hw.display is not None:
            self.hw.display.clear()
