#!/usr/bin/env python3
"""
Play a recorded press/release pattern through the MIDI trigger and send
the resulting notes to a USB MIDI port or a serial MIDI line.
"""

import argparse
import logging
import sys

from midi_trigger import TriggerApp, get_layout, get_layout_names
from midi_trigger.constants import Defaults

from plat_computer.desktop_hal import (
    MidoMidiOutputHAL,
    SerialMidiOutputHAL,
    create_desktop_hardware_port,
    list_outputs,
)

log = logging.getLogger(__name__)


def _active_reading(channel):
    if channel.is_analog:
        if channel.threshold >= Defaults.ANALOG_MAX:
            raise ValueError(
                f"Channel {channel.name!r} threshold {channel.threshold} can never be exceeded "
                f"(readings top out at {Defaults.ANALOG_MAX})"
            )
        return min(Defaults.ANALOG_MAX, channel.threshold + 200)
    return True


def _idle_reading(channel):
    return 0 if channel.is_analog else False


def demo_frames(channels, hold=25, gap=25):
    """
    Build a pattern that presses each channel in turn.

    Args:
        channels: Layout channels; sources must be 0..n-1
        hold: Frames each press is held
        gap: Idle frames after each release

    Returns:
        List of frames, frame[source] = raw reading

    Raises:
        ValueError: If an analog channel's threshold is at or above the ADC maximum
    """
    width = max(channel.source for channel in channels) + 1
    idle = [False] * width
    for channel in channels:
        idle[channel.source] = _idle_reading(channel)

    frames = []
    for channel in channels:
        pressed = list(idle)
        pressed[channel.source] = _active_reading(channel)
        frames.extend([list(pressed) for _ in range(hold)])
        frames.extend([list(idle) for _ in range(gap)])
    return frames


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {value}")
    return value


def build_parser():
    parser = argparse.ArgumentParser(description="MIDI trigger desktop sender")
    parser.add_argument("--list", action="store_true", help="List MIDI output ports and exit")
    parser.add_argument("--port", help="mido output port name (default: first available)")
    parser.add_argument("--serial", metavar="DEVICE",
                        help="Send raw MIDI on a serial device instead of a USB MIDI port")
    parser.add_argument("--layout", default=Defaults.LAYOUT, choices=get_layout_names())
    parser.add_argument("--interval-ms", type=_positive_int, default=Defaults.POLL_INTERVAL_MS,
                        help="Polling interval in milliseconds")
    parser.add_argument("--loops", type=_non_negative_int, default=1,
                        help="Times to play the pattern, 0 = until Ctrl+C")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        outputs = list_outputs()
        if not outputs:
            print("No MIDI output ports found!")
            return 1
        print("Available MIDI outputs:")
        for i, name in enumerate(outputs):
            print(f"  [{i}] {name}")
        return 0

    try:
        channels = get_layout(args.layout)
        frames = demo_frames(channels)

        if args.serial:
            midi_output = SerialMidiOutputHAL(args.serial)
        else:
            midi_output = MidoMidiOutputHAL(args.port)

        try:
            loop = args.loops != 1
            hardware = create_desktop_hardware_port(frames, midi_output, loop=loop)
            app = TriggerApp(hardware, channels, poll_interval_ms=args.interval_ms)

            iterations = None if args.loops == 0 else len(frames) * args.loops
            print("Playing pattern. Press Ctrl+C to stop.\n")
            app.run(iterations=iterations)
        finally:
            midi_output.close()

    except KeyboardInterrupt:
        print("\nStopped by user.")
    except Exception as e:
        log.error(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
