"""
MicroPython entry point for the MIDI trigger.

Run this file on the board. Hold button A while resetting to skip MIDI
setup and stay at the REPL.
"""
from hal_mcu import create_mcu_hardware_port, safe_mode_requested
from lib.midi_trigger import TriggerApp, get_layout
from lib.midi_trigger.constants import Defaults

# "button_notes", "percussion" or "knock"
LAYOUT = Defaults.LAYOUT


def main():
    if safe_mode_requested():
        print("Safe mode: button A held at boot, MIDI not started.")
        return

    print("Initializing MIDI trigger...")

    hardware = create_mcu_hardware_port(use_knock_sensor=(LAYOUT == "knock"))
    channels = get_layout(LAYOUT)
    app = TriggerApp(hardware, channels, poll_interval_ms=Defaults.POLL_INTERVAL_MS)

    print("========================================")
    print("  MIDI TRIGGER READY (" + LAYOUT + ")")
    print("========================================")
    for channel in channels:
        print("  " + channel.name + ": note " + str(channel.note)
              + " ch " + str(channel.midi_channel))
    print("========================================")

    # run() sends note offs for held notes on Ctrl+C
    app.run()
    print("MIDI trigger stopped.")


main()
