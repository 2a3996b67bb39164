"""
Desktop platform for the MIDI trigger (USB MIDI via mido, serial MIDI via pyserial).
"""
