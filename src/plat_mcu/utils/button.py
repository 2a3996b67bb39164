from machine import Pin, ADC
import time


class Button:
    def __init__(
        self,
        pin,
        *,
        pull=Pin.PULL_UP,
        debounce_ms=20,
    ):
        # Support both direct pin numbers and already configured pin objects
        if isinstance(pin, int):
            self.pin = Pin(pin, Pin.IN, pull)
        else:
            self.pin = pin

        self.debounce_ms = debounce_ms

        self._last_raw = self.pin.value()
        self._stable = self._last_raw
        self._last_change = time.ticks_ms()

    def update(self):
        """Call this frequently (e.g. every loop iteration)."""
        now = time.ticks_ms()
        raw = self.pin.value()

        # Contact bounce: only accept a level that held for debounce_ms
        if raw != self._last_raw:
            self._last_change = now
            self._last_raw = raw

        if time.ticks_diff(now, self._last_change) >= self.debounce_ms:
            self._stable = raw

    def is_pressed(self):
        """True while button is physically pressed."""
        return self._stable == 0  # pull-up logic


class AnalogSensor:
    """Analog input (e.g. piezo knock sensor) scaled to 0-1023."""

    def __init__(self, pin):
        if isinstance(pin, int):
            pin = Pin(pin)
        self.adc = ADC(pin)
        self._value = 0

    def update(self):
        # read_u16 is 0-65535 on every port, shift down to 10 bits
        self._value = self.adc.read_u16() >> 6

    def value(self):
        return self._value
