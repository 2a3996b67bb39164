from .button import Button, AnalogSensor
