"""LED types and constants."""

from enum import Enum

BRIGHTNESS_MIN = 0
BRIGHTNESS_MAX = 255


class LEDName(str, Enum):
    """Addressable LEDs on the MCDU panel."""
    BACKLIGHT = "BACKLIGHT"
    SCREEN_BACKLIGHT = "SCREEN_BACKLIGHT"
    FAIL = "FAIL"
    FM = "FM"
    MCDU = "MCDU"
    MENU = "MENU"
    FM1 = "FM1"
    IND = "IND"
    RDY = "RDY"
    STATUS = "STATUS"
    FM2 = "FM2"


# Canonical order, matches the driver's LED table
VALID_LEDS = tuple(led.value for led in LEDName)
