"""
LED Controller - Maps friendly LED names onto MCDU driver calls.

Names are matched case-insensitively, brightness is parsed as a base-10
integer and range-checked (0-255). Bad input and driver failures are logged
and dropped; nothing propagates to the caller.
"""

import logging
import math
import re
from typing import Any, List, Optional

from .driver import MCDUDriver
from .error_recovery import safe_call
from .types import BRIGHTNESS_MAX, BRIGHTNESS_MIN, VALID_LEDS, LEDName

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"[+-]?[0-9]+")


def normalize_led_name(name: Any) -> Optional[str]:
    """Return the canonical uppercase LED name, or None if unknown."""
    if isinstance(name, LEDName):
        return name.value
    if not isinstance(name, str):
        return None
    upper = name.upper()
    return upper if upper in VALID_LEDS else None


def leading_int(text: str) -> Optional[int]:
    """Leading ASCII integer of a string ("200abc" -> 200), or None."""
    match = _LEADING_INT.match(text.strip())
    if match is None:
        return None
    return int(match.group(0))


def parse_brightness(value: Any) -> Optional[int]:
    """
    Parse a brightness value as a lenient base-10 integer.

    Strings use their leading integer prefix ("200abc" -> 200), floats are
    truncated. Returns None when nothing parses or the result is outside
    0-255.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        bright = value
    elif isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        bright = int(value)
    elif isinstance(value, str):
        bright = leading_int(value)
        if bright is None:
            return None
    else:
        return None

    if bright < BRIGHTNESS_MIN or bright > BRIGHTNESS_MAX:
        return None
    return bright


class LEDController:
    """
    Single entry point for setting MCDU LED brightness.

    Usage:
        leds = LEDController(driver)
        leds.set("fail", 200)   # driver.set_led("FAIL", 200)
        leds.all_off()          # driver.set_all_leds(0)
    """

    def __init__(self, mcdu: MCDUDriver):
        self.mcdu = mcdu
        self._valid_leds = VALID_LEDS

    def set(self, led_name: Any, brightness: Any) -> None:
        """Set brightness (0-255) for a single LED."""
        upper_name = normalize_led_name(led_name)
        if upper_name is None:
            logger.warning(
                "Unknown LED: %s. Valid LEDs: %s", led_name, ", ".join(self._valid_leds)
            )
            return

        bright = parse_brightness(brightness)
        if bright is None:
            logger.warning(
                "Invalid brightness for %s: %r (must be 0-255)", led_name, brightness
            )
            return

        def _set():
            self.mcdu.set_led(upper_name, bright)
            return True

        if safe_call(_set, default=False, context=f"setting LED {led_name}"):
            logger.info("LED %s set to %d", led_name, bright)

    def set_all(self, brightness: Any) -> None:
        """Set every LED to the same brightness."""
        bright = parse_brightness(brightness)
        if bright is None:
            logger.warning("Invalid brightness: %r (must be 0-255)", brightness)
            return

        def _set_all():
            self.mcdu.set_all_leds(bright)
            return True

        if safe_call(_set_all, default=False, context="setting all LEDs"):
            logger.info("All LEDs set to %d", bright)

    def off(self, led_name: Any) -> None:
        self.set(led_name, BRIGHTNESS_MIN)

    def on(self, led_name: Any) -> None:
        """Turn an LED on at full brightness."""
        self.set(led_name, BRIGHTNESS_MAX)

    def all_off(self) -> None:
        self.set_all(BRIGHTNESS_MIN)

    def all_on(self) -> None:
        self.set_all(BRIGHTNESS_MAX)

    def get_valid_leds(self) -> List[str]:
        """Valid LED names, as a fresh list the caller may modify."""
        return list(self._valid_leds)

    # camelCase aliases, same names as the panel driver API
    setAll = set_all
    allOff = all_off
    allOn = all_on
    getValidLEDs = get_valid_leds
