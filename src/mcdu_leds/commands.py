"""
LED command payloads - applies leds/set and leds/single messages.

Payloads arrive already decoded (dicts); whatever transport carries them is
someone else's job. The handler keeps a cache of what every LED was last
told, so the full panel can be restored after the driver reconnects.
"""

import logging
import math
from typing import Any, Dict, Optional

from .leds import LEDController, leading_int, normalize_led_name
from .types import BRIGHTNESS_MAX, BRIGHTNESS_MIN, VALID_LEDS

logger = logging.getLogger(__name__)

TOPIC_LEDS_SET = "leds/set"
TOPIC_LED_SINGLE = "leds/single"


def _default_cache() -> Dict[str, int]:
    cache = {name: BRIGHTNESS_MIN for name in VALID_LEDS}
    # Backlights default on
    cache["BACKLIGHT"] = BRIGHTNESS_MAX
    cache["SCREEN_BACKLIGHT"] = BRIGHTNESS_MAX
    return cache


def coerce_led_value(value: Any) -> int:
    """
    Map a leds/set value onto 0-255.

    Booleans are on/off, numbers are clamped, anything else means off.
    """
    if isinstance(value, bool):
        return BRIGHTNESS_MAX if value else BRIGHTNESS_MIN
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return BRIGHTNESS_MIN
        return int(max(BRIGHTNESS_MIN, min(BRIGHTNESS_MAX, value)))
    return BRIGHTNESS_MIN


def _clamp_brightness(value: Any) -> Optional[int]:
    """Parse a leds/single brightness, clamping instead of rejecting."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return coerce_led_value(value)
    if isinstance(value, str):
        # Out-of-range strings clamp like numbers do ("300abc" -> 255)
        parsed = leading_int(value)
        return None if parsed is None else coerce_led_value(parsed)
    return None


class LEDCommandHandler:
    """Applies LED command payloads through an LEDController."""

    def __init__(self, controller: LEDController):
        self.controller = controller
        self._cache = _default_cache()
        self.messages_handled = 0

    def handle(self, topic_suffix: str, data: Dict[str, Any]) -> None:
        """Dispatch a payload by topic suffix (e.g. "leds/set")."""
        self.messages_handled += 1
        if topic_suffix == TOPIC_LEDS_SET:
            self.handle_leds_set(data)
        elif topic_suffix == TOPIC_LED_SINGLE:
            self.handle_led_single(data)
        else:
            logger.warning("Unknown topic: %s", topic_suffix)

    def handle_leds_set(self, data: Dict[str, Any]) -> None:
        """
        Set several LEDs at once: {"leds": {"FAIL": true, "RDY": 128}}.

        Unknown LEDs are skipped with a warning; the rest are applied.
        """
        leds = data.get("leds") if isinstance(data, dict) else None
        if not isinstance(leds, dict):
            logger.error("Invalid leds/set: leds must be an object, received: %r", data)
            return

        logger.debug("LEDs set: %s", leds)
        for led, raw in leds.items():
            name = normalize_led_name(led)
            if name is None:
                logger.warning("Unknown LED: %s", led)
                continue
            self.set_led(name, coerce_led_value(raw))

    def handle_led_single(self, data: Dict[str, Any]) -> None:
        """
        Set one LED: {"name": "RDY", "brightness": 200} or {"name": "RDY", "state": true}.

        Brightness wins when both are present.
        """
        if not isinstance(data, dict):
            logger.warning("Invalid leds/single payload: %r", data)
            return

        name = normalize_led_name(data.get("name"))
        if name is None:
            logger.warning("Unknown LED: %s received: %r", data.get("name"), data)
            return

        if data.get("brightness") is not None:
            value = _clamp_brightness(data["brightness"])
            if value is None:
                logger.warning("Invalid brightness for %s: %r", name, data["brightness"])
                return
            logger.debug("LED single (brightness): %s %d", name, value)
        elif data.get("state") is not None:
            value = BRIGHTNESS_MAX if data["state"] else BRIGHTNESS_MIN
            logger.debug("LED single (state): %s %d", name, value)
        else:
            logger.warning("LED single missing state or brightness")
            return

        self.set_led(name, value)

    def set_led(self, name: str, value: int) -> None:
        """Record and forward one LED value (canonical name)."""
        self._cache[name] = value
        self.controller.set(name, value)

    def set_all(self, value: int) -> None:
        for name in self._cache:
            self._cache[name] = value
        self.controller.set_all(value)

    def get_state(self) -> Dict[str, int]:
        """Last value sent to each LED."""
        return dict(self._cache)

    def restore(self) -> None:
        """Re-send the cached state of every LED, e.g. after a reconnect."""
        for name, value in self._cache.items():
            self.controller.set(name, value)
