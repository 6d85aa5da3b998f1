"""MCP tool handlers - LED control.

Handlers: set_led, set_all_leds, led_on, led_off, all_leds_on, all_leds_off,
list_leds, apply_leds, get_led_state.

Every handler returns a single TextContent holding JSON. Inputs are checked
with the same helpers the controller uses, so callers get `success: false`
for names or values the controller would drop.
"""

import json
import threading
from typing import Any, Dict, Optional

from mcp.types import TextContent

from .commands import LEDCommandHandler
from .config import LEDConfig, get_led_config
from .driver import MCDUDriver, get_driver
from .leds import LEDController, normalize_led_name, parse_brightness
from .types import BRIGHTNESS_MAX, BRIGHTNESS_MIN, VALID_LEDS

_state_lock = threading.Lock()
_driver: MCDUDriver | None = None
_commands: LEDCommandHandler | None = None


def init_panel(config: Optional[LEDConfig] = None, driver: Optional[MCDUDriver] = None) -> LEDCommandHandler:
    """Create the driver/controller pair and apply startup backlights."""
    global _driver, _commands
    if config is None:
        config = get_led_config()
    with _state_lock:
        if driver is None:
            driver = get_driver("mock" if config.mock_mode else "auto")
        _driver = driver
        _commands = LEDCommandHandler(LEDController(driver))
        _commands.set_led("BACKLIGHT", config.default_backlight)
        _commands.set_led("SCREEN_BACKLIGHT", config.default_screen_backlight)
        return _commands


def reset_panel() -> None:
    """Drop the current driver/controller (next call re-initializes)."""
    global _driver, _commands
    with _state_lock:
        _driver = None
        _commands = None


def _get_commands() -> LEDCommandHandler:
    if _commands is None:
        return init_panel()
    return _commands


def _reply(payload: Dict[str, Any]) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload))]


def _unknown_led(name: Any) -> list[TextContent]:
    return _reply({
        "success": False,
        "error": f"Unknown LED: {name}",
        "valid_leds": list(VALID_LEDS),
    })


def _invalid_brightness(value: Any) -> list[TextContent]:
    return _reply({
        "success": False,
        "error": f"Invalid brightness: {value!r} (must be 0-255)",
    })


async def handle_set_led(arguments: dict) -> list[TextContent]:
    """Set one LED to a brightness 0-255."""
    name = normalize_led_name(arguments.get("name"))
    if name is None:
        return _unknown_led(arguments.get("name"))
    bright = parse_brightness(arguments.get("brightness"))
    if bright is None:
        return _invalid_brightness(arguments.get("brightness"))

    _get_commands().set_led(name, bright)
    return _reply({"success": True, "led": name, "brightness": bright})


async def handle_set_all_leds(arguments: dict) -> list[TextContent]:
    """Set every LED to the same brightness."""
    bright = parse_brightness(arguments.get("brightness"))
    if bright is None:
        return _invalid_brightness(arguments.get("brightness"))

    _get_commands().set_all(bright)
    return _reply({"success": True, "brightness": bright})


async def handle_led_on(arguments: dict) -> list[TextContent]:
    return await handle_set_led({"name": arguments.get("name"), "brightness": BRIGHTNESS_MAX})


async def handle_led_off(arguments: dict) -> list[TextContent]:
    return await handle_set_led({"name": arguments.get("name"), "brightness": BRIGHTNESS_MIN})


async def handle_all_leds_on(arguments: dict) -> list[TextContent]:
    return await handle_set_all_leds({"brightness": BRIGHTNESS_MAX})


async def handle_all_leds_off(arguments: dict) -> list[TextContent]:
    return await handle_set_all_leds({"brightness": BRIGHTNESS_MIN})


async def handle_list_leds(arguments: dict) -> list[TextContent]:
    """List valid LED names."""
    return _reply({"leds": list(VALID_LEDS)})


async def handle_apply_leds(arguments: dict) -> list[TextContent]:
    """
    Apply several LEDs at once.

    Accepts {"leds": {"FAIL": true, "RDY": 128}} - booleans are on/off,
    numbers are clamped to 0-255. Unknown names are reported and skipped.
    """
    leds = arguments.get("leds")
    if not isinstance(leds, dict):
        return _reply({"success": False, "error": "leds must be an object"})

    commands = _get_commands()
    commands.handle_leds_set({"leds": leds})
    unknown = [led for led in leds if normalize_led_name(led) is None]
    applied = [normalize_led_name(led) for led in leds if normalize_led_name(led) is not None]
    return _reply({
        "success": not unknown,
        "applied": applied,
        "unknown": unknown,
        "state": commands.get_state(),
    })


async def handle_get_led_state(arguments: dict) -> list[TextContent]:
    """Last value sent to each LED, plus driver info."""
    commands = _get_commands()
    return _reply({
        "state": commands.get_state(),
        "driver": type(_driver).__name__ if _driver is not None else None,
        "hardware": _driver.is_available() if _driver is not None else False,
    })
