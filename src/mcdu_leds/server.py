"""
MCDU LED MCP Server

Tools for driving the MCDU panel LEDs:
- set_led / led_on / led_off: one LED
- set_all_leds / all_leds_on / all_leds_off: whole panel
- apply_leds: several LEDs in one call
- list_leds / get_led_state: what exists, what was last set

Transport: stdio (local single client).
"""

import argparse
import asyncio
import json
import logging
import signal
import sys
from pathlib import Path

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from . import __version__
from .config import get_config_manager
from .handlers import (
    handle_all_leds_off,
    handle_all_leds_on,
    handle_apply_leds,
    handle_get_led_state,
    handle_led_off,
    handle_led_on,
    handle_list_leds,
    handle_set_all_leds,
    handle_set_led,
    init_panel,
)
from .types import VALID_LEDS

logger = logging.getLogger(__name__)

_LED_NAME_SCHEMA = {
    "type": "string",
    "description": f"LED name, case-insensitive: {', '.join(VALID_LEDS)}",
}
_BRIGHTNESS_SCHEMA = {
    "type": ["integer", "string"],
    "description": "Brightness 0-255",
}

# ============================================================
# MINIMAL TOOLS - single LED control
# ============================================================
TOOLS_MINIMAL = [
    Tool(
        name="set_led",
        description="Set one MCDU LED to a brightness (0-255)",
        inputSchema={
            "type": "object",
            "properties": {"name": _LED_NAME_SCHEMA, "brightness": _BRIGHTNESS_SCHEMA},
            "required": ["name", "brightness"],
        },
    ),
    Tool(
        name="led_on",
        description="Turn one MCDU LED on at full brightness",
        inputSchema={
            "type": "object",
            "properties": {"name": _LED_NAME_SCHEMA},
            "required": ["name"],
        },
    ),
    Tool(
        name="led_off",
        description="Turn one MCDU LED off",
        inputSchema={
            "type": "object",
            "properties": {"name": _LED_NAME_SCHEMA},
            "required": ["name"],
        },
    ),
    Tool(
        name="list_leds",
        description="List valid MCDU LED names",
        inputSchema={"type": "object", "properties": {}},
    ),
]

# ============================================================
# STANDARD TOOLS - whole panel and state
# ============================================================
TOOLS_STANDARD = [
    Tool(
        name="set_all_leds",
        description="Set every MCDU LED to the same brightness (0-255)",
        inputSchema={
            "type": "object",
            "properties": {"brightness": _BRIGHTNESS_SCHEMA},
            "required": ["brightness"],
        },
    ),
    Tool(
        name="all_leds_on",
        description="Turn every MCDU LED on at full brightness",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="all_leds_off",
        description="Turn every MCDU LED off",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="apply_leds",
        description="Set several LEDs at once: {leds: {NAME: true|false|0-255}}",
        inputSchema={
            "type": "object",
            "properties": {
                "leds": {
                    "type": "object",
                    "description": "Map of LED name to on/off (boolean) or brightness (0-255)",
                },
            },
            "required": ["leds"],
        },
    ),
    Tool(
        name="get_led_state",
        description="Get the last value sent to each LED",
        inputSchema={"type": "object", "properties": {}},
    ),
]

HANDLERS = {
    "set_led": handle_set_led,
    "led_on": handle_led_on,
    "led_off": handle_led_off,
    "list_leds": handle_list_leds,
    "set_all_leds": handle_set_all_leds,
    "all_leds_on": handle_all_leds_on,
    "all_leds_off": handle_all_leds_off,
    "apply_leds": handle_apply_leds,
    "get_led_state": handle_get_led_state,
}


def get_active_tools(tool_mode: str = "standard") -> list[Tool]:
    """Get tools for a tool mode ("minimal" or "standard")."""
    if tool_mode == "minimal":
        return TOOLS_MINIMAL
    return TOOLS_MINIMAL + TOOLS_STANDARD


def create_server(tool_mode: str = "standard") -> Server:
    """Create and configure the MCP server."""
    server = Server("mcdu-leds", version=__version__)
    tools = get_active_tools(tool_mode)
    allowed = {tool.name for tool in tools}

    @server.list_tools()
    async def list_tools():
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: dict | None):
        handler = HANDLERS.get(name) if name in allowed else None
        if not handler:
            return [TextContent(type="text", text=json.dumps({
                "error": f"Unknown tool: {name}",
                "available": sorted(allowed),
            }))]
        try:
            return await handler(arguments or {})
        except Exception as e:
            logger.exception("Tool %s failed", name)
            return [TextContent(type="text", text=json.dumps({
                "success": False,
                "error": f"{name} failed: {e}",
            }))]

    return server


async def run_stdio_server(tool_mode: str = "standard"):
    """Run the MCP server over stdio (local)."""
    server = create_server(tool_mode)

    def shutdown_handler(sig, frame):
        logger.info("Shutting down...")
        raise SystemExit(0)

    signal.signal(signal.SIGINT, shutdown_handler)
    signal.signal(signal.SIGTERM, shutdown_handler)

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def setup_logging(level: str = "info") -> None:
    """Log to stderr; stdout belongs to the stdio transport."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main():
    """Entry point."""
    parser = argparse.ArgumentParser(description="MCDU LED MCP Server")
    parser.add_argument("--config", type=Path, default=None,
                        help="Config file (.yaml/.yml/.json, default: mcdu_leds.yaml)")
    parser.add_argument("--mock", action="store_true",
                        help="Run against the in-memory panel instead of hardware")
    parser.add_argument("--log-level", default=None,
                        choices=["debug", "info", "warning", "error"],
                        help="Override configured log level")
    args = parser.parse_args()

    config = get_config_manager(args.config).load()
    if args.mock:
        config.mock_mode = True
    setup_logging(args.log_level or config.log_level)

    logger.info("mcdu-leds v%s starting (mock=%s)", __version__, config.mock_mode)
    init_panel(config)

    try:
        asyncio.run(run_stdio_server(config.tool_mode))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception:
        logger.exception("Fatal error in server")
        sys.exit(1)


if __name__ == "__main__":
    main()
