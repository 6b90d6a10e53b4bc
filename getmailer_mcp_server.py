"""
getmailer_mcp_server.py
-----------------------
Local stdio MCP server exposing the GetMailer API as tools.

Register it with the MCP host as a stdio server, e.g. in
.claude/settings.json:

    "mcpServers": {
        "getmailer": {
            "command": "getmailer-mcp",
            "env": {"GETMAILER_API_KEY": "gm_..."}
        }
    }

Without GETMAILER_API_KEY only the signup tool works; every other tool
answers with a configuration error until a key is set. With
GETMAILER_SIGNUP_ENABLED=false the key becomes mandatory at startup.
"""

import asyncio
import logging
import sys
from typing import List

from dotenv import load_dotenv
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from getmailer_client import GetMailerClient
from getmailer_config import ConfigurationError, Settings, __version__, configure_logging
from getmailer_dispatch import Dispatcher, ErrorKind, ToolOutcome
from getmailer_tools import list_tool_definitions

logger = logging.getLogger(__name__)

SERVER_NAME = "getmailer-mcp"
SERVER_VERSION = __version__


def render_outcome(outcome: ToolOutcome) -> types.CallToolResult:
    """
    Unknown tools become a protocol-level METHOD_NOT_FOUND error; every
    other failure is reported as error-flagged text content.
    """
    if outcome.error is ErrorKind.UNKNOWN_TOOL:
        raise McpError(types.ErrorData(code=types.METHOD_NOT_FOUND, message=outcome.text))

    text = f"Error: {outcome.text}" if outcome.is_error else outcome.text
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=outcome.is_error,
    )


def create_server(dispatcher: Dispatcher, settings: Settings) -> Server:
    server = Server(SERVER_NAME, version=SERVER_VERSION)
    tools = list_tool_definitions(settings.signup_enabled)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return tools

    # Bypasses @server.call_tool(), which folds McpError into isError content;
    # unknown tools must reach the host as METHOD_NOT_FOUND.
    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        outcome = await dispatcher.dispatch(request.params.name, request.params.arguments)
        return types.ServerResult(render_outcome(outcome))

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def main(settings: Settings) -> None:
    async with GetMailerClient(settings) as client:
        server = create_server(Dispatcher(settings, client), settings)
        logger.info(f"GetMailer MCP server running | api={settings.api_url} | signup={settings.signup_enabled}")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )


def run() -> None:
    load_dotenv()

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        configure_logging(Settings())
        logger.error(str(e))
        sys.exit(1)

    configure_logging(settings)

    try:
        settings.require_startup_key()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(main(settings))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
