"""
getmailer_http_server.py
------------------------
MCP JSON-RPC 2.0 over HTTP for hosted deployments (App Runner, containers).

Start:
    getmailer-mcp-http
    uvicorn getmailer_http_server:create_app --factory --port 8004

Endpoints:
    GET  /   → health check
    POST /   → MCP JSON-RPC (initialize, ping, tools/list, tools/call)
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from mcp import types
from mcp.shared.exceptions import McpError

from getmailer_client import GetMailerClient
from getmailer_config import ConfigurationError, Settings, configure_logging
from getmailer_dispatch import Dispatcher
from getmailer_mcp_server import SERVER_NAME, SERVER_VERSION, render_outcome
from getmailer_tools import list_tool_definitions

logger = logging.getLogger(__name__)

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


def _result(request_id: Any, result: Dict[str, Any]) -> JSONResponse:
    return JSONResponse({"jsonrpc": "2.0", "id": request_id, "result": result})


def _error(request_id: Any, code: int, message: str) -> JSONResponse:
    return JSONResponse({
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": code, "message": message},
    })


def create_app(settings: Optional[Settings] = None, dispatcher: Optional[Dispatcher] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    settings.require_startup_key()

    owned_client: Optional[GetMailerClient] = None
    if dispatcher is None:
        owned_client = GetMailerClient(settings)
        dispatcher = Dispatcher(settings, owned_client)

    tools = [
        tool.model_dump(mode="json", by_alias=True, exclude_none=True)
        for tool in list_tool_definitions(settings.signup_enabled)
    ]

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owned_client is not None:
            await owned_client.aclose()

    app = FastAPI(title="GetMailer MCP Server", version=SERVER_VERSION, lifespan=lifespan)

    # -------------------------------------------------------
    # Health check
    # -------------------------------------------------------
    @app.get("/")
    async def health():
        return {"status": "ok", "service": SERVER_NAME}

    # -------------------------------------------------------
    # MCP JSON-RPC 2.0 handler
    # -------------------------------------------------------
    @app.post("/")
    async def mcp_handler(request: Request):
        try:
            body = await request.json()
        except ValueError:
            return _error(None, PARSE_ERROR, "Parse error")

        if not isinstance(body, dict):
            return _error(None, INVALID_REQUEST, "Invalid request")

        method = body.get("method")
        params = body.get("params") or {}
        request_id = body.get("id")

        # --- notifications (no id) → never respond ---
        if request_id is None:
            return Response(status_code=204)

        if not isinstance(method, str) or not isinstance(params, dict):
            return _error(request_id, INVALID_REQUEST, "Invalid request")

        # --- initialize ---
        if method == "initialize":
            return _result(request_id, {
                "protocolVersion": types.LATEST_PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
                "capabilities": {"tools": {}},
            })

        # --- ping ---
        elif method == "ping":
            return _result(request_id, {})

        # --- tools/list ---
        elif method == "tools/list":
            return _result(request_id, {"tools": tools})

        # --- tools/call ---
        elif method == "tools/call":
            name = params.get("name")
            arguments = params.get("arguments")
            if not isinstance(name, str):
                return _error(request_id, INVALID_PARAMS, "Tool name must be a string")
            if arguments is not None and not isinstance(arguments, dict):
                return _error(request_id, INVALID_PARAMS, "Tool arguments must be an object")

            outcome = await dispatcher.dispatch(name, arguments)
            try:
                result = render_outcome(outcome)
            except McpError as e:
                return _error(request_id, e.error.code, e.error.message)

            return _result(request_id, result.model_dump(mode="json", by_alias=True, exclude_none=True))

        # --- unknown method ---
        else:
            return _error(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")

    return app


def main() -> None:
    load_dotenv()

    try:
        settings = Settings.from_env()
        configure_logging(settings)
        app = create_app(settings)
    except ConfigurationError as e:
        configure_logging(Settings())
        logger.error(str(e))
        sys.exit(1)

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8004"))
    logger.info(f"GetMailer MCP HTTP server on {host}:{port} | api={settings.api_url}")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
