 # main.py
 # - ChatGPT handoff MCP server
 # - Default transport: JSON-RPC lines on stdin/stdout
 # - --http: FastAPI app with a single JSON-RPC endpoint (/mcp) plus /health

import sys
import logging
from typing import List, Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from chatgpt_handoff.config import Config, load_config
from chatgpt_handoff.desktop import detect_desktop
from chatgpt_handoff.handoff import HandoffService
from chatgpt_handoff.rpc import Dispatcher
from chatgpt_handoff.stdio import serve_stdio

logger = logging.getLogger("mcp")

# CORS: wide open (local tool, browser-based MCP inspectors)
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def build_dispatcher(config: Config) -> Dispatcher:
    """Composition root: desktop adapter for this OS -> handoff service -> dispatcher."""
    desktop = detect_desktop()
    logger.debug(f"desktop adapter: {desktop.name}")
    return Dispatcher(config, HandoffService(desktop))


def create_app(config: Config, dispatcher: Dispatcher) -> FastAPI:
    app = FastAPI(title=config.server_name, version=config.server_version)

    @app.api_route("/health", methods=ALL_METHODS)
    def health():
        return PlainTextResponse("OK")

    @app.options("/mcp")
    def mcp_preflight():
        return Response(status_code=200, headers=CORS_HEADERS)

    @app.api_route("/mcp", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"])
    def mcp_method_not_allowed():
        return PlainTextResponse("Method not allowed", status_code=405, headers=CORS_HEADERS)

    @app.post("/mcp")
    async def mcp_entry(request: Request):
        """
        Single JSON-RPC endpoint: one request per body, one reply per response
        """
        raw = await request.body()
        # blocking subprocess work stays off the event loop
        reply = await run_in_threadpool(dispatcher.handle_raw, raw)
        if reply.shutdown:
            logger.info("shutdown acknowledged; HTTP server keeps running")
        # Notifications get an empty JSON 200 so clients don't warn on 204
        return JSONResponse(reply.body if reply.body is not None else {}, headers=CORS_HEADERS)

    return app


def serve_http(config: Config, dispatcher: Dispatcher) -> None:
    import uvicorn

    logger.info(f"Starting MCP server on {config.host}:{config.port}")
    uvicorn.run(create_app(config, dispatcher), host=config.host, port=config.port, log_level=config.log_level.lower())


def main(argv: Optional[List[str]] = None) -> int:
    config = load_config(argv)
    # stderr only: stdout carries protocol messages in stdio mode
    logging.basicConfig(level=getattr(logging, config.log_level), stream=sys.stderr)
    dispatcher = build_dispatcher(config)
    if config.http_mode:
        serve_http(config, dispatcher)
        return 0
    print("[MCP STDIO mode] Ready for JSON-RPC requests via stdin.", file=sys.stderr)
    serve_stdio(dispatcher, sys.stdin.buffer, sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
