 # rpc.py
 # - JSON-RPC 2.0 dispatch shared by the stdio and HTTP transports
 # - Methods: initialize, tools/list, tools/call, shutdown
 # - Transports only frame/deframe; every reply is built here

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from chatgpt_handoff.config import Config
from chatgpt_handoff.handoff import HandoffService
from chatgpt_handoff.schemas import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    SERVER_ERROR,
    JsonRpcError,
    JsonRpcErrorObj,
    JsonRpcRequest,
    JsonRpcSuccess,
    ToolCallParams,
)
from chatgpt_handoff.tools import InvalidToolArguments, UnknownToolError, call_tool, list_tools

logger = logging.getLogger("mcp")


@dataclass(frozen=True)
class RpcReply:
    # body is None for notifications: nothing goes back on the wire
    body: Optional[Dict[str, Any]]
    shutdown: bool = False


def _jsonrpc_ok(id_val: Any, result: Dict[str, Any], *, shutdown: bool = False) -> RpcReply:
    return RpcReply(JsonRpcSuccess(id=id_val, result=result).model_dump(), shutdown=shutdown)


def _jsonrpc_err(id_val: Any, code: int, message: str) -> RpcReply:
    env = JsonRpcError(id=id_val, error=JsonRpcErrorObj(code=code, message=message))
    return RpcReply(env.model_dump())


class Dispatcher:
    def __init__(self, config: Config, service: HandoffService):
        self.config = config
        self.service = service

    def capabilities(self) -> Dict[str, Any]:
        return {"tools": {"listChanged": False}}

    def handle_raw(self, raw: Union[str, bytes]) -> RpcReply:
        """Decode one framed message and dispatch it."""
        try:
            payload = json.loads(raw)
        except (ValueError, UnicodeDecodeError, RecursionError):
            return _jsonrpc_err(None, PARSE_ERROR, "Parse error")
        return self.handle(payload)

    def handle(self, payload: Any) -> RpcReply:
        if isinstance(payload, list):
            return _jsonrpc_err(None, INVALID_REQUEST, "Batch not supported")
        try:
            req = JsonRpcRequest.model_validate(payload)
        except ValidationError:
            id_val = payload.get("id") if isinstance(payload, dict) else None
            return _jsonrpc_err(id_val, INVALID_REQUEST, "Invalid Request")
        if req.jsonrpc != JSONRPC_VERSION:
            return _jsonrpc_err(req.id, INVALID_REQUEST, "Invalid jsonrpc version")

        method = req.method
        params = req.params or {}

        # JSON-RPC notifications (no id key): no reply; an explicit null id gets one
        if method.startswith("notifications/"):
            logger.debug(f"notification method={method}")
            if "id" not in req.model_fields_set:
                return RpcReply(None)
            return _jsonrpc_ok(req.id, {})

        if method == "initialize":
            # requested version is not negotiated; we always answer with ours
            client = params.get("clientInfo")
            client_name = client.get("name", "-") if isinstance(client, dict) else "-"
            logger.info(f"initialize client={client_name} requested={params.get('protocolVersion', '-')}")
            return _jsonrpc_ok(req.id, {
                "protocolVersion": self.config.protocol_version,
                "serverInfo": {"name": self.config.server_name, "version": self.config.server_version},
                "capabilities": self.capabilities(),
            })

        if method == "tools/list":
            return _jsonrpc_ok(req.id, {"tools": list_tools()})

        if method == "tools/call":
            return self._tools_call(req.id, params)

        if method == "shutdown":
            logger.info("shutdown requested")
            return _jsonrpc_ok(req.id, {}, shutdown=True)

        logger.info(f"method not found method={method}")
        return _jsonrpc_err(req.id, METHOD_NOT_FOUND, "Method not found")

    def _tools_call(self, id_val: Any, params: Dict[str, Any]) -> RpcReply:
        try:
            call = ToolCallParams.model_validate(params)
        except ValidationError:
            return _jsonrpc_err(id_val, INVALID_PARAMS, "Invalid params")
        try:
            result = call_tool(self.service, call.name, call.arguments)
        except UnknownToolError:
            return _jsonrpc_err(id_val, METHOD_NOT_FOUND, "Method not found")
        except InvalidToolArguments as te:
            return _jsonrpc_err(id_val, INVALID_PARAMS, f"Invalid params: {te}")
        except Exception as e:
            logger.exception("server error on tools/call")
            return _jsonrpc_err(id_val, SERVER_ERROR, f"Server error: {e}")
        return _jsonrpc_ok(id_val, result)
