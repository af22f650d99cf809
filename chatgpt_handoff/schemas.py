from __future__ import annotations
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, StrictStr

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
SERVER_ERROR = -32000


class JsonRpcRequest(BaseModel):
    jsonrpc: str = Field(default=JSONRPC_VERSION)
    method: StrictStr
    id: Optional[Any] = None
    params: Optional[Dict[str, Any]] = None


class ToolDef(BaseModel):
    name: str
    description: Optional[str] = None
    inputSchema: Dict[str, Any] = Field(description="JSON Schema for input")


class ToolCallParams(BaseModel):
    name: StrictStr
    arguments: Optional[Dict[str, Any]] = None


class HandoffArguments(BaseModel):
    model_config = ConfigDict(extra="forbid")

    prompt: StrictStr = ""


class JsonRpcErrorObj(BaseModel):
    code: int
    message: str


class JsonRpcSuccess(BaseModel):
    jsonrpc: str = Field(default=JSONRPC_VERSION, description="JSON-RPC version")
    id: Optional[Any] = Field(default=None, description="Request id (string/number/null)")
    result: Dict[str, Any] = Field(description="JSON-RPC success result")


class JsonRpcError(BaseModel):
    jsonrpc: str = Field(default=JSONRPC_VERSION, description="JSON-RPC version")
    id: Optional[Any] = Field(default=None, description="Request id (string/number/null)")
    error: JsonRpcErrorObj = Field(description="JSON-RPC error object")

