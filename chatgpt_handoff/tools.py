 # tools.py
 # - MCP tool meta/executor definition
 # - HANDOFF_TOOL: name, description, inputSchema
 # - list_tools: returns tool list (tools/list)
 # - call_tool: validates arguments, executes tool and wraps the result (tools/call)

import logging
from typing import Dict, Any, List, Optional

from pydantic import ValidationError

from chatgpt_handoff.handoff import HandoffError, HandoffService
from chatgpt_handoff.schemas import HandoffArguments, ToolDef

logger = logging.getLogger("tools")

TOOLNAME_HANDOFF_TO_CHATGPT = "handoff_to_chatgpt"

HANDOFF_DESCRIPTION = (
    "Hand off a research or debugging prompt to ChatGPT. Write detailed, specific prompts "
    "that include all necessary context. After calling this tool, you should stop and wait "
    "for the user to relay ChatGPT's response back to you.\n\n"
    "Example uses:\n"
    "1. Research: \"Research the latest developments in WebAssembly performance optimizations, "
    "focusing on 2024-2025 improvements and real-world benchmarks\"\n"
    "2. Debugging: \"Debug this Go memory leak issue: [include relevant code snippets, error "
    "messages, and context about when the issue occurs]\""
)

HANDOFF_TOOL = ToolDef(
    name=TOOLNAME_HANDOFF_TO_CHATGPT,
    description=HANDOFF_DESCRIPTION,
    inputSchema={
        "type": "object",
        "properties": {
            "prompt": {
                "type": "string",
                "minLength": 1,
                "description": "The prompt to send to ChatGPT",
            },
        },
        "required": ["prompt"],
        "additionalProperties": False,
    },
)

TOOLS: List[ToolDef] = [HANDOFF_TOOL]
TOOLS_BY_NAME: Dict[str, ToolDef] = {t.name: t for t in TOOLS}


class UnknownToolError(LookupError):
    pass


class InvalidToolArguments(TypeError):
    pass


def _text_result(text: str, *, is_error: bool = False) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": text}], "isError": is_error}


def list_tools() -> List[Dict[str, Any]]:
    """Return tool list (tools/list)"""
    return [t.model_dump() for t in TOOLS]


def call_tool(service: HandoffService, name: str, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Execute tool and return result (tools/call).

    Raises UnknownToolError for unregistered names and InvalidToolArguments when the
    arguments do not have the tool's shape. Handoff failures are returned
    as an isError result.
    """
    if name not in TOOLS_BY_NAME:
        raise UnknownToolError(name)
    try:
        args = HandoffArguments.model_validate(arguments or {})
    except ValidationError as e:
        raise InvalidToolArguments(f"bad input: {e.errors()[0]['msg']}") from e

    logger.info(f"tool.start name={name} prompt_len={len(args.prompt)}")
    try:
        outcome = service.handoff(args.prompt)
    except HandoffError as e:
        logger.info(f"tool.error name={name} reason={e}")
        return _text_result(str(e), is_error=True)
    logger.info(f"tool.finish name={name} browser_attempted={outcome.browser_attempted}")
    return _text_result(outcome.message)
