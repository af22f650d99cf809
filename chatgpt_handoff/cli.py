#!/usr/bin/env python3
"""
Simple CLI to call a ChatGPT handoff server running in HTTP mode.
Usage examples:
    python -m chatgpt_handoff.cli health
    python -m chatgpt_handoff.cli tools
    python -m chatgpt_handoff.cli handoff --prompt "Research X"
    echo "Debug this stack trace ..." | python -m chatgpt_handoff.cli handoff --from-stdin
Environment:
  MCP_URL (default: http://localhost:${PORT or 8080})
"""
import os
import sys
import json
import argparse
import itertools
from typing import Any, Dict, Optional

import httpx

_ids = itertools.count(1)


def _base_url() -> str:
    url = os.getenv("MCP_URL")
    if url:
        return url.rstrip("/")
    port = os.getenv("PORT", "8080")
    return f"http://localhost:{port}"


def _rpc(method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"jsonrpc": "2.0", "id": next(_ids), "method": method}
    if params is not None:
        payload["params"] = params
    with httpx.Client(timeout=20) as c:
        r = c.post(_base_url() + "/mcp", json=payload)
        r.raise_for_status()
        return r.json()


def _print(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _is_failure(reply: Dict[str, Any]) -> bool:
    if "error" in reply and reply["error"] is not None:
        return True
    return bool((reply.get("result") or {}).get("isError"))


def cmd_health(args: argparse.Namespace) -> int:
    with httpx.Client(timeout=20) as c:
        r = c.get(_base_url() + "/health")
    print(r.text)
    return 0 if r.status_code == 200 else 1


def cmd_tools(args: argparse.Namespace) -> int:
    reply = _rpc("tools/list")
    _print(reply)
    return 1 if _is_failure(reply) else 0


def cmd_handoff(args: argparse.Namespace) -> int:
    prompt = args.prompt
    if args.from_stdin:
        prompt = sys.stdin.read()
    if prompt is None:
        raise SystemExit("Provide --prompt '<TEXT>' or --from-stdin")
    reply = _rpc("tools/call", {"name": "handoff_to_chatgpt", "arguments": {"prompt": prompt}})
    _print(reply)
    return 1 if _is_failure(reply) else 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="chatgpt-handoff-cli", description="ChatGPT handoff server CLI")
    sub = p.add_subparsers(dest="cmd")

    p_health = sub.add_parser("health", help="Check /health")
    p_health.set_defaults(func=cmd_health)

    p_tools = sub.add_parser("tools", help="List tools (tools/list)")
    p_tools.set_defaults(func=cmd_tools)

    p_handoff = sub.add_parser("handoff", help="Hand a prompt to ChatGPT (tools/call)")
    p_handoff.add_argument("--prompt", required=False)
    p_handoff.add_argument("--from-stdin", action="store_true", help="Read the prompt from stdin")
    p_handoff.set_defaults(func=cmd_handoff)

    args = p.parse_args(argv)
    if not getattr(args, "func", None):
        p.print_help()
        return 2
    try:
        return args.func(args)
    except httpx.HTTPError as e:
        print(f"request failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
