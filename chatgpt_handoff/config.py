import os
import argparse
from dataclasses import dataclass, replace
from typing import List, Optional
from dotenv import load_dotenv

# Load .env if present (host/dev convenience)
load_dotenv()


def _get_env_bool(key: str, default: bool = False) -> bool:
    val = os.getenv(key)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _get_env_log_level(key: str, default: str) -> str:
    level = os.getenv(key, default).strip().upper()
    return level if level in _LOG_LEVELS else default


def _get_env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Config:
    # server
    server_name: str = "chatgpt-handoff"
    server_version: str = "0.1.0"
    protocol_version: str = "2025-06-18"
    log_level: str = "INFO"

    # transport
    http_mode: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            server_name=os.getenv("SERVER_NAME", cls.server_name),
            server_version=os.getenv("SERVER_VERSION", cls.server_version),
            protocol_version=os.getenv("MCP_PROTOCOL_REV", cls.protocol_version),
            log_level=_get_env_log_level("LOG_LEVEL", cls.log_level),
            http_mode=_get_env_bool("HTTP_MODE", cls.http_mode),
            host=os.getenv("HOST", cls.host),
            port=_get_env_int("PORT", cls.port),
        )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="chatgpt-handoff", description="ChatGPT handoff MCP server")
    p.add_argument("--http", action="store_true", help="Serve JSON-RPC over HTTP instead of stdin/stdout")
    p.add_argument("--port", type=int, default=None, help="HTTP port (only used with --http, default 8080)")
    return p


def load_config(argv: Optional[List[str]] = None) -> Config:
    """Build the process configuration once: environment first, then command-line flags."""
    args = build_parser().parse_args(argv)
    base = Config.from_env()
    return replace(
        base,
        http_mode=base.http_mode or args.http,
        port=args.port if args.port is not None else base.port,
    )
