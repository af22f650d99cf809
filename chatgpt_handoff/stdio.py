import json
import logging
from typing import BinaryIO, TextIO, Union

from chatgpt_handoff.rpc import Dispatcher

logger = logging.getLogger("mcp")


def serve_stdio(dispatcher: Dispatcher, stdin: Union[BinaryIO, TextIO], stdout: TextIO) -> None:
    """Line-oriented JSON-RPC loop: one request per line, one reply line per request.

    stdin is read as bytes in production (sys.stdin.buffer) so undecodable
    input becomes a parse error instead of a read failure. Returns on end of
    input, on a read failure, or after acknowledging shutdown.
    """
    while True:
        try:
            line = stdin.readline()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"read: {e}")
            return
        if not line:
            return
        line = line.strip()
        if not line:
            continue
        reply = dispatcher.handle_raw(line)
        if reply.body is not None:
            stdout.write(json.dumps(reply.body) + "\n")
            stdout.flush()
        if reply.shutdown:
            return
