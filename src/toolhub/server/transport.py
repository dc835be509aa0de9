"""
STDIO Transport — newline-delimited JSON-RPC over stdin/stdout

Reads from stdin, writes to stdout.
NEVER pollutes stdout with logs.
"""

import sys
import json
import asyncio
from typing import Any, BinaryIO, Dict, Optional, Tuple

from toolhub.server.logger import get_logger
from toolhub.server.protocol import ProtocolError, PARSE_ERROR, INVALID_REQUEST

log = get_logger("transport")

# Longest accepted line, newline included
MAX_LINE_BYTES = 2**20


class StdioTransport:
    """Line-framed JSON-RPC transport on the process's stdio."""

    def __init__(
        self,
        reader: Optional[asyncio.StreamReader] = None,
        writer: Optional[BinaryIO] = None,
    ):
        self.running = False
        self._reader = reader
        self._stdout = writer

    async def start(self):
        """Initialize async stdin reader and direct stdout writer."""
        if self._reader is None:
            loop = asyncio.get_running_loop()
            self._reader = asyncio.StreamReader(limit=MAX_LINE_BYTES)
            protocol = asyncio.StreamReaderProtocol(self._reader)
            await loop.connect_read_pipe(lambda: protocol, sys.stdin.buffer)

        if self._stdout is None:
            self._stdout = sys.stdout.buffer
        self.running = True
        log.info("Transport initialized")

    async def read_message(self) -> Optional[Tuple[bytes, Dict[str, Any]]]:
        """
        Read one JSON-RPC message from stdin.
        Returns (raw_bytes, parsed) or None on EOF.
        Raises ProtocolError(PARSE_ERROR) for a line that is not JSON and
        ProtocolError(INVALID_REQUEST) for one over the reader's limit, whose
        buffered bytes the reader discards.
        """
        if not self._reader:
            raise RuntimeError("Transport not started")

        while True:
            try:
                raw_bytes = await self._reader.readline()
            except ValueError as exc:
                log.error(f"Oversized message dropped: {exc}")
                raise ProtocolError(INVALID_REQUEST, "Message too large")
            if not raw_bytes:
                return None
            if raw_bytes.strip():
                break

        try:
            parsed = json.loads(raw_bytes)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log.error(f"JSON parse error: {exc}")
            raise ProtocolError(PARSE_ERROR, f"Parse error: {exc}")

        return raw_bytes, parsed

    async def write_message(self, message: Dict[str, Any]):
        """Write a JSON-RPC message to stdout."""
        if self._stdout is None:
            raise RuntimeError("Transport not started")

        raw_text = json.dumps(message, separators=(",", ":"), ensure_ascii=False) + "\n"
        self._stdout.write(raw_text.encode("utf-8"))
        self._stdout.flush()

    async def close(self):
        self.running = False
        log.info("Transport closed")
