"""
MCP Server — Main Orchestrator

Ties together:
  Transport -> Protocol -> Router -> Dispatcher

Flow:
  1. Transport reads one line from stdin
  2. Protocol validates JSON-RPC 2.0
  3. Router hands the call to the Dispatcher
  4. Dispatcher validates, runs the handler and builds the envelope
  5. Transport writes the response to stdout

Each request runs in its own task, so a slow external call never holds up
the next request. Registration must finish before run().
"""

import asyncio
import signal
from typing import List, Optional, Set

from toolhub.config import Config
from toolhub.core.context import ServerContext
from toolhub.core.registry import PromptDescriptor, ResourceDescriptor, ToolDescriptor
from toolhub.server.logger import get_logger
from toolhub.server.transport import StdioTransport
from toolhub.server.protocol import (
    validate_message,
    make_response,
    make_error,
    ProtocolError,
    INTERNAL_ERROR,
)
from toolhub.server.router import Router

log = get_logger("server")


class ToolhubServer:
    """
    Main server orchestrator.

    Usage:
        server = ToolhubServer()
        server.register_tools(ALL_TOOLS)
        await server.run()
    """

    def __init__(
        self,
        ctx: Optional[ServerContext] = None,
        transport: Optional[StdioTransport] = None,
    ):
        Config.ensure_dirs()

        self.ctx = ctx or ServerContext()
        self._transport = transport or StdioTransport()
        self._router = Router(self.ctx)
        self._pending: Set[asyncio.Task] = set()
        self._running = False

    # -- tool/resource/prompt registration (call before run) --

    def register_tools(self, tools: List[ToolDescriptor]):
        """Register tools. A duplicate name raises ConfigurationError."""
        self.ctx.tools.register_all(tools)
        log.info(f"Registered {len(tools)} tools: {[t.name for t in tools]}")

    def register_resources(self, resources: List[ResourceDescriptor]):
        self.ctx.resources.register_all(resources)
        log.info(f"Registered {len(resources)} resources")

    def register_prompts(self, prompts: List[PromptDescriptor]):
        self.ctx.prompts.register_all(prompts)
        log.info(f"Registered {len(prompts)} prompts")

    @property
    def router(self) -> Router:
        return self._router

    # -- main loop --

    async def run(self):
        """Start the server and process messages until EOF or signal."""
        log.info(f"Starting {Config.SERVER_NAME} v{Config.SERVER_VERSION}")

        await self._transport.start()

        main_task = asyncio.current_task()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, main_task.cancel)
            except (NotImplementedError, RuntimeError):
                pass

        self._running = True
        log.info(
            f"Server ready — tools={len(self.ctx.tools)} "
            f"resources={len(self.ctx.resources)} prompts={len(self.ctx.prompts)}"
        )

        try:
            while self._running:
                try:
                    result = await self._transport.read_message()
                except ProtocolError as exc:
                    await self._transport.write_message(make_error(None, exc.code, exc.message))
                    continue

                if result is None:
                    log.info("EOF on stdin — shutting down")
                    break

                _, parsed = result
                task = asyncio.create_task(self._handle_message(parsed))
                self._pending.add(task)
                task.add_done_callback(self._pending.discard)

            if self._pending:
                await asyncio.gather(*self._pending, return_exceptions=True)

        except asyncio.CancelledError:
            log.info("Server cancelled")
        except Exception as exc:
            log.error(f"Server error: {exc}", exc_info=True)
        finally:
            await self.shutdown()

    async def _handle_message(self, msg):
        """Process a single JSON-RPC message through the full pipeline."""
        request_id = msg.get("id") if isinstance(msg, dict) else None

        try:
            msg_type = validate_message(msg)
            result = await self._router.route(msg_type, msg)

            if result is None:
                return

            await self._transport.write_message(make_response(request_id, result))

        except ProtocolError as exc:
            log.warning(f"Protocol error: {exc.message} (code={exc.code})")
            await self._transport.write_message(
                make_error(request_id, exc.code, exc.message, exc.data)
            )

        except Exception as exc:
            log.error(f"Unhandled error: {exc}", exc_info=True)
            if request_id is not None:
                await self._transport.write_message(
                    make_error(request_id, INTERNAL_ERROR, "Internal error")
                )

    async def shutdown(self):
        """Graceful shutdown — close transport and HTTP client."""
        if not self._running:
            return
        self._running = False

        for task in list(self._pending):
            task.cancel()

        await self._transport.close()
        await self.ctx.aclose()
        log.info("Server stopped")
