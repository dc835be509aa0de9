"""
ServerContext — process-wide state, built once at startup

Holds the three registries, the shared HTTP client and the loaded
credential. It is passed explicitly to the Dispatcher and to every handler.
"""

import time
from typing import Optional, Type

import httpx

from toolhub.config import Config
from toolhub.core.registry import PromptDescriptor, Registry, ResourceDescriptor, ToolDescriptor


class ServerContext:
    def __init__(
        self,
        config: Type[Config] = Config,
        http: Optional[httpx.AsyncClient] = None,
        hf_token: Optional[str] = None,
    ):
        self.config = config
        self.tools: Registry[ToolDescriptor] = Registry("Tool")
        self.resources: Registry[ResourceDescriptor] = Registry("Resource")
        self.prompts: Registry[PromptDescriptor] = Registry("Prompt")
        self.http = http or httpx.AsyncClient(
            timeout=config.HTTP_TIMEOUT,
            headers={"User-Agent": config.USER_AGENT},
        )
        self.hf_token = config.load_hf_token() if hf_token is None else hf_token
        self.started_at = time.monotonic()

    @property
    def uptime(self) -> float:
        return time.monotonic() - self.started_at

    async def aclose(self):
        await self.http.aclose()
