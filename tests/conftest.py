"""Shared fixtures for toolhub tests."""

import os
import pytest
import httpx


@pytest.fixture(autouse=True)
def tmp_toolhub_dir(tmp_path):
    """Set TOOLHUB_DATA_DIR to a temp directory for isolated tests."""
    toolhub_dir = tmp_path / ".toolhub"
    toolhub_dir.mkdir()
    (toolhub_dir / "logs").mkdir()
    os.environ["TOOLHUB_DATA_DIR"] = str(toolhub_dir)

    # Point the already-imported config at the new directory
    from toolhub import config
    saved = {
        name: getattr(config.Config, name)
        for name in ("TOOLHUB_DIR", "LOG_DIR", "LOG_FILE", "ERROR_LOG", "HF_TOKEN_FILE")
    }
    config.Config.TOOLHUB_DIR = toolhub_dir
    config.Config.LOG_DIR = toolhub_dir / "logs"
    config.Config.LOG_FILE = toolhub_dir / "logs" / "toolhub.log"
    config.Config.ERROR_LOG = toolhub_dir / "logs" / "toolhub-errors.log"
    config.Config.HF_TOKEN_FILE = toolhub_dir / "huggingface_token"

    from toolhub.server.logger import configure_logging
    configure_logging()

    yield toolhub_dir

    # Cleanup
    for name, value in saved.items():
        setattr(config.Config, name, value)
    os.environ.pop("TOOLHUB_DATA_DIR", None)


def no_network(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected HTTP call: {request.method} {request.url}")


@pytest.fixture
def make_ctx():
    """
    Build a ServerContext with the full catalog registered and outbound HTTP
    served by `handler` (an httpx.MockTransport callback). Pass
    register=False for a bare context, e.g. one handed to build_server().
    """
    from toolhub.core.context import ServerContext
    from toolhub.prompts import PROMPTS
    from toolhub.resources import RESOURCES
    from toolhub.tools import ALL_TOOLS

    def _make(handler=no_network, hf_token="", register=True):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        ctx = ServerContext(http=client, hf_token=hf_token)
        if register:
            ctx.tools.register_all(ALL_TOOLS)
            ctx.resources.register_all(RESOURCES)
            ctx.prompts.register_all(PROMPTS)
        return ctx

    return _make


@pytest.fixture
def dispatcher(make_ctx):
    from toolhub.core.dispatcher import Dispatcher
    return Dispatcher(make_ctx())
