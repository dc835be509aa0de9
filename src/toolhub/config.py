"""
toolhub Configuration — Unified settings for the MCP server

Load order: env vars > ~/.toolhub/config.env > defaults
"""

import os
from pathlib import Path


def _load_config_env():
    """Load key=value pairs from ~/.toolhub/config.env if it exists."""
    config_file = Path.home() / ".toolhub" / "config.env"
    if not config_file.exists():
        return
    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


# Load config.env before reading env vars
_load_config_env()


class Config:
    # Server identity
    SERVER_NAME = "toolhub"
    SERVER_VERSION = "1.0.0"
    SERVER_DESCRIPTION = "MCP server - utility tools, resources and prompts"
    PROTOCOL_VERSION = "2025-06-18"

    # Paths
    TOOLHUB_DIR = Path(os.environ.get("TOOLHUB_DATA_DIR", str(Path.home() / ".toolhub")))
    LOG_DIR = TOOLHUB_DIR / "logs"
    HF_TOKEN_FILE = TOOLHUB_DIR / "huggingface_token"

    # Logging goes to files only; stdout carries the MCP stream
    LOG_LEVEL = os.environ.get("TOOLHUB_LOG_LEVEL", "INFO")
    LOG_FILE = LOG_DIR / "toolhub.log"
    ERROR_LOG = LOG_DIR / "toolhub-errors.log"

    # Outbound HTTP
    HTTP_TIMEOUT = float(os.environ.get("TOOLHUB_HTTP_TIMEOUT", "30"))
    USER_AGENT = os.environ.get("TOOLHUB_USER_AGENT", f"MCP-Server/{SERVER_VERSION}")

    # External services
    NOMINATIM_URL = os.environ.get(
        "TOOLHUB_NOMINATIM_URL", "https://nominatim.openstreetmap.org/search"
    )
    OPEN_METEO_URL = os.environ.get(
        "TOOLHUB_OPEN_METEO_URL", "https://api.open-meteo.com/v1/forecast"
    )
    HF_MODEL = os.environ.get("TOOLHUB_HF_MODEL", "black-forest-labs/FLUX.1-schnell")
    HF_URL = os.environ.get(
        "TOOLHUB_HF_URL", "https://router.huggingface.co/hf-inference/models"
    )

    @classmethod
    def ensure_dirs(cls):
        """Create required directories."""
        cls.TOOLHUB_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def load_hf_token(cls) -> str:
        """HF_TOKEN env var first, then the token file, else empty."""
        token = os.environ.get("HF_TOKEN", "").strip()
        if token:
            return token
        try:
            return cls.HF_TOKEN_FILE.read_text(encoding="utf-8").strip()
        except OSError:
            return ""
