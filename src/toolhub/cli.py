"""
toolhub CLI — Command-line interface for the MCP tool gateway

Commands:
    toolhub init        Create ~/.toolhub/ and generate config
    toolhub server      Start the MCP server (stdio mode)
    toolhub catalog     Print the tool/resource/prompt catalog as JSON
    toolhub mcp-config  Print Claude Desktop/Code JSON config
"""

import asyncio
import json
import sys

import click

from toolhub import __version__
from toolhub.config import Config


@click.group()
@click.version_option(version=__version__, prog_name="toolhub")
def main():
    """toolhub — schema-checked MCP tools over stdio."""
    pass


@main.command()
def init():
    """Initialize toolhub: create ~/.toolhub/, generate config, print setup instructions."""
    Config.ensure_dirs()

    config_env = Config.TOOLHUB_DIR / "config.env"
    if not config_env.exists():
        config_env.write_text(
            "# toolhub Configuration\n"
            "# Uncomment and edit as needed.\n"
            "\n"
            "# TOOLHUB_DATA_DIR=~/.toolhub\n"
            "# TOOLHUB_LOG_LEVEL=INFO\n"
            "# TOOLHUB_HTTP_TIMEOUT=30\n"
            "# HF_TOKEN=hf_...\n"
        )

    click.echo(f"toolhub initialized at {Config.TOOLHUB_DIR}")
    click.echo(f"  Config: {config_env}")
    click.echo(f"  Logs:   {Config.LOG_DIR}")
    click.echo(f"  Token:  {Config.HF_TOKEN_FILE} (optional, for generate_image)")
    click.echo()
    click.echo("Next: add toolhub to your MCP client settings.")
    click.echo("Run `toolhub mcp-config` to get the JSON snippet.")


@main.command()
def server():
    """Start the toolhub MCP server (stdio mode)."""
    from toolhub.app import build_server

    async def _run():
        # Duplicate registrations raise here, before anything is served
        srv = build_server()
        await srv.run()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


@main.command()
def catalog():
    """Print the catalog of registered tools, resources and prompts."""
    from toolhub.app import build_server
    from toolhub.core.catalog import describe

    async def _describe():
        srv = build_server()
        try:
            return describe(srv.ctx)
        finally:
            await srv.ctx.aclose()

    click.echo(json.dumps(asyncio.run(_describe()), indent=2, ensure_ascii=False))


@main.command("mcp-config")
def mcp_config():
    """Print MCP config JSON for Claude Desktop or Claude Code."""
    command, args = _find_toolhub_command()

    config = {
        "mcpServers": {
            "toolhub": {
                "command": command,
                "args": args,
            }
        }
    }

    click.echo("Add this to your MCP client settings:\n")
    click.echo(json.dumps(config, indent=2))
    click.echo()
    click.echo("Claude Desktop: Settings > Developer > Edit Config")
    click.echo("Claude Code:    .claude/settings.json or ~/.claude/settings.json")


def _find_toolhub_command():
    """Find the toolhub command, falling back to `python -m toolhub`."""
    import shutil
    path = shutil.which("toolhub")
    if path:
        return path, ["server"]
    return sys.executable, ["-m", "toolhub", "server"]


if __name__ == "__main__":
    main()
