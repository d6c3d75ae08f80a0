"""MCP server exposing the dato-hugo export as a tool."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from mcp.server.fastmcp import FastMCP

from .config import ExportConfig
from .exporter import run_export

logger = logging.getLogger("dato_hugo.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="dato-hugo")


@mcp.tool()
def export(root: str, locale: str | None = None) -> List[str]:
    """Export DatoCMS content into the Hugo project at ``root``; returns the written paths."""

    target = Path(root).expanduser()
    if not target.is_dir():
        raise FileNotFoundError(f"Hugo project directory does not exist: {target}")

    config = ExportConfig.from_env(target.resolve(), locale=locale)
    report = run_export(config)
    return [str(path) for path in report.written]


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
