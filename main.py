"""
Entry point for running the YouTube transcript MCP server.

To start the server, run this module directly. It configures logging
and calls ``run()`` on the shared server instance from ``server.py``.
When running via Claude for Desktop, your configuration should specify
something akin to::

    "command": "python",
    "args": ["main.py"]

or, once the project is installed, ``"command": "youtube-transcript-mcp"``.
The server blocks until it is terminated by the client.
"""

from __future__ import annotations

import logging
import sys

from yt_transcript import config

# Import the shared MCP server instance.  Use an absolute import so
# that the module can be executed directly (``python main.py``) or via
# uv (``uv run main.py``) without relying on package-relative imports.
from server import mcp  # type: ignore


def main() -> None:
    # stdout carries the MCP stdio protocol, so logs go to stderr
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    mcp.run()


if __name__ == "__main__":
    main()
