# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Process entry point.

Loads ``.env`` before any module reads the environment, then configures
logging and starts the MCP server.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from dotenv import load_dotenv


load_dotenv()

from linear_gql.config import Settings  # noqa: E402
import server  # noqa: E402


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,  # stdout carries protocol traffic
    )


def run() -> None:
    """Console-script entry point."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    asyncio.run(server.main(settings))


if __name__ == "__main__":
    run()
