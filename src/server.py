# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""MCP server entrypoint.

Expose Linear tools via Dedalus MCP framework. Requests go either
straight to the Linear API with a personal key, or through the Dedalus
enclave with OAuth credentials provided by DAuth at runtime.
"""

from __future__ import annotations

import logging

from dedalus_mcp import MCPServer
from dedalus_mcp.server import TransportSecuritySettings

from linear_gql.config import Settings, linear
from linear_gql.errors import AuthError, InvalidInputError
from linear_gql.request import EnclaveTransport, HttpTransport, Transport
from linear_gql.session import Session
from tools import linear_tools


logger = logging.getLogger(__name__)


def _disable_auto_output_schemas(server: MCPServer) -> None:
    # pylint: disable=protected-access
    server.tools._build_output_schema = lambda _fn: None  # type: ignore[assignment]


def create_transport(settings: Settings) -> Transport:
    """Pick the transport named by ``settings.transport``.

    Raises:
        AuthError: ``http`` was requested but no API key was found.
        InvalidInputError: Unknown transport name.

    """
    mode = settings.transport
    if mode == "auto":
        mode = "http" if settings.api_key else "enclave"

    if mode == "http":
        if not settings.api_key:
            raise AuthError()
        logger.info("using direct HTTP transport to %s", settings.api_url)
        return HttpTransport(settings.api_key, settings.api_url, timeout=settings.timeout)
    if mode == "enclave":
        logger.info("using Dedalus enclave transport")
        return EnclaveTransport(linear)
    raise InvalidInputError(
        f"Unknown LINEAR_TRANSPORT '{settings.transport}'. Use auto, http or enclave."
    )


def create_server(settings: Settings) -> MCPServer:
    """Create MCP server with current env config.

    Returns:
        Configured MCPServer instance.

    """
    server = MCPServer(
        name="linear-gql-mcp",
        connections=[linear],
        http_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
        streamable_http_stateless=True,
        authorization_server=settings.authorization_server,
    )
    _disable_auto_output_schemas(server)
    return server


async def main(settings: Settings | None = None) -> None:
    """Start MCP server."""
    settings = settings or Settings.from_env()
    transport = create_transport(settings)
    session = Session.create(transport)
    server = create_server(settings)
    server.collect(*linear_tools(session))
    logger.info("starting linear-gql-mcp on port %d", settings.port)
    try:
        await server.serve(port=settings.port)
    finally:
        if isinstance(transport, HttpTransport):
            await transport.aclose()
