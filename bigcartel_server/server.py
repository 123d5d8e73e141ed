"""MCP server for Big Cartel — tool registration."""

from __future__ import annotations

from fastmcp import FastMCP

from .resources import accounts, categories
from .utils.logging import setup_logging

setup_logging()


def create_mcp_server(auth=None):
    """Create and configure the FastMCP server with all tools.

    Args:
        auth: Optional auth provider handed to FastMCP for the HTTP transport
    """
    mcp = FastMCP("mcp-bigcartel", auth=auth)

    # -- Tools: accounts ----------------------------------------------------
    mcp.tool()(accounts.bigcartel_account)

    # -- Tools: categories --------------------------------------------------
    mcp.tool()(categories.bigcartel_categories)
    mcp.tool()(categories.bigcartel_get_category)
    mcp.tool()(categories.bigcartel_create_category)

    return mcp


# Default server instance for stdio transport
server = create_mcp_server()
