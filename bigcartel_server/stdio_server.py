"""Stdio transport server for local MCP clients.

Usage:
    python -m bigcartel_server.stdio_server

Environment Variables (required):
    BIGCARTEL_USER_AGENT - User-Agent sent to the Big Cartel API
    BIGCARTEL_BASIC_AUTH - Base64 "account:password" credential

Environment Variables (optional):
    BIGCARTEL_ACCOUNT_ID - Default account for category tools
    BIGCARTEL_BASE_URL - API base URL (defaults to production v1)
    BIGCARTEL_TIMEOUT - Request timeout in seconds (default: 60)
    MCP_LOG_LEVEL - Logging level (default: INFO)
    MCP_LOG_FILE - Log file path with rotation
"""

from .server import server


def main():
    """Run the MCP server using stdio transport.

    Reuses the FastMCP instance from server.py so stdio and HTTP expose
    identical tools.
    """
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
