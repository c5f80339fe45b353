"""
MCP Server module for formgen.

Provides Model Context Protocol server implementation
with stdio and SSE transport support.
"""

from formgen.mcp_server.server import create_mcp_server, create_sse_app, run_mcp_server
from formgen.mcp_server.tools import call_mcp_tool, get_mcp_tools

__all__ = [
    "call_mcp_tool",
    "create_mcp_server",
    "create_sse_app",
    "run_mcp_server",
    "get_mcp_tools",
]
