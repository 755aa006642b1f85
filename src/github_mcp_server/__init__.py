"""GitHub MCP Server.

A Model Context Protocol server that exposes a fixed set of read-only GitHub
operations (profile, repositories, issues, pull requests, file contents,
search, commits) as tools, plus two read-only resources.

Run with: python -m github_mcp_server
"""

__version__ = "1.0.0"
