"""MCP server for indexing and navigating Forge models."""

__version__ = "0.1.0"
