"""MCP server for the Hevy workout tracker."""

__version__ = "0.1.0"
