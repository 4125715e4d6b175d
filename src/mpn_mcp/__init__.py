"""MPN MCP - manufacturer part number classification."""

__version__ = "0.1.0"
