"""
Sequential thinking engine and MCP server.

Records reasoning steps, including revisions and branches, and reports
progress back to the caller.
"""

__version__ = "0.1.0"
