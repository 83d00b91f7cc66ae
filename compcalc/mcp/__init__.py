"""Comp Calc MCP server (install with the 'mcp' extra)."""
