"""Core business logic — models, catalog, API client, windowing and view state.

This module is framework-agnostic. It has no dependency on MCP, FastMCP,
or any UI toolkit; the server is one consumer of it.
"""
