"""Core business logic: validation, request builders, API clients, normalizers, and data models.

This module is framework-agnostic. It has no dependency on MCP or FastMCP;
the servers in the parent package wrap these functions as tools.
"""
