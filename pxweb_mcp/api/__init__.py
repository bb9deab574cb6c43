"""
API Package - HTTP surface: MCP endpoint, health route and middleware.
"""
