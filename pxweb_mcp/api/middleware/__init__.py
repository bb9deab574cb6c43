"""
API Middleware Package
"""

from pxweb_mcp.api.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
