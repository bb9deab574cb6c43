"""
API Routes Package
"""

from pxweb_mcp.api.routes.health import HEALTH_PATH, HealthEndpoint, health_route

__all__ = ["HEALTH_PATH", "HealthEndpoint", "health_route"]
