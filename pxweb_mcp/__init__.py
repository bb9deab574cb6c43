"""
PxWeb MCP - Model Context Protocol server for PxWeb v2 statistics APIs.
"""

__version__ = "1.0.0"
