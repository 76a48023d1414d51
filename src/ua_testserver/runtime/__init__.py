"""
Concrete ServerRuntime implementations.
"""

__all__ = ["mcp_runtime"]
