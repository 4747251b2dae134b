"""
路由目录
"""

from . import health

__all__ = ["health"]
