"""
数据验证模式目录
"""

from .response import success, listing

__all__ = [
    # 响应
    "success", "listing"
]
