"""
工具函数目录
按功能分类组织
"""

from .timezone import utc_now, ensure_utc

__all__ = [
    # 时间处理
    "utc_now",
    "ensure_utc",
]
