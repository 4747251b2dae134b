"""
统一响应格式
API返回的标准JSON结构
"""

from typing import Any, List


def success(data: Any = None, message: str = "success") -> dict:
    """成功响应"""
    return {
        "success": True,
        "code": 200,
        "message": message,
        "data": data
    }


def listing(items: List, message: str = "success") -> dict:
    """列表响应，total 为本次返回的条数"""
    return success({"items": items, "total": len(items)}, message)
