"""
统一鉴权模块
提供JWT令牌校验和当前用户提取（会话守卫）
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel, ValidationError

from .config import get_settings
from .errors import AuthException, ErrorCode

logger = logging.getLogger(__name__)

# Bearer令牌认证（缺失时交由守卫统一抛出 UNAUTHORIZED）
security = HTTPBearer(auto_error=False)


class TokenData(BaseModel):
    """令牌数据（即请求上下文中的当前用户）"""
    user_id: int
    username: str
    role: str = "user"


def create_token(data: TokenData, expires_delta: Optional[timedelta] = None, token_type: str = "access") -> str:
    """
    创建JWT令牌

    登录流程不在本服务内，此函数供外部签发方与测试使用

    Args:
        data: 令牌数据
        expires_delta: 过期时间增量
        token_type: 令牌类型（access 或 refresh）
    """
    settings = get_settings()
    to_encode = data.model_dump()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expire_minutes)
    expire = datetime.now(timezone.utc) + expires_delta

    to_encode.update({
        "exp": expire,
        "type": token_type  # 标记令牌类型
    })

    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, expected_type: Optional[str] = "access") -> Optional[TokenData]:
    """
    解码JWT令牌

    Args:
        token: 待解码的JWT
        expected_type: 期望的令牌类型，不匹配则返回None
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"令牌解码失败: {e}")
        return None

    if expected_type and payload.get("type") != expected_type:
        logger.debug(f"令牌类型不匹配: {payload.get('type')}")
        return None

    try:
        return TokenData(**payload)
    except ValidationError:
        logger.debug("令牌载荷缺少用户信息")
        return None


def require_user(user: Optional[TokenData]) -> TokenData:
    """会话守卫：上下文中没有用户时拒绝请求"""
    if user is None:
        raise AuthException(ErrorCode.UNAUTHORIZED, "请先登录后再执行此操作")
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenData:
    """获取当前用户（依赖注入用）"""
    token_data = decode_token(credentials.credentials) if credentials else None
    return require_user(token_data)
