"""
安全模块单元测试
"""

import pytest
from datetime import timedelta

from core.errors import AuthException, ErrorCode
from core.security import (
    create_token,
    decode_token,
    require_user,
    get_current_user,
    TokenData
)


class TestJWT:
    """JWT 令牌测试"""

    def test_create_token(self):
        """测试创建访问令牌"""
        token = create_token(TokenData(user_id=1, username="testuser"))

        assert isinstance(token, str)
        assert len(token) > 0

    def test_decode_token_valid(self):
        """测试解码有效令牌"""
        token = create_token(TokenData(user_id=7, username="alice", role="admin"))
        decoded = decode_token(token)

        assert decoded is not None
        assert decoded.user_id == 7
        assert decoded.username == "alice"
        assert decoded.role == "admin"

    def test_decode_token_invalid(self):
        """测试解码无效令牌"""
        assert decode_token("invalid.token.here") is None

    def test_decode_token_expired(self):
        """测试过期令牌"""
        token = create_token(
            TokenData(user_id=1, username="testuser"),
            expires_delta=timedelta(seconds=-10)
        )
        assert decode_token(token) is None

    def test_decode_refresh_token_rejected(self):
        """测试刷新令牌不能用作访问令牌"""
        token = create_token(TokenData(user_id=1, username="testuser"), token_type="refresh")
        assert decode_token(token) is None
        assert decode_token(token, expected_type="refresh") is not None


class TestSessionGuard:
    """会话守卫测试"""

    def test_require_user_passes_through(self):
        """测试有用户时原样返回"""
        user = TokenData(user_id=1, username="testuser")
        assert require_user(user) is user

    def test_require_user_rejects_missing(self):
        """测试无用户时抛出未认证"""
        with pytest.raises(AuthException) as exc_info:
            require_user(None)
        assert exc_info.value.code == ErrorCode.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_get_current_user_without_credentials(self):
        """测试缺少凭据"""
        with pytest.raises(AuthException):
            await get_current_user(None)
