"""
PassGen 核心模块
提供框架的基础设施和通用功能

导出列表：
- 配置管理: get_settings, Settings
- 数据库: Base, get_db, async_session
- 安全认证: get_current_user, require_user, create_token, decode_token
- 错误处理: ErrorCode, AppException, NotFoundException, ValidationException
"""

# 配置管理
from .config import get_settings, Settings, reload_settings

# 数据库
from .database import Base, get_db, async_session, init_db, close_db

# 错误处理
from .errors import (
    ErrorCode,
    AppException,
    AuthException,
    NotFoundException,
    ValidationException,
    register_exception_handlers,
)

# 安全认证
from .security import (
    get_current_user,
    require_user,
    create_token,
    decode_token,
    TokenData
)
