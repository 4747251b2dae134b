"""
健康检查路由
提供服务存活状态和数据库连通性
"""

import time
import logging
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from core.config import get_settings
from core.database import engine
from utils.timezone import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(tags=["健康检查"])

# 系统启动时间
_start_time = utc_now()


class ComponentHealth(BaseModel):
    """组件健康状态"""
    status: str
    message: Optional[str] = None
    latency_ms: Optional[float] = None


class HealthStatus(BaseModel):
    """健康状态响应"""
    status: str  # healthy, unhealthy
    version: str
    timestamp: str
    uptime_seconds: float
    components: dict


async def check_database() -> ComponentHealth:
    """检查数据库连接"""
    start = time.time()

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

        latency = (time.time() - start) * 1000
        return ComponentHealth(
            status="healthy",
            message="数据库连接正常",
            latency_ms=round(latency, 2)
        )
    except Exception as e:
        logger.error(f"数据库健康检查失败: {e}")
        return ComponentHealth(
            status="unhealthy",
            message=f"数据库连接失败: {str(e)}"
        )


@router.get("/health", response_model=HealthStatus)
async def health():
    """健康检查"""
    now = utc_now()
    database = await check_database()

    return HealthStatus(
        status=database.status,
        version=get_settings().app_version,
        timestamp=now.isoformat(),
        uptime_seconds=round((now - _start_time).total_seconds(), 2),
        components={"database": database.model_dump()}
    )
