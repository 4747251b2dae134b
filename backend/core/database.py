"""
数据库连接管理
提供异步数据库连接和会话管理
"""

import logging
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import text, event
from typing import AsyncGenerator

from .config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def _engine_options() -> dict:
    """按数据库类型生成引擎参数"""
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
        "connect_args": {
            "init_command": f"SET time_zone = '{settings.db_time_zone}'"
        }
    }


# 创建异步引擎
engine = create_async_engine(
    settings.db_url,
    echo=False,  # 禁用 SQL 详细输出，避免日志过多
    **_engine_options()
)


if not settings.is_sqlite:
    @event.listens_for(engine.sync_engine, "connect")
    def _set_session_time_zone(dbapi_connection, connection_record):
        """确保每个连接会话时区一致"""
        with dbapi_connection.cursor() as cursor:
            cursor.execute(f"SET time_zone = '{settings.db_time_zone}'")

# 会话工厂
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False
)


class Base(DeclarativeBase):
    """模型基类"""
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """获取数据库会话（依赖注入用）"""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def ensure_database_exists():
    """确保 MySQL 数据库存在，如果不存在则尝试创建"""
    if settings.is_sqlite:
        return

    admin_url = settings.db_url.rsplit("/", 1)[0]
    admin_engine = create_async_engine(admin_url, echo=False)

    try:
        async with admin_engine.connect() as conn:
            result = await conn.execute(
                text("SELECT SCHEMA_NAME FROM INFORMATION_SCHEMA.SCHEMATA WHERE SCHEMA_NAME = :name"),
                {"name": settings.db_name}
            )
            exists = result.fetchone() is not None

            if not exists:
                logger.info(f"数据库 '{settings.db_name}' 不存在，正在创建...")
                await conn.execute(text(f"CREATE DATABASE `{settings.db_name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"))
                await conn.commit()
                logger.info(f"数据库 '{settings.db_name}' 创建成功")
            else:
                logger.debug(f"数据库 '{settings.db_name}' 已存在")
    except Exception as e:
        error_msg = str(e)
        if "Access denied" in error_msg or "1044" in error_msg:
            logger.error(f"用户 '{settings.db_user}' 没有创建数据库的权限，请手动创建 {settings.db_name}")
        else:
            logger.error(f"检查/创建数据库失败: {e}")
        raise
    finally:
        await admin_engine.dispose()


async def init_db():
    """初始化数据库（创建缺失的表）"""
    from sqlalchemy import inspect

    await ensure_database_exists()

    async with engine.begin() as conn:
        def create_tables_safe(connection):
            inspector = inspect(connection)
            existing_tables = set(inspector.get_table_names())
            missing = [t for t in Base.metadata.sorted_tables if t.name not in existing_tables]

            for table in missing:
                logger.debug(f"创建表: {table.name}")
            Base.metadata.create_all(connection, tables=missing)

            logger.debug(f"数据库表初始化完成（创建: {len(missing)}, 跳过: {len(existing_tables)}）")

        await conn.run_sync(create_tables_safe)


async def close_db():
    """关闭数据库连接"""
    await engine.dispose()
