"""
Alembic 迁移环境配置
扫描业务模块模型并使用同步驱动执行迁移
"""

import sys
import importlib
from pathlib import Path
from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection

from alembic import context

# 确保可以导入项目模块
BACKEND_DIR = Path(__file__).parent.parent.resolve()
sys.path.insert(0, str(BACKEND_DIR))

# 导入配置和模型基类
from core.config import get_settings
from core.database import Base


def import_all_models():
    """导入所有模块模型以便 Alembic 可以检测到表结构"""
    modules_dir = BACKEND_DIR / "modules"
    if not modules_dir.exists():
        return

    for module_dir in modules_dir.iterdir():
        if not module_dir.is_dir() or module_dir.name.startswith("_"):
            continue

        models_file = module_dir / f"{module_dir.name}_models.py"
        if models_file.exists():
            importlib.import_module(f"modules.{module_dir.name}.{module_dir.name}_models")


import_all_models()

# Alembic 配置对象
config = context.config

# 设置日志
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

settings = get_settings()

# 迁移使用同步驱动（pymysql 而不是 aiomysql）
config.set_main_option("sqlalchemy.url", settings.db_url_sync)

# 目标元数据
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """
    离线模式运行迁移

    仅生成 SQL 脚本，不实际执行
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """执行迁移"""
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    在线模式运行迁移

    实际连接数据库并执行迁移
    """
    connectable = create_engine(
        settings.db_url_sync,
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        do_run_migrations(connection)


# 根据环境选择迁移模式
if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
