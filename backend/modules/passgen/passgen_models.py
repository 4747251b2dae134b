# -*- coding: utf-8 -*-
"""
密码预设数据模型
表名遵循隔离协议：passgen_前缀

注意：本模块不保存明文密码，encrypted_value 由调用方加密后写入
"""

import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, Boolean, DateTime, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base
from utils.timezone import utc_now


def generate_id() -> str:
    """生成记录主键（UUID4 字符串）"""
    return str(uuid.uuid4())


class PasswordPreset(Base):
    """密码生成预设"""
    __tablename__ = "passgen_presets"
    __table_args__ = {"extend_existing": True, "comment": "密码生成预设表"}

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id, comment="主键ID")

    # 所属用户（严格隔离）
    user_id: Mapped[int] = mapped_column(Integer, index=True, comment="所属用户ID")

    # 预设名称，如 "默认强密码"、"Wi-Fi"
    name: Mapped[str] = mapped_column(String(100), comment="预设名称")
    length: Mapped[int] = mapped_column(Integer, comment="密码长度")

    # 字符集开关
    include_lowercase: Mapped[bool] = mapped_column(Boolean, default=True, comment="包含小写字母")
    include_uppercase: Mapped[bool] = mapped_column(Boolean, default=True, comment="包含大写字母")
    include_numbers: Mapped[bool] = mapped_column(Boolean, default=True, comment="包含数字")
    include_symbols: Mapped[bool] = mapped_column(Boolean, default=True, comment="包含特殊符号")
    exclude_similar: Mapped[bool] = mapped_column(Boolean, default=False, comment="排除易混淆字符")
    custom_symbols: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, comment="自定义符号集")

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="备注")
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, comment="是否默认预设")

    # 时间戳
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, comment="创建时间")
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, comment="更新时间")


class GeneratedPassword(Base):
    """密码生成记录（创建后不可修改）"""
    __tablename__ = "passgen_generated_passwords"
    __table_args__ = {"extend_existing": True, "comment": "密码生成记录表"}

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id, comment="主键ID")

    # 所属用户（严格隔离）
    user_id: Mapped[int] = mapped_column(Integer, index=True, comment="所属用户ID")

    # 关联预设（可为空）
    preset_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("passgen_presets.id"),
        nullable=True,
        index=True,
        comment="关联预设ID"
    )

    encrypted_value: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="加密后的密码")
    hint_label: Mapped[Optional[str]] = mapped_column(String(200), nullable=True, comment="提示标签")
    length: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, comment="密码长度")

    was_copied: Mapped[bool] = mapped_column(Boolean, default=False, comment="是否已复制")
    last_copied_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True, comment="最后复制时间")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, comment="创建时间")
