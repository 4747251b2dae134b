# -*- coding: utf-8 -*-
"""
密码预设数据验证模式
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from utils.timezone import ensure_utc

MIN_PASSWORD_LENGTH = 4

# 允许部分更新的字段（顺序即更新时的检查顺序）
PRESET_UPDATABLE_FIELDS = (
    "name",
    "length",
    "include_lowercase",
    "include_uppercase",
    "include_numbers",
    "include_symbols",
    "exclude_similar",
    "custom_symbols",
    "notes",
    "is_default",
)

# 这些字段在数据库中不可为空，更新时不能显式传 null
PRESET_NON_NULLABLE_FIELDS = (
    "name",
    "length",
    "include_lowercase",
    "include_uppercase",
    "include_numbers",
    "include_symbols",
    "exclude_similar",
    "is_default",
)


# ============ 预设 ============

class PresetCreate(BaseModel):
    """创建密码预设"""
    name: str = Field(..., min_length=1, max_length=100, description="预设名称")
    length: int = Field(..., ge=MIN_PASSWORD_LENGTH, description="密码长度")
    include_lowercase: bool = Field(default=True, description="包含小写字母")
    include_uppercase: bool = Field(default=True, description="包含大写字母")
    include_numbers: bool = Field(default=True, description="包含数字")
    include_symbols: bool = Field(default=True, description="包含特殊符号")
    exclude_similar: bool = Field(default=False, description="排除易混淆字符")
    custom_symbols: Optional[str] = Field(None, max_length=100, description="自定义符号集")
    notes: Optional[str] = Field(None, description="备注")
    is_default: bool = Field(default=False, description="是否默认预设")


class PresetUpdate(BaseModel):
    """更新密码预设（只更新显式提供的字段）"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    length: Optional[int] = Field(None, ge=MIN_PASSWORD_LENGTH)
    include_lowercase: Optional[bool] = None
    include_uppercase: Optional[bool] = None
    include_numbers: Optional[bool] = None
    include_symbols: Optional[bool] = None
    exclude_similar: Optional[bool] = None
    custom_symbols: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    is_default: Optional[bool] = None

    @field_validator(*PRESET_NON_NULLABLE_FIELDS, mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("该字段不能为空")
        return value

    @model_validator(mode="after")
    def require_any_field(self):
        if not self.provided_fields():
            raise ValueError("至少需要提供一个要更新的字段")
        return self

    def provided_fields(self) -> list[str]:
        """返回请求中显式提供的字段"""
        return [f for f in PRESET_UPDATABLE_FIELDS if f in self.model_fields_set]


class PresetInfo(BaseModel):
    """预设信息"""
    id: str
    user_id: int
    name: str
    length: int
    include_lowercase: bool
    include_uppercase: bool
    include_numbers: bool
    include_symbols: bool
    exclude_similar: bool
    custom_symbols: Optional[str]
    notes: Optional[str]
    is_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return ensure_utc(value)


# ============ 生成记录 ============

class PasswordLogCreate(BaseModel):
    """记录一次密码生成"""
    preset_id: Optional[str] = Field(None, description="关联预设ID")
    encrypted_value: Optional[str] = Field(None, description="已加密的密码（服务端不做加密）")
    hint_label: Optional[str] = Field(None, max_length=200, description="提示标签，如 Gmail")
    length: Optional[int] = Field(None, description="密码长度")
    was_copied: bool = Field(default=False, description="是否已复制")
    last_copied_at: Optional[datetime] = Field(None, description="最后复制时间")

    @field_validator("preset_id")
    @classmethod
    def blank_preset_as_none(cls, value: Optional[str]) -> Optional[str]:
        # 空字符串视为未关联预设
        return value or None

    @field_validator("last_copied_at")
    @classmethod
    def last_copied_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # 数据库不保存时区偏移，入库前统一换算为 UTC
        return ensure_utc(value)


class PasswordInfo(BaseModel):
    """生成记录信息"""
    id: str
    user_id: int
    preset_id: Optional[str]
    encrypted_value: Optional[str]
    hint_label: Optional[str]
    length: Optional[int]
    was_copied: bool
    last_copied_at: Optional[datetime]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("last_copied_at", "created_at")
    @classmethod
    def normalize_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)
