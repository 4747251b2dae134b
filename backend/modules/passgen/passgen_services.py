# -*- coding: utf-8 -*-
"""
密码预设业务逻辑
所有读写都限定在当前用户范围内
"""

import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_

from core.errors import NotFoundException, ValidationException
from utils.timezone import utc_now

from .passgen_models import PasswordPreset, GeneratedPassword, generate_id
from .passgen_schemas import PresetCreate, PresetUpdate, PasswordLogCreate

logger = logging.getLogger(__name__)


class PassgenService:
    """密码预设服务"""

    def __init__(self, db: AsyncSession, user_id: int):
        self.db = db
        self.user_id = user_id

    # ============ 所有权校验 ============

    async def get_owned_preset(self, preset_id: str) -> PasswordPreset:
        """获取当前用户的预设，不存在或属于其他用户时抛出 NotFound"""
        stmt = select(PasswordPreset).where(
            and_(
                PasswordPreset.id == preset_id,
                PasswordPreset.user_id == self.user_id
            )
        )
        result = await self.db.execute(stmt)
        preset = result.scalar_one_or_none()

        if not preset:
            logger.warning(f"用户 {self.user_id} 访问不存在或无权访问的预设: {preset_id}")
            raise NotFoundException("密码预设")

        return preset

    # ============ 预设管理 ============

    async def create_preset(self, data: PresetCreate) -> PasswordPreset:
        """创建预设"""
        now = utc_now()
        preset = PasswordPreset(
            id=generate_id(),
            user_id=self.user_id,
            name=data.name,
            length=data.length,
            include_lowercase=data.include_lowercase,
            include_uppercase=data.include_uppercase,
            include_numbers=data.include_numbers,
            include_symbols=data.include_symbols,
            exclude_similar=data.exclude_similar,
            custom_symbols=data.custom_symbols,
            notes=data.notes,
            is_default=data.is_default,
            created_at=now,
            updated_at=now
        )
        self.db.add(preset)
        await self.db.commit()
        await self.db.refresh(preset)

        logger.info(f"用户 {self.user_id} 创建预设: {preset.id}")
        return preset

    async def update_preset(self, preset_id: str, data: PresetUpdate) -> PasswordPreset:
        """更新预设（只修改显式提供的字段）"""
        fields = data.provided_fields()
        if not fields:
            raise ValidationException("至少需要提供一个要更新的字段")

        preset = await self.get_owned_preset(preset_id)

        for field in fields:
            setattr(preset, field, getattr(data, field))
        preset.updated_at = utc_now()

        await self.db.commit()
        await self.db.refresh(preset)

        logger.info(f"用户 {self.user_id} 更新预设 {preset.id}: {', '.join(fields)}")
        return preset

    async def get_presets(self, defaults_only: bool = False) -> List[PasswordPreset]:
        """获取预设列表"""
        conditions = [PasswordPreset.user_id == self.user_id]
        if defaults_only:
            conditions.append(PasswordPreset.is_default.is_(True))

        result = await self.db.execute(select(PasswordPreset).where(and_(*conditions)))
        presets = list(result.scalars().all())

        logger.debug(f"用户 {self.user_id} 查询预设 {len(presets)} 条 (defaults_only={defaults_only})")
        return presets

    # ============ 生成记录 ============

    async def log_generated_password(self, data: PasswordLogCreate) -> GeneratedPassword:
        """记录一次密码生成"""
        if data.preset_id:
            await self.get_owned_preset(data.preset_id)

        record = GeneratedPassword(
            id=generate_id(),
            user_id=self.user_id,
            preset_id=data.preset_id,
            encrypted_value=data.encrypted_value,
            hint_label=data.hint_label,
            length=data.length,
            was_copied=data.was_copied,
            last_copied_at=data.last_copied_at,
            created_at=utc_now()
        )
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)

        logger.info(f"用户 {self.user_id} 记录生成密码: {record.id} (preset={record.preset_id})")
        return record

    async def get_generated_passwords(self, preset_id: Optional[str] = None) -> List[GeneratedPassword]:
        """获取生成记录列表，可按预设筛选"""
        conditions = [GeneratedPassword.user_id == self.user_id]
        if preset_id:
            await self.get_owned_preset(preset_id)
            conditions.append(GeneratedPassword.preset_id == preset_id)

        result = await self.db.execute(select(GeneratedPassword).where(and_(*conditions)))
        return list(result.scalars().all())
