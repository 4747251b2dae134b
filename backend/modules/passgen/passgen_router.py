# -*- coding: utf-8 -*-
"""
密码预设API路由
RESTful风格，所有接口都需要认证且限定用户
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.security import get_current_user, TokenData
from schemas import success, listing

from .passgen_schemas import (
    PresetCreate, PresetUpdate, PresetInfo,
    PasswordLogCreate, PasswordInfo
)
from .passgen_services import PassgenService

router = APIRouter()


def get_service(db: AsyncSession, user: TokenData) -> PassgenService:
    """创建密码预设服务实例"""
    return PassgenService(db, user.user_id)


# ============ 预设接口 ============

@router.post("/presets")
async def create_preset(
    data: PresetCreate,
    db: AsyncSession = Depends(get_db),
    user: TokenData = Depends(get_current_user)
):
    """创建密码预设"""
    service = get_service(db, user)
    preset = await service.create_preset(data)
    return success({"preset": PresetInfo.model_validate(preset).model_dump(mode="json")}, "创建成功")


@router.get("/presets")
async def list_presets(
    defaults_only: bool = Query(False, description="只返回默认预设"),
    db: AsyncSession = Depends(get_db),
    user: TokenData = Depends(get_current_user)
):
    """获取预设列表"""
    service = get_service(db, user)
    presets = await service.get_presets(defaults_only=defaults_only)
    return listing([PresetInfo.model_validate(p).model_dump(mode="json") for p in presets])


@router.get("/presets/{preset_id}")
async def get_preset(
    preset_id: str,
    db: AsyncSession = Depends(get_db),
    user: TokenData = Depends(get_current_user)
):
    """获取预设详情"""
    service = get_service(db, user)
    preset = await service.get_owned_preset(preset_id)
    return success({"preset": PresetInfo.model_validate(preset).model_dump(mode="json")})


@router.put("/presets/{preset_id}")
async def update_preset(
    preset_id: str,
    data: PresetUpdate,
    db: AsyncSession = Depends(get_db),
    user: TokenData = Depends(get_current_user)
):
    """更新密码预设"""
    service = get_service(db, user)
    preset = await service.update_preset(preset_id, data)
    return success({"preset": PresetInfo.model_validate(preset).model_dump(mode="json")}, "更新成功")


# ============ 生成记录接口 ============

@router.post("/passwords")
async def log_generated_password(
    data: PasswordLogCreate,
    db: AsyncSession = Depends(get_db),
    user: TokenData = Depends(get_current_user)
):
    """记录一次密码生成（encrypted_value 需由客户端预先加密）"""
    service = get_service(db, user)
    record = await service.log_generated_password(data)
    return success({"password": PasswordInfo.model_validate(record).model_dump(mode="json")}, "记录成功")


@router.get("/passwords")
async def list_generated_passwords(
    preset_id: Optional[str] = Query(None, description="按预设筛选"),
    db: AsyncSession = Depends(get_db),
    user: TokenData = Depends(get_current_user)
):
    """获取生成记录列表"""
    service = get_service(db, user)
    records = await service.get_generated_passwords(preset_id=preset_id)
    return listing([PasswordInfo.model_validate(r).model_dump(mode="json") for r in records])
