# -*- coding: utf-8 -*-
"""
密码预设服务层测试
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch
from sqlalchemy import select, func

from core.errors import NotFoundException, ValidationException
from modules.passgen.passgen_models import GeneratedPassword
from modules.passgen.passgen_services import PassgenService
from modules.passgen.passgen_schemas import PresetCreate, PresetUpdate, PasswordLogCreate, PasswordInfo


async def count_generated(db_session) -> int:
    result = await db_session.execute(select(func.count(GeneratedPassword.id)))
    return result.scalar() or 0


class TestPresetService:
    """预设管理测试"""

    @pytest.mark.asyncio
    async def test_create_preset_defaults(self, db_session, sample_user_id):
        """测试按默认值创建预设"""
        service = PassgenService(db_session, sample_user_id)
        preset = await service.create_preset(PresetCreate(name="Wi-Fi", length=12))

        assert preset.id
        assert preset.user_id == sample_user_id
        assert preset.length == 12
        assert preset.include_lowercase is True
        assert preset.include_uppercase is True
        assert preset.include_numbers is True
        assert preset.include_symbols is True
        assert preset.exclude_similar is False
        assert preset.is_default is False
        assert preset.created_at == preset.updated_at

    @pytest.mark.asyncio
    async def test_create_preset_custom(self, db_session, sample_user_id):
        """测试按传入值创建预设"""
        service = PassgenService(db_session, sample_user_id)
        preset = await service.create_preset(PresetCreate(
            name="PIN",
            length=6,
            include_lowercase=False,
            include_uppercase=False,
            include_symbols=False,
            exclude_similar=True,
            custom_symbols="!@#",
            notes="银行卡",
            is_default=True
        ))

        assert preset.include_lowercase is False
        assert preset.include_uppercase is False
        assert preset.include_numbers is True
        assert preset.include_symbols is False
        assert preset.exclude_similar is True
        assert preset.custom_symbols == "!@#"
        assert preset.notes == "银行卡"
        assert preset.is_default is True

    @pytest.mark.asyncio
    async def test_create_allows_duplicate_names(self, db_session, sample_user_id):
        """测试同名预设不做唯一性检查"""
        service = PassgenService(db_session, sample_user_id)
        first = await service.create_preset(PresetCreate(name="重复", length=8))
        second = await service.create_preset(PresetCreate(name="重复", length=8))

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_update_preset_partial(self, db_session, sample_user_id):
        """测试部分更新只修改提供的字段并推进更新时间"""
        service = PassgenService(db_session, sample_user_id)
        preset = await service.create_preset(PresetCreate(name="Wi-Fi", length=12, notes="家里"))
        created_at = preset.created_at
        original_updated_at = preset.updated_at

        later = datetime.now(timezone.utc) + timedelta(minutes=5)
        with patch("modules.passgen.passgen_services.utc_now", return_value=later):
            updated = await service.update_preset(preset.id, PresetUpdate(length=20))

        assert updated.id == preset.id
        assert updated.length == 20
        assert updated.name == "Wi-Fi"
        assert updated.notes == "家里"
        assert updated.include_symbols is True
        assert updated.exclude_similar is False
        assert updated.is_default is False
        assert updated.created_at == created_at
        assert updated.updated_at != original_updated_at
        assert updated.updated_at.replace(tzinfo=None) == later.replace(tzinfo=None)

    @pytest.mark.asyncio
    async def test_update_preset_clears_notes(self, db_session, sample_user_id):
        """测试显式 null 清空备注"""
        service = PassgenService(db_session, sample_user_id)
        preset = await service.create_preset(PresetCreate(name="备注", length=10, notes="待清空"))

        updated = await service.update_preset(preset.id, PresetUpdate(notes=None))
        assert updated.notes is None

    @pytest.mark.asyncio
    async def test_update_without_fields(self, db_session, sample_user_id):
        """测试没有任何字段时拒绝更新"""
        service = PassgenService(db_session, sample_user_id)
        preset = await service.create_preset(PresetCreate(name="空更新", length=10))

        with pytest.raises(ValidationException):
            await service.update_preset(preset.id, PresetUpdate.model_construct())

    @pytest.mark.asyncio
    async def test_update_other_users_preset(self, db_session, sample_user_id, another_user_id):
        """测试不能更新其他用户的预设"""
        owner = PassgenService(db_session, sample_user_id)
        preset = await owner.create_preset(PresetCreate(name="私有", length=16))

        intruder = PassgenService(db_session, another_user_id)
        with pytest.raises(NotFoundException):
            await intruder.update_preset(preset.id, PresetUpdate(name="被篡改"))

        unchanged = await owner.get_owned_preset(preset.id)
        assert unchanged.name == "私有"

    @pytest.mark.asyncio
    async def test_update_missing_preset(self, db_session, sample_user_id):
        """测试更新不存在的预设"""
        service = PassgenService(db_session, sample_user_id)
        with pytest.raises(NotFoundException):
            await service.update_preset("does-not-exist", PresetUpdate(length=8))

    @pytest.mark.asyncio
    async def test_get_presets_scoped_and_filtered(self, db_session, sample_user_id, another_user_id):
        """测试列表按用户隔离，defaults_only 为子集"""
        service = PassgenService(db_session, sample_user_id)
        await service.create_preset(PresetCreate(name="默认一", length=16, is_default=True))
        await service.create_preset(PresetCreate(name="默认二", length=20, is_default=True))
        await service.create_preset(PresetCreate(name="普通", length=8))

        other = PassgenService(db_session, another_user_id)
        await other.create_preset(PresetCreate(name="别人的默认", length=16, is_default=True))

        all_presets = await service.get_presets()
        defaults = await service.get_presets(defaults_only=True)

        assert len(all_presets) == 3
        assert len(defaults) == 2
        assert {p.id for p in defaults} <= {p.id for p in all_presets}
        assert all(p.is_default for p in defaults)
        assert all(p.user_id == sample_user_id for p in all_presets)


class TestGeneratedPasswordService:
    """生成记录测试"""

    @pytest.mark.asyncio
    async def test_log_without_preset(self, db_session, sample_user_id):
        """测试不关联预设时不做所有权检查"""
        service = PassgenService(db_session, sample_user_id)

        with patch.object(service, "get_owned_preset") as owned:
            record = await service.log_generated_password(PasswordLogCreate(
                encrypted_value="ZW5jcnlwdGVk",
                hint_label="Gmail",
                length=16
            ))
            owned.assert_not_called()

        assert record.preset_id is None
        assert record.user_id == sample_user_id
        assert record.encrypted_value == "ZW5jcnlwdGVk"
        assert record.hint_label == "Gmail"
        assert record.length == 16
        assert record.was_copied is False
        assert record.last_copied_at is None
        assert record.created_at is not None

    @pytest.mark.asyncio
    async def test_log_with_own_preset(self, db_session, sample_user_id):
        """测试关联自己的预设"""
        service = PassgenService(db_session, sample_user_id)
        preset = await service.create_preset(PresetCreate(name="Wi-Fi", length=12))

        copied_at = datetime(2026, 10, 1, 8, 30, tzinfo=timezone.utc)
        record = await service.log_generated_password(PasswordLogCreate(
            preset_id=preset.id,
            was_copied=True,
            last_copied_at=copied_at
        ))

        assert record.preset_id == preset.id
        assert record.was_copied is True
        assert record.last_copied_at.replace(tzinfo=None) == copied_at.replace(tzinfo=None)

    @pytest.mark.asyncio
    async def test_log_with_foreign_preset(self, db_session, sample_user_id, another_user_id):
        """测试关联其他用户的预设时拒绝且不写入"""
        owner = PassgenService(db_session, sample_user_id)
        preset = await owner.create_preset(PresetCreate(name="私有", length=16))

        intruder = PassgenService(db_session, another_user_id)
        with pytest.raises(NotFoundException):
            await intruder.log_generated_password(PasswordLogCreate(preset_id=preset.id))

        assert await count_generated(db_session) == 0

    @pytest.mark.asyncio
    async def test_list_generated_passwords(self, db_session, sample_user_id, another_user_id):
        """测试生成记录列表与按预设筛选"""
        service = PassgenService(db_session, sample_user_id)
        wifi = await service.create_preset(PresetCreate(name="Wi-Fi", length=12))
        await service.log_generated_password(PasswordLogCreate(preset_id=wifi.id))
        await service.log_generated_password(PasswordLogCreate(preset_id=wifi.id))
        await service.log_generated_password(PasswordLogCreate(hint_label="无预设"))

        other = PassgenService(db_session, another_user_id)
        await other.log_generated_password(PasswordLogCreate(hint_label="别人的"))

        assert len(await service.get_generated_passwords()) == 3
        filtered = await service.get_generated_passwords(preset_id=wifi.id)
        assert len(filtered) == 2
        assert all(r.preset_id == wifi.id for r in filtered)

    @pytest.mark.asyncio
    async def test_list_with_foreign_preset(self, db_session, sample_user_id, another_user_id):
        """测试按其他用户的预设筛选时拒绝"""
        owner = PassgenService(db_session, sample_user_id)
        preset = await owner.create_preset(PresetCreate(name="私有", length=16))
        await owner.log_generated_password(PasswordLogCreate(preset_id=preset.id))

        intruder = PassgenService(db_session, another_user_id)
        with pytest.raises(NotFoundException):
            await intruder.get_generated_passwords(preset_id=preset.id)

    @pytest.mark.asyncio
    async def test_log_with_offset_time(self, db_session, sample_user_id):
        """测试带时区偏移的复制时间读回后仍是同一时刻"""
        service = PassgenService(db_session, sample_user_id)
        copied_at = datetime(2026, 10, 1, 8, 30, tzinfo=timezone(timedelta(hours=8)))
        await service.log_generated_password(PasswordLogCreate(
            was_copied=True,
            last_copied_at=copied_at
        ))
        db_session.expire_all()

        records = await service.get_generated_passwords()
        stored = PasswordInfo.model_validate(records[0]).last_copied_at
        assert stored == copied_at
        assert stored.utcoffset() == timedelta(0)
