"""create_passgen_tables

Revision ID: 3f1a9c2d7b40
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """升级迁移：创建密码预设相关表"""

    # 预设表
    op.create_table(
        'passgen_presets',
        sa.Column('id', sa.String(length=36), nullable=False, comment='主键ID'),
        sa.Column('user_id', sa.Integer(), nullable=False, comment='所属用户ID'),
        sa.Column('name', sa.String(length=100), nullable=False, comment='预设名称'),
        sa.Column('length', sa.Integer(), nullable=False, comment='密码长度'),
        sa.Column('include_lowercase', sa.Boolean(), nullable=False, server_default=sa.true(), comment='包含小写字母'),
        sa.Column('include_uppercase', sa.Boolean(), nullable=False, server_default=sa.true(), comment='包含大写字母'),
        sa.Column('include_numbers', sa.Boolean(), nullable=False, server_default=sa.true(), comment='包含数字'),
        sa.Column('include_symbols', sa.Boolean(), nullable=False, server_default=sa.true(), comment='包含特殊符号'),
        sa.Column('exclude_similar', sa.Boolean(), nullable=False, server_default=sa.false(), comment='排除易混淆字符'),
        sa.Column('custom_symbols', sa.String(length=100), nullable=True, comment='自定义符号集'),
        sa.Column('notes', sa.Text(), nullable=True, comment='备注'),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false(), comment='是否默认预设'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='创建时间'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, comment='更新时间'),
        sa.PrimaryKeyConstraint('id'),
        mysql_engine='InnoDB',
        mysql_charset='utf8mb4',
        comment='密码生成预设表'
    )
    op.create_index('ix_passgen_presets_user_id', 'passgen_presets', ['user_id'])

    # 生成记录表
    op.create_table(
        'passgen_generated_passwords',
        sa.Column('id', sa.String(length=36), nullable=False, comment='主键ID'),
        sa.Column('user_id', sa.Integer(), nullable=False, comment='所属用户ID'),
        sa.Column('preset_id', sa.String(length=36), nullable=True, comment='关联预设ID'),
        sa.Column('encrypted_value', sa.Text(), nullable=True, comment='加密后的密码'),
        sa.Column('hint_label', sa.String(length=200), nullable=True, comment='提示标签'),
        sa.Column('length', sa.Integer(), nullable=True, comment='密码长度'),
        sa.Column('was_copied', sa.Boolean(), nullable=False, server_default=sa.false(), comment='是否已复制'),
        sa.Column('last_copied_at', sa.DateTime(timezone=True), nullable=True, comment='最后复制时间'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='创建时间'),
        sa.ForeignKeyConstraint(['preset_id'], ['passgen_presets.id'], ),
        sa.PrimaryKeyConstraint('id'),
        mysql_engine='InnoDB',
        mysql_charset='utf8mb4',
        comment='密码生成记录表'
    )
    op.create_index('ix_passgen_generated_passwords_user_id', 'passgen_generated_passwords', ['user_id'])
    op.create_index('ix_passgen_generated_passwords_preset_id', 'passgen_generated_passwords', ['preset_id'])


def downgrade() -> None:
    """回滚迁移：删除密码预设相关表"""
    op.drop_index('ix_passgen_generated_passwords_preset_id', table_name='passgen_generated_passwords')
    op.drop_index('ix_passgen_generated_passwords_user_id', table_name='passgen_generated_passwords')
    op.drop_table('passgen_generated_passwords')
    op.drop_index('ix_passgen_presets_user_id', table_name='passgen_presets')
    op.drop_table('passgen_presets')
