"""initial builder schema

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-19 09:12:03.418220

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True):
    columns = [sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()))
    return columns


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'ielts_tests',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('mode', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('listening_ids', sa.JSON(), nullable=False),
        sa.Column('reading_ids', sa.JSON(), nullable=False),
        sa.Column('writing_ids', sa.JSON(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'sections',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('kind', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('payload_ref', sa.String(), nullable=True),
        sa.Column('child_ids', sa.JSON(), nullable=False),
        sa.Column('test_id', sa.String(36), sa.ForeignKey('ielts_tests.id', ondelete='SET NULL'), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_sections_kind', 'sections', ['kind'])
    op.create_index('ix_sections_test_id', 'sections', ['test_id'])

    op.create_table(
        'parts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('kind', sa.String(), nullable=False),
        sa.Column('label', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('payload_ref', sa.Text(), nullable=True),
        sa.Column('answers', sa.JSON(), nullable=False),
        sa.Column('section_id', sa.String(36), sa.ForeignKey('sections.id', ondelete='SET NULL'), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_parts_kind', 'parts', ['kind'])
    op.create_index('ix_parts_section_id', 'parts', ['section_id'])

    op.create_table(
        'question_groups',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('part_id', sa.String(36), sa.ForeignKey('parts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('prompt', sa.Text(), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index('ix_question_groups_part_id', 'question_groups', ['part_id'])

    op.create_table(
        'questions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('part_id', sa.String(36), sa.ForeignKey('parts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('prompt', sa.Text(), nullable=True),
        sa.Column('options', sa.JSON(), nullable=False),
        sa.Column('answer_key', sa.JSON(), nullable=True),
        sa.Column('group_id', sa.String(36), sa.ForeignKey('question_groups.id', ondelete='SET NULL'), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index('ix_questions_part_id', 'questions', ['part_id'])

    op.create_table(
        'writing_tasks',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('label', sa.String(), nullable=False),
        sa.Column('prompt', sa.Text(), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('min_words', sa.Integer(), nullable=True),
        sa.Column('suggested_time', sa.Integer(), nullable=True),
        sa.Column('writing_id', sa.String(36), sa.ForeignKey('sections.id', ondelete='SET NULL'), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_writing_tasks_writing_id', 'writing_tasks', ['writing_id'])

    op.create_table(
        'link_requests',
        sa.Column('token', sa.String(128), primary_key=True),
        sa.Column('parent_id', sa.String(36), nullable=False),
        sa.Column('child_id', sa.String(36), nullable=False),
        sa.Column('position', sa.Integer(), nullable=True),
        *_timestamps(updated=False),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('link_requests')
    op.drop_table('writing_tasks')
    op.drop_table('questions')
    op.drop_table('question_groups')
    op.drop_table('parts')
    op.drop_table('sections')
    op.drop_table('ielts_tests')
    op.drop_table('users')
