"""add study subjects and quizzes

Revision ID: c4f81b2d9e37
Revises: a7d3e91c4b20
Create Date: 2025-12-11 09:30:00.000000

Adds study_subjects, links study_topics to a subject (nullable) and adds
quizzes with their quiz_questions.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID


# revision identifiers, used by Alembic.
revision: str = 'c4f81b2d9e37'
down_revision: Union[str, None] = 'a7d3e91c4b20'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create study subject and quiz tables."""
    op.create_table(
        'study_subjects',
        sa.Column('id', UUID(), nullable=False),
        sa.Column('user_id', UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index(op.f('ix_study_subjects_user_id'), 'study_subjects', ['user_id'], unique=False)

    op.add_column('study_topics', sa.Column('subject_id', UUID(), nullable=True))
    op.create_foreign_key(
        'fk_study_topics_subject_id', 'study_topics', 'study_subjects',
        ['subject_id'], ['id'], ondelete='SET NULL',
    )
    op.create_index(op.f('ix_study_topics_subject_id'), 'study_topics', ['subject_id'], unique=False)

    op.create_table(
        'quizzes',
        sa.Column('id', UUID(), nullable=False),
        sa.Column('user_id', UUID(), nullable=False),
        sa.Column('subject_id', UUID(), nullable=False),
        sa.Column('topic', sa.Text(), nullable=False),
        sa.Column('total_questions', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('correct_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['subject_id'], ['study_subjects.id'], ondelete='CASCADE'),
    )
    op.create_index(op.f('ix_quizzes_user_id'), 'quizzes', ['user_id'], unique=False)
    op.create_index(op.f('ix_quizzes_subject_id'), 'quizzes', ['subject_id'], unique=False)

    op.create_table(
        'quiz_questions',
        sa.Column('id', UUID(), nullable=False),
        sa.Column('quiz_id', UUID(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('options', sa.JSON().with_variant(JSONB(), 'postgresql'), nullable=False),
        sa.Column('correct_answer', sa.Text(), nullable=False),
        sa.Column('explanation', sa.Text(), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
    )
    op.create_index(op.f('ix_quiz_questions_quiz_id'), 'quiz_questions', ['quiz_id'], unique=False)


def downgrade() -> None:
    """Drop study subject and quiz tables."""
    op.drop_index(op.f('ix_quiz_questions_quiz_id'), table_name='quiz_questions')
    op.drop_table('quiz_questions')
    op.drop_index(op.f('ix_quizzes_subject_id'), table_name='quizzes')
    op.drop_index(op.f('ix_quizzes_user_id'), table_name='quizzes')
    op.drop_table('quizzes')
    op.drop_index(op.f('ix_study_topics_subject_id'), table_name='study_topics')
    op.drop_constraint('fk_study_topics_subject_id', 'study_topics', type_='foreignkey')
    op.drop_column('study_topics', 'subject_id')
    op.drop_index(op.f('ix_study_subjects_user_id'), table_name='study_subjects')
    op.drop_table('study_subjects')
