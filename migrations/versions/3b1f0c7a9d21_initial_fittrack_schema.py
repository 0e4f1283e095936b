# File: migrations/versions/3b1f0c7a9d21_initial_fittrack_schema.py

"""Initial schema: users, workouts, programs, calendar and tracking

Revision ID: 3b1f0c7a9d21
Revises:
Create Date: 2025-09-01 10:12:03.118201
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3b1f0c7a9d21'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=80), nullable=False, unique=True),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=150)),
        sa.Column('first_name', sa.String(length=80)),
        sa.Column('last_name', sa.String(length=80)),
        sa.Column('gender', sa.String(length=16)),
        sa.Column('age', sa.Integer()),
        sa.Column('fitness_level', sa.String(length=32)),
        sa.Column('fitness_goals', sa.String(length=255)),
        sa.Column('preferred_workout_days', sa.String(length=120)),
        sa.Column('workout_reminders', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'workouts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=160), nullable=False),
        sa.Column('subtitle', sa.String(length=160)),
        sa.Column('description', sa.Text()),
        sa.Column('image_url', sa.String(length=500)),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('difficulty', sa.String(length=16), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('day', sa.Integer()),
        sa.Column('total_days', sa.Integer()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('sets', sa.Integer()),
        sa.Column('reps', sa.Integer()),
        sa.Column('rest_time', sa.Integer()),
        sa.Column('weight', sa.String(length=32)),
        sa.Column('description', sa.Text()),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
    )

    op.create_table(
        'programs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=160), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('image_url', sa.String(length=500)),
        sa.Column('difficulty', sa.String(length=16)),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('duration > 0', name='ck_programs_duration_positive'),
    )

    op.create_table(
        'program_workouts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('program_id', sa.Integer(), sa.ForeignKey('programs.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
    )

    op.create_table(
        'user_programs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('program_id', sa.Integer(), sa.ForeignKey('programs.id'), nullable=False),
        sa.Column('current_day', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true(), index=True),
        sa.Column('started_at', sa.DateTime(), nullable=False),
        sa.Column('completed_at', sa.DateTime()),
        sa.Column('unsubscribed_at', sa.DateTime()),
    )

    op.create_table(
        'scheduled_workouts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id'), nullable=False),
        sa.Column('scheduled_date', sa.Date(), nullable=False, index=True),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('program_id', sa.Integer(), sa.ForeignKey('programs.id')),
        sa.Column('program_day', sa.Integer()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('program_day IS NULL OR program_day > 0', name='ck_scheduled_program_day_positive'),
    )

    op.create_table(
        'completed_workouts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id'), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=False, index=True),
    )

    op.create_table(
        'favorites',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('user_id', 'workout_id', name='uq_favorites_user_workout'),
    )

    op.create_table(
        'progress_tests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('title', sa.String(length=160), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('result', sa.String(length=255)),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
    )


def downgrade():
    # Orden inverso por las FKs
    for table in (
        'progress_tests', 'favorites', 'completed_workouts', 'scheduled_workouts',
        'user_programs', 'program_workouts', 'programs', 'exercises', 'workouts', 'users',
    ):
        op.drop_table(table)
