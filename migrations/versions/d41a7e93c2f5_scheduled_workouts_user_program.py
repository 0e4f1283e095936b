"""link scheduled_workouts to the user_program that created them"""

from alembic import op
import sqlalchemy as sa

# Revisiones
revision = "d41a7e93c2f5"
down_revision = "8c4e2d51f7b0"
branch_labels = None
depends_on = None


def upgrade():
    with op.batch_alter_table("scheduled_workouts", schema=None) as batch_op:
        batch_op.add_column(sa.Column("user_program_id", sa.Integer(), nullable=True))
        batch_op.create_index("ix_scheduled_workouts_user_program_id", ["user_program_id"])
        batch_op.create_foreign_key(
            "fk_scheduled_workouts_user_program",
            "user_programs",
            ["user_program_id"],
            ["id"],
        )

    # Backfill: cada fila de programa pasa a la asignación más reciente
    # del mismo usuario y programa iniciada antes de crearse la fila
    op.execute("""
        UPDATE scheduled_workouts
        SET user_program_id = (
            SELECT up.id FROM user_programs up
            WHERE up.user_id = scheduled_workouts.user_id
              AND up.program_id = scheduled_workouts.program_id
              AND up.started_at <= scheduled_workouts.created_at
            ORDER BY up.started_at DESC, up.id DESC
            LIMIT 1
        )
        WHERE program_id IS NOT NULL AND user_program_id IS NULL
    """)


def downgrade():
    with op.batch_alter_table("scheduled_workouts", schema=None) as batch_op:
        batch_op.drop_constraint("fk_scheduled_workouts_user_program", type_="foreignkey")
        batch_op.drop_index("ix_scheduled_workouts_user_program_id")
        batch_op.drop_column("user_program_id")
