"""link completed_workouts to the calendar occurrence"""

from alembic import op
import sqlalchemy as sa

# Revisiones
revision = "8c4e2d51f7b0"
down_revision = "3b1f0c7a9d21"
branch_labels = None
depends_on = None


def upgrade():
    # 1) Columnas nuevas (nullable: el histórico antiguo no las tiene)
    with op.batch_alter_table("completed_workouts", schema=None) as batch_op:
        batch_op.add_column(sa.Column("scheduled_date", sa.Date(), nullable=True))
        batch_op.add_column(sa.Column("scheduled_workout_id", sa.Integer(), nullable=True))
        batch_op.create_foreign_key(
            "fk_completed_workouts_scheduled_workout",
            "scheduled_workouts",
            ["scheduled_workout_id"],
            ["id"],
        )

    # 2) Backfill: la fecha de calendario se aproxima con la de completado
    op.execute("""
        UPDATE completed_workouts
        SET scheduled_date = DATE(completed_at)
        WHERE scheduled_date IS NULL
    """)
    # Sin índice único (user, workout, fecha): completar -> desmarcar -> completar
    # añade una fila nueva cada vez.


def downgrade():
    with op.batch_alter_table("completed_workouts", schema=None) as batch_op:
        batch_op.drop_constraint("fk_completed_workouts_scheduled_workout", type_="foreignkey")
        batch_op.drop_column("scheduled_workout_id")
        batch_op.drop_column("scheduled_date")
