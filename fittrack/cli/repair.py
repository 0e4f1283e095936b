# fittrack/cli/repair.py
from datetime import datetime, timedelta

import click
from flask.cli import AppGroup
from sqlalchemy import Date, bindparam, text

from fittrack import db

repair_group = AppGroup("repair", help="Reparaciones de datos heredados")


@repair_group.command("scheduled-dates")
@click.option("--dry-run", is_flag=True, help="Solo muestra lo que se cambiaría.")
def repair_scheduled_dates(dry_run):
    """
    Rellena scheduled_workouts.scheduled_date NULL (escrituras antiguas con bug).
    La fecha se deriva del día de programa: día 1 = hoy, día 2 = mañana, etc.
    Trabaja con SQL directo porque el modelo ya declara la columna NOT NULL.
    """
    today = datetime.utcnow().date()
    with db.engine.begin() as conn:
        rows = conn.execute(text(
            "SELECT id, program_day FROM scheduled_workouts WHERE scheduled_date IS NULL"
        )).all()
        click.secho(f"Encontrados {len(rows)} entrenos sin fecha.", fg="cyan")

        for row_id, program_day in rows:
            when = today + timedelta(days=(program_day or 1) - 1)
            click.echo(f"  id={row_id} day={program_day} -> {when.isoformat()}")
            if not dry_run:
                conn.execute(
                    text("UPDATE scheduled_workouts SET scheduled_date = :d WHERE id = :id")
                    .bindparams(bindparam("d", type_=Date)),
                    {"d": when, "id": row_id},
                )

    if dry_run:
        click.secho("dry-run: sin cambios.", fg="yellow")
    else:
        click.secho(f"Hecho. Actualizados: {len(rows)}", fg="green")


@repair_group.command("completed-dates")
def repair_completed_dates():
    """
    Rellena completed_workouts.scheduled_date en filas antiguas usando
    la fecha de completed_at.
    """
    with db.engine.begin() as conn:
        result = conn.execute(text(
            "UPDATE completed_workouts SET scheduled_date = DATE(completed_at) "
            "WHERE scheduled_date IS NULL"
        ))
    click.secho(f"Hecho. Actualizados: {result.rowcount}", fg="green")
