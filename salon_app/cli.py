from datetime import datetime

import click
from flask import current_app
from flask.cli import with_appcontext

from salon_app.extensions import db
from salon_app.schema import render_ddl, reset_database
from salon_app.services.stats import refresh_monthly_stats


@click.command("init-db")
@click.option(
    "--yes", is_flag=True, help="Skip the confirmation prompt (drops all data)."
)
@with_appcontext
def init_db_command(yes):
    """Drop the database, create every table and seed the roles."""
    url = db.engine.url.render_as_string(hide_password=True)
    if not yes:
        click.confirm(f"This drops ALL data in {url}. Continue?", abort=True)
    tables = reset_database(db.engine)
    click.echo(f"Created {len(tables)} tables in {url}")


@click.command("dump-schema")
@click.option(
    "--dialect",
    type=click.Choice(["mysql", "sqlite"]),
    default="mysql",
    show_default=True,
)
@click.option("--database", default=None, help="Prefix the script with drop/create.")
@click.option("--output", "-o", type=click.File("w"), default="-")
def dump_schema_command(dialect, database, output):
    """Write the CREATE TABLE script in dependency order."""
    output.write(render_ddl(dialect=dialect, database=database))


@click.command("refresh-stats")
@click.option("--year", type=int, default=None)
@click.option("--month", type=int, default=None)
@with_appcontext
def refresh_stats_command(year, month):
    """Recount monthly users and revenue (defaults to the current month)."""
    today = datetime.now()
    result = refresh_monthly_stats(
        db.session, year or today.year, month or today.month
    )
    current_app.logger.info(f"Monthly stats refreshed: {result}")
    click.echo(
        f"{result['year']}-{result['month']:02d}: "
        f"{result['new_users']} new users, {result['active_users']} active, "
        f"revenue for {len(result['revenue'])} salon(s)"
    )


def init_cli(app):
    for command in (init_db_command, dump_schema_command, refresh_stats_command):
        app.cli.add_command(command)
