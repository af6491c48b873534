"""
Project: Retail Sales Analytics
Focus: `retail-analytics` command line entry point
"""

import click
import pandas as pd
from sqlalchemy.exc import DBAPIError, IntegrityError

from retail_analytics import __version__
from retail_analytics.bootstrap import build_database
from retail_analytics.config import HIGH_VALUE_THRESHOLD, get_engine
from retail_analytics.procedures import customer_orders
from retail_analytics.reports import REPORTS, export_reports, run_all, run_report
from retail_analytics.schema import drop_schema

# pandas wraps driver errors from read_sql in its own DatabaseError.
QUERY_ERRORS = (DBAPIError, pd.errors.DatabaseError)


def _query_failed(error) -> click.ClickException:
    reason = str(error).splitlines()[0] if str(error) else type(error).__name__
    return click.ClickException(f"Query failed ({reason}). Did you run 'init'?")


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--db-url",
    envvar="RETAIL_DB_URL",
    default=None,
    help="SQLAlchemy database URL (defaults to RETAIL_DB_URL or sqlite:///retail_sales.db).",
)
@click.pass_context
def cli(ctx, db_url):
    """Retail Sales Analytics - schema, sample data and SQL reports."""
    ctx.obj = get_engine(db_url)


@cli.command("init")
@click.option("--reset", is_flag=True, help="Drop existing tables and views first.")
@click.option(
    "--threshold",
    type=float,
    default=HIGH_VALUE_THRESHOLD,
    show_default=True,
    help="order_total cut-off for high_value_orders.",
)
@click.pass_obj
def init(engine, reset, threshold):
    """Create tables, load sample data, build the view and reporting table."""
    try:
        build_database(engine, threshold, reset=reset)
    except IntegrityError as e:
        raise click.ClickException(
            f"Sample data rejected ({e.orig}). Use --reset to rebuild the database."
        )
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo("Database initialized successfully.")


@cli.command("report")
@click.argument("name", required=False, type=click.Choice(list(REPORTS)))
@click.pass_obj
def report(engine, name):
    """Print one report, or all of them."""
    try:
        frames = {name: run_report(engine, name)} if name else run_all(engine)
    except QUERY_ERRORS as e:
        raise _query_failed(e)

    for report_name, df in frames.items():
        click.echo(f"\n== {report_name} ==")
        click.echo(df.to_string(index=False) if not df.empty else "(no rows)")


@cli.command("export")
@click.argument("out_dir", type=click.Path(file_okay=False))
@click.pass_obj
def export(engine, out_dir):
    """Export every report to CSV files in OUT_DIR."""
    try:
        frames = run_all(engine)
    except QUERY_ERRORS as e:
        raise _query_failed(e)
    for path in export_reports(frames, out_dir):
        click.echo(f"Wrote {path}")


@cli.command("customer-orders")
@click.argument("customer_id", type=int)
@click.pass_obj
def customer_orders_cmd(engine, customer_id):
    """Show every order of CUSTOMER_ID with its value."""
    try:
        df = customer_orders(engine, customer_id)
    except QUERY_ERRORS as e:
        raise _query_failed(e)
    if df.empty:
        click.echo(f"No orders for customer {customer_id}.")
        return
    click.echo(df.to_string(index=False))


@cli.command("drop")
@click.confirmation_option(prompt="Drop all retail tables and views?")
@click.pass_obj
def drop(engine):
    """Drop the routine, the reporting table, the view and all core tables."""
    drop_schema(engine)
    click.echo("Retail schema dropped.")


if __name__ == "__main__":
    cli()
