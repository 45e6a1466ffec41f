"""Main CLI entry point."""

import logging

import click

from ledgermap.database.factories import create_database
from ledgermap.cli.commands import record, transactions, upload


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides LEDGERMAP_DB_PATH environment variable)",
    envvar="LEDGERMAP_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL; takes precedence over --db-path",
    envvar="LEDGERMAP_DATABASE_URL",
)
@click.option("--user", "user_id", help="Acting user ID", envvar="LEDGERMAP_USER")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, database_url: str | None, user_id: str | None, verbose: bool):
    """Ledgermap - upload bank transactions, map their columns, and browse them.

    Upload CSV exports against an account with a column mapping, change the
    mapping later without re-uploading, and filter the resulting transactions.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=database_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id
        ctx.call_on_close(db.disconnect)


upload.register_commands(cli)
record.register_commands(cli)
transactions.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
