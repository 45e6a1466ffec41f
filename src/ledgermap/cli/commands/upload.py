"""CSV upload command."""

import csv
from pathlib import Path

import click

from ledgermap.cli.error_handling import handle_domain_error, require_user
from ledgermap.cli.options import parse_mapping
from ledgermap.domain.errors import DomainError
from ledgermap.domain.ingestion import IngestionService


def read_csv_rows(csv_file_path: str) -> list[dict[str, str | None]]:
    """Read a CSV file into one dict per row, keyed by header name.

    The delimiter is sniffed from the first kilobyte; a UTF-8 BOM is ignored.
    """
    with open(Path(csv_file_path), "r", encoding="utf-8-sig", newline="") as f:
        sample = f.read(1024)
        f.seek(0)
        try:
            delimiter = csv.Sniffer().sniff(sample).delimiter
        except csv.Error:
            delimiter = ","

        reader = csv.DictReader(f, delimiter=delimiter)
        if reader.fieldnames is None:
            raise ValueError("CSV file has no columns")
        # Overflow cells land under a None key; they have no column to map to
        return [{key: value for key, value in row.items() if key is not None} for row in reader]


@click.command("upload")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--account", "account_id", required=True, help="Account ID to upload into")
@click.option(
    "--map",
    "mapping_pairs",
    multiple=True,
    help="Attribute mapping as attribute=Column (date, amount, vendor, category, description, status)",
)
@click.pass_context
def upload_csv(ctx, csv_file: str, account_id: str, mapping_pairs: tuple[str, ...]):
    """Upload transactions from a CSV file.

    Examples:
        ledgermap --user USER upload bank.csv --account ACCT --map date=Date --map amount=Amount
    """
    user_id = require_user(ctx)
    mapping = parse_mapping(ctx, mapping_pairs)

    try:
        rows = read_csv_rows(csv_file)
    except (ValueError, csv.Error) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    service = IngestionService(ctx.obj["db"])
    try:
        result = service.upload(account_id=account_id, mapping=mapping, rows=rows, user_id=user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nUpload complete:")
    click.echo(f"  Upload record: {result.upload_record_id}")
    click.echo(f"  Transactions: {result.transaction_count}")


def register_commands(cli):
    """Register upload command with main CLI."""
    cli.add_command(upload_csv)
