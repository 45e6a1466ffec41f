"""Upload record commands."""

import click

from ledgermap.cli.error_handling import handle_domain_error, require_user
from ledgermap.cli.options import parse_mapping
from ledgermap.domain.entities import UploadRecordView
from ledgermap.domain.errors import DomainError
from ledgermap.domain.upload_record import UploadRecordService


def _echo_record(record: UploadRecordView) -> None:
    click.echo(f"\nUpload record {record.id}")
    click.echo(f"  Account: {record.account_name}")
    click.echo(f"  Transactions: {record.transaction_count}")
    click.echo(f"  Created: {record.created_at}")
    click.echo(f"  Updated: {record.updated_at}")
    click.echo(f"  Columns: {', '.join(record.available_columns)}")
    click.echo("  Mapping:")
    if not record.mapping:
        click.echo("    (none)")
    for attribute, column in sorted(record.mapping.items()):
        click.echo(f"    {attribute:<12} -> {column}")


@click.group()
def record_group():
    """Inspect, remap and delete uploads."""
    pass


@record_group.command("show")
@click.argument("upload_record_id")
@click.pass_context
def show_record(ctx, upload_record_id: str) -> None:
    """Show an upload record and its mapping."""
    user_id = require_user(ctx)
    service = UploadRecordService(ctx.obj["db"])
    try:
        record = service.get(upload_record_id, user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    _echo_record(record)


@record_group.command("remap")
@click.argument("upload_record_id")
@click.option("--map", "mapping_pairs", multiple=True, help="Attribute mapping as attribute=Column")
@click.pass_context
def remap_record(ctx, upload_record_id: str, mapping_pairs: tuple[str, ...]) -> None:
    """Replace an upload's mapping and re-derive its transactions.

    Attributes left out of the new mapping are cleared on every transaction.

    Examples:
        ledgermap record remap REC --map vendor=Merchant --map description=Memo
    """
    user_id = require_user(ctx)
    mapping = parse_mapping(ctx, mapping_pairs)
    service = UploadRecordService(ctx.obj["db"])
    try:
        record = service.update(upload_record_id, user_id, mapping)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated mapping for upload record {record.id}")
    _echo_record(record)


@record_group.command("delete")
@click.argument("upload_record_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_record(ctx, upload_record_id: str, yes: bool) -> None:
    """Delete an upload record and every transaction it created."""
    user_id = require_user(ctx)
    service = UploadRecordService(ctx.obj["db"])
    try:
        record = service.get(upload_record_id, user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not yes and not click.confirm(
        f"Delete upload record {record.id} and its {record.transaction_count} transaction(s)?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        result = service.delete(upload_record_id, user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(
        f"Deleted upload record {record.id} and {result.deleted_transaction_count} transaction(s)"
    )


def register_commands(cli: click.Group) -> None:
    """Register upload record commands with main CLI."""
    cli.add_command(record_group, name="record")
