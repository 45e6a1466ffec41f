"""Transaction listing command."""

from decimal import Decimal

import click

from ledgermap.cli.date_filters import PERIODS, period_options, resolve_cli_date_range
from ledgermap.cli.error_handling import handle_domain_error, require_user
from ledgermap.cli.options import parse_category_ids, split_values
from ledgermap.domain.entities import TransactionFilter
from ledgermap.domain.errors import DomainError
from ledgermap.domain.query import DEFAULT_LIMIT, TransactionQueryService
from ledgermap.utils.amount_parser import parse_amount


def _parse_amount_option(ctx, value: str | None, label: str) -> Decimal | None:
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.command("transactions")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date, inclusive (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--account", "accounts", multiple=True, help="Account ID (repeatable or comma-separated)")
@click.option("--vendor", "vendors", multiple=True, help="Vendor/description search term (any matches)")
@click.option(
    "--category",
    "categories",
    multiple=True,
    help="Category ID, or 'none' for uncategorized (repeatable or comma-separated)",
)
@click.option("--min-amount", help="Minimum amount, inclusive")
@click.option("--max-amount", help="Maximum amount, inclusive")
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.option("--limit", type=int, default=DEFAULT_LIMIT, show_default=True, help="Page size")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    accounts: tuple[str, ...],
    vendors: tuple[str, ...],
    categories: tuple[str, ...],
    min_amount: str | None,
    max_amount: str | None,
    page: int,
    limit: int,
    **period_kwargs,
):
    """List your transactions, most recent first.

    Filters combine with AND; multiple vendor terms or categories match if
    any of them does.

    Examples:
        ledgermap transactions --last-month --vendor uber --vendor "whole foods"
        ledgermap transactions --category none,CAT_ID --min-amount 20
    """
    user_id = require_user(ctx)
    period_flags = {period: period_kwargs[period.replace("-", "_")] for period in PERIODS}
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )

    transaction_filter = TransactionFilter(
        date_from=start,
        date_to=end,
        account_ids=tuple(split_values(accounts)),
        vendors=tuple(split_values(vendors)),
        category_ids=parse_category_ids(categories),
        amount_min=_parse_amount_option(ctx, min_amount, "minimum amount"),
        amount_max=_parse_amount_option(ctx, max_amount, "maximum amount"),
    )

    service = TransactionQueryService(ctx.obj["db"])
    try:
        result = service.query(user_id, page=page, limit=limit, transaction_filter=transaction_filter)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not result.transactions:
        click.echo(f"No transactions found on page {page} ({result.total} total).")
        return

    click.echo(f"\nShowing {len(result.transactions)} of {result.total} transaction(s), page {page}:")
    click.echo("-" * 110)
    click.echo(
        f"{'Date':<12} {'Amount':>12} {'Status':<10} {'Account':<18} {'Vendor':<22} {'Category':<16} {'Description':<20}"
    )
    click.echo("-" * 110)
    for txn in result.transactions:
        category = txn.category_name or txn.category_label or ""
        click.echo(
            f"{txn.date.date().isoformat():<12} {txn.amount:>12,.2f} {txn.status.value:<10} "
            f"{txn.account_name[:18]:<18} {(txn.vendor_label or '')[:22]:<22} "
            f"{category[:16]:<16} {(txn.description or '')[:20]:<20}"
        )


def register_commands(cli):
    """Register transactions command with main CLI."""
    cli.add_command(list_transactions)
