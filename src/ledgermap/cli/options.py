"""Parsing helpers for list-valued and mapping CLI options."""

from typing import Iterable

import click

# Category filter value meaning "transactions without a category"
UNCATEGORIZED = "none"


def split_values(values: Iterable[str]) -> list[str]:
    """Flatten repeatable options that may also hold comma-separated lists."""
    result = []
    for value in values:
        result.extend(part.strip() for part in value.split(",") if part.strip())
    return result


def parse_mapping(ctx: click.Context, pairs: Iterable[str]) -> dict[str, str]:
    """Parse ``attr=Column`` pairs into a mapping, exiting on bad syntax."""
    mapping = {}
    for pair in pairs:
        attribute, sep, column = pair.partition("=")
        if not sep or not attribute.strip():
            click.echo(f"Error: Invalid mapping '{pair}'. Expected attribute=Column", err=True)
            ctx.exit(1)
        mapping[attribute.strip().lower()] = column.strip()
    return mapping


def parse_category_ids(values: Iterable[str]) -> tuple:
    """Turn category options into IDs, mapping 'none' to None."""
    return tuple(
        None if value.lower() == UNCATEGORIZED else value for value in split_values(values)
    )
