"""CLI commands for ledgermap."""
