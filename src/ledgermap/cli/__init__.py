"""Command-line interface for ledgermap."""
