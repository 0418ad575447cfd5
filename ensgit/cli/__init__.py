"""Command-line interface for git-ensembl."""
