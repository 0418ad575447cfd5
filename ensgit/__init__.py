"""Convenience tooling for working with groups of Ensembl git repositories."""

__version__ = "0.3.0"
