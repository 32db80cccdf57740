"""
Command-line interface for the storefront gateway.

Provides Click-based CLI commands for reading backend paths and
browsing the catalog.
"""

from storefront_gateway.cli.main import cli

__all__ = ["cli"]
