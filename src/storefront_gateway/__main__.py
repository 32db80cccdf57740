"""
CLI entry point for running storefront_gateway as a module.

Usage: python -m storefront_gateway [OPTIONS] COMMAND [ARGS]...
"""

from storefront_gateway.cli.main import cli

if __name__ == "__main__":
    cli()
