"""
Rich terminal output helpers for CLI.

Provides functions for printing catalog tables and status messages
using the Rich library.
"""

import json
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from storefront_gateway.core.models import Catalog
from storefront_gateway.core.normalize import record_id

# Console instance for all output
console = Console()


def format_price(value: Any) -> str:
    """Format a product price, leaving unparseable values as-is."""
    try:
        return f"{float(value):,.2f}"
    except (TypeError, ValueError):
        return str(value) if value is not None else "-"


def print_products(products: list[dict[str, Any]], title: str = "Products") -> None:
    """Print a table of product records.

    Args:
        products: Product dicts as returned by the backend.
        title: Table title.
    """
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Brand")
    table.add_column("Category")
    table.add_column("Price", justify="right")
    table.add_column("Featured", justify="center")

    for product in products:
        featured = Text("yes", style="green") if product.get("featured") else Text("")
        table.add_row(
            record_id(product) or "-",
            str(product.get("name") or product.get("title") or "-"),
            str(product.get("brand") or "-"),
            str(product.get("category") or "-"),
            format_price(product.get("price")),
            featured,
        )

    console.print(table)


def print_records(records: list[dict[str, Any]], title: str) -> None:
    """Print a table of category or brand records."""
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for record in records:
        description = str(record.get("description") or "")
        table.add_row(
            record_id(record) or "-",
            str(record.get("name") or "-"),
            description[:50] + "..." if len(description) > 50 else description,
        )

    console.print(table)


def print_catalog(catalog: Catalog) -> None:
    """Print every section of a loaded catalog, then any load failures."""
    print_products(catalog.products)
    print_records(catalog.categories, "Categories")
    print_records(catalog.brands, "Brands")

    counts = catalog.counts
    console.print(
        f"[bold]Totals:[/] {counts['products']} products, "
        f"{counts['categories']} categories, {counts['brands']} brands"
    )
    for resource, error in catalog.failures.items():
        print_warning(f"Could not load {resource}: {error}")


def print_payload(payload: Any) -> None:
    """Pretty-print a JSON payload."""
    console.print_json(json.dumps(payload, default=str))


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[cyan]Info:[/] {message}")
