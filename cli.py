# cli.py
import argparse
import sys
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

import requests

from sdk.productclient import ProductClient

console = Console()


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=9)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A"))[:12],
            p.get("name", "N/A"),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        )
    console.print(table)


def show_pagination(pagination: Optional[Dict[str, Any]]):
    if not pagination:
        return
    console.print(
        f"[dim]Page {pagination['currentPage']} of {pagination['totalPages']} "
        f"({pagination['totalProducts']} products)[/dim]"
    )


def show_product(product: Dict[str, Any], title: str = "Product"):
    lines = [
        f"[bold]{product.get('name', 'N/A')}[/bold]  [dim]{product.get('id', '')}[/dim]",
        product.get("description") or "[italic]no description[/italic]",
        f"Price: [green]${product.get('price', 0):.2f}[/green]",
        f"Category: {product.get('category', 'N/A')}",
        f"In stock: {'yes' if product.get('inStock') else 'no'}",
    ]
    if product.get("updatedAt"):
        lines.append(f"[dim]Updated {product['updatedAt']}[/dim]")
    console.print(Panel.fit("\n".join(lines), title=title, border_style="blue"))


def show_stats(stats: Dict[str, Any]):
    table = Table(title="📊 Catalog Stats", box=box.ROUNDED, header_style="bold yellow", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total products", str(stats["totalProducts"]))
    table.add_row("In stock", str(stats["inStock"]))
    table.add_row("Out of stock", str(stats["outOfStock"]))
    table.add_row("Average price", f"${stats['averagePrice']:.2f}")
    table.add_row("Price range", f"${stats['priceRange']['min']:.2f} - ${stats['priceRange']['max']:.2f}")
    for category, count in stats["categoryBreakdown"].items():
        table.add_row(f"  {category}", str(count))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def _error_message(e: requests.exceptions.HTTPError) -> str:
    try:
        body = e.response.json()
    except ValueError:
        return str(e)
    message = body.get("message", str(e))
    for err in body.get("errors", []):
        message += f"\n  • {err}"
    return message


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the decoded envelope, or None after printing the failure.
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except requests.exceptions.HTTPError as e:
        console.print(show_status(f"Error: {_error_message(e)}", False))
        return None
    except requests.exceptions.RequestException as e:
        console.print(show_status(f"Error: {e}", False))
        return None

    if isinstance(result, dict) and result.get("success") is False:
        console.print(show_status(f"Error: {result.get('message')}", False))
        return None
    if success_msg:
        console.print(show_status(success_msg, True))
    return result


def _in_stock_arg(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    return value.lower() in ("true", "yes", "1")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product catalog CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000", help="API base URL")
    parser.add_argument("--api-key", help="Value for the X-API-Key header (needed for writes)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--category", help="Filter by category")
    lp.add_argument("--search", help="Filter by name substring")
    lp.add_argument("--in-stock", choices=["true", "false"], help="Filter by stock status")
    lp.add_argument("--page", type=int, default=1)
    lp.add_argument("--limit", type=int, default=10)

    sp = subparsers.add_parser("search", help="Search names and descriptions")
    sp.add_argument("q", help="Search term")
    sp.add_argument("--category", help="Restrict to one category")

    subparsers.add_parser("stats", help="Show catalog statistics")

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("product_id")

    for name, help_text in (("create", "Create a product"), ("update", "Update a product")):
        wp = subparsers.add_parser(name, help=help_text)
        if name == "update":
            wp.add_argument("product_id")
        wp.add_argument("--name", required=True)
        wp.add_argument("--price", type=float, required=True)
        wp.add_argument("--category", required=True)
        wp.add_argument("--description")
        wp.add_argument("--in-stock", choices=["true", "false"])

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("product_id")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)

    if args.command == "list":
        resp = try_api(c.list_products, args.category, args.search,
                       _in_stock_arg(args.in_stock), args.page, args.limit)
        if resp:
            show_products(resp["data"])
            show_pagination(resp.get("pagination"))

    elif args.command == "search":
        resp = try_api(c.search_products, args.q, args.category)
        if resp:
            show_products(resp["data"], title=f"🔍 Results for '{resp['searchTerm']}' ({resp['count']})")

    elif args.command == "stats":
        resp = try_api(c.get_stats)
        if resp:
            show_stats(resp["data"])

    elif args.command == "get":
        resp = try_api(c.get_product, args.product_id)
        if resp:
            show_product(resp["data"])

    elif args.command == "create":
        resp = try_api(c.create_product, args.name, args.price, args.category,
                       args.description, _in_stock_arg(args.in_stock), success_msg="Product created")
        if resp:
            show_product(resp["data"], title="Created")

    elif args.command == "update":
        resp = try_api(c.update_product, args.product_id, args.name, args.price, args.category,
                       args.description, _in_stock_arg(args.in_stock), success_msg="Product updated")
        if resp:
            show_product(resp["data"], title="Updated")

    elif args.command == "delete":
        resp = try_api(c.delete_product, args.product_id, success_msg="Product deleted")
        if resp:
            show_product(resp["data"], title="Deleted")

    return 0 if resp else 1


if __name__ == "__main__":
    sys.exit(main())
