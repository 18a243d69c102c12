# cli.py
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pycatalog import CatalogClient, CatalogAPIError

console = Console()
c = CatalogClient(base_url=os.getenv("CATALOG_URL", "http://127.0.0.1:8085"))

# Fields a user can edit from the update menu
EDITABLE_FIELDS = [
    "name", "shortName", "description", "categoryId",
    "ibuMin", "ibuMax", "abvMin", "abvMax", "srmMin", "srmMax",
    "ogMin", "fgMin", "fgMax",
]

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="🍺 Beer Styles",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6, justify="right")
    table.add_column("Category", width=8, justify="right")
    table.add_column("Name", style="bold", width=40)
    table.add_column("Short name", width=20)
    table.add_column("Details", width=16)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            str(p.get("categoryId", "-")),
            str(p.get("name", "N/A")),
            str(p.get("shortName", "N/A")),
            p.get("details", f"/products/{p.get('id')}")
        )
    console.print(table)


def _range(product: Dict[str, Any], low: str, high: Optional[str] = None) -> str:
    lo = product.get(low) or "?"
    if high is None:
        return str(lo)
    return f"{lo} - {product.get(high) or '?'}"


def show_product(product: Dict[str, Any]):
    category = product.get("category") or {}
    if isinstance(category, dict):
        category_label = f"{category.get('name', '-')} (#{category.get('id', product.get('categoryId', '-'))})"
    else:
        category_label = str(category)

    specs = Table(box=box.SIMPLE, show_header=False)
    specs.add_column("Field", style="bold cyan")
    specs.add_column("Value")
    specs.add_row("Short name", str(product.get("shortName", "-")))
    specs.add_row("Category", category_label)
    specs.add_row("IBU", _range(product, "ibuMin", "ibuMax"))
    specs.add_row("ABV", _range(product, "abvMin", "abvMax"))
    specs.add_row("SRM", _range(product, "srmMin", "srmMax"))
    specs.add_row("OG", _range(product, "ogMin"))
    specs.add_row("FG", _range(product, "fgMin", "fgMax"))

    console.print(Panel(specs, title=f"#{product.get('id')} {product.get('name', '')}", border_style="cyan"))
    if product.get("description"):
        console.print(Panel(str(product["description"]), title="Description", border_style="dim"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API and connection errors update status_message and return None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
        return result
    except (CatalogAPIError, OSError) as e:
        status_message = f"Error: {e}"
        return None


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    return WordCompleter([str(p.get("id")) for p in product_cache], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_product_id() -> Optional[int]:
    raw = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Product IDs are whole numbers.[/red]")
        return None


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🍺 brewcatalog",
        "[bold blue]Beer style catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())
    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in [
            ("1", "📦 List products"),
            ("2", "ℹ️ Get product by ID"),
            ("3", "➕ Add product"),
            ("4", "✏️ Update product"),
            ("q", "👋 Quit"),
        ]:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "4", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            pid = ask_product_id()
            if pid is not None:
                resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
                if resp:
                    show_product(resp)

        elif choice == "3":
            name = prompt_with_autocomplete("Name")
            short_name = prompt_with_autocomplete("Short name")
            category_id = IntPrompt.ask("Category ID", default=1)
            category_name = Prompt.ask("Category name", default="")
            description = Prompt.ask("Description", default="")
            payload = {
                "name": name,
                "shortName": short_name,
                "categoryId": category_id,
                "category": {"id": category_id, "name": category_name},
                "description": description,
            }
            resp = try_api(c.create_product, payload, success_msg=f"Product '{name}' added")
            if resp:
                show_product(resp)
                product_cache = []

        elif choice == "4":
            pid = ask_product_id()
            if pid is None:
                continue
            field = prompt_with_autocomplete(
                "Field to change", completer=WordCompleter(EDITABLE_FIELDS, ignore_case=True)
            ).strip()
            if not field:
                continue
            value: Any = prompt_with_autocomplete(f"New value for {field}")
            if field == "categoryId":
                try:
                    value = int(value)
                except ValueError:
                    console.print("[red]categoryId must be a number.[/red]")
                    continue
            resp = try_api(c.update_product, pid, {field: value}, success_msg=f"Product {pid} updated")
            if resp:
                show_product(resp)
                product_cache = []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Cheers! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
