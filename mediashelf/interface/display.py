"""Rich console display components for the media shelf."""

from typing import Dict, List, Optional, Sequence, Tuple

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.markup import escape
from rich.text import Text

from ..catalog.models import CatalogItem, ValidationResult
from ..core.config import AppInfo, Category
from ..core.security import sanitize_url


class CatalogDisplay:
    """Handles all rich console output for catalog operations."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize with optional console instance."""
        self.console = console or Console()

    def show_app_header(self) -> None:
        """Display application header with branding."""
        header_text = Text()
        header_text.append(AppInfo.NAME.upper(), style="bold blue")
        header_text.append(f" v{AppInfo.VERSION}", style="dim")
        header_text.append(f"\n{AppInfo.DESCRIPTION}", style="italic")

        panel = Panel(Align.center(header_text), border_style="blue", padding=(1, 2))
        self.console.print(panel)

    def show_items_table(
        self, category: Category, items: Sequence[CatalogItem], stats: str
    ) -> None:
        """Display catalog items in a formatted table."""
        table = Table(title=f"{category.value.capitalize()} ({stats})")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Title", style="magenta")
        table.add_column(category.creator_field.capitalize(), style="blue")
        table.add_column("Year", justify="right", style="green")
        table.add_column("Country", style="yellow")
        table.add_column("Rating", justify="right", style="green")
        table.add_column("Status", style="dim")
        table.add_column("Added", style="dim")

        for item in items:
            table.add_row(
                escape(item.id),
                escape(item.title),
                escape(item.creator or ""),
                str(item.year) if item.year else "",
                escape(item.country or ""),
                item.rating_str,
                escape(getattr(item, "status", None) or ""),
                escape(item.added_date or ""),
            )

        self.console.print(table)

        if not items:
            self.console.print("[yellow]No items match the current filters.[/yellow]")

    def show_item_details(self, item: CatalogItem) -> None:
        """Display one item in a panel."""
        info_lines = [f"[bold blue]{escape(item.title)}[/bold blue]"]

        if item.creator:
            info_lines.append(f"By: [magenta]{escape(item.creator)}[/magenta]")
        if item.year:
            info_lines.append(f"Year: [green]{item.year}[/green]")
        if item.country:
            info_lines.append(f"Country: [yellow]{escape(item.country)}[/yellow]")
        if item.rating is not None:
            info_lines.append(f"Rating: [green]{item.rating_str}[/green]")
        status = getattr(item, "status", None)
        if status:
            info_lines.append(f"Status: [cyan]{status}[/cyan]")
        if item.added_date:
            info_lines.append(f"Added: [dim]{item.added_date}[/dim]")

        cover = sanitize_url(item.cover)
        if cover:
            info_lines.append(f"Cover: [dim]{escape(cover)}[/dim]")

        self.console.print(Panel("\n".join(info_lines), title=item.id, border_style="blue"))

        if item.notes:
            notes_text = item.notes[:300] + "..." if len(item.notes) > 300 else item.notes
            self.console.print(Panel(escape(notes_text), title="Notes", border_style="dim"))

    def show_filter_options(self, category: Category, options: Dict[str, List[str]]) -> None:
        """Display available filter chip values per dimension."""
        table = Table(title=f"Filter options: {category.value}")
        table.add_column("Dimension", style="cyan", no_wrap=True)
        table.add_column("Values", style="magenta")

        for dimension, values in options.items():
            table.add_row(dimension, escape(", ".join(values)) if values else "-")

        self.console.print(table)

    def show_validation_report(
        self, category: Category, results: List[Tuple[str, ValidationResult]]
    ) -> None:
        """Display validation failures for (record id, ValidationResult) pairs."""
        failures = [(item_id, result) for item_id, result in results if not result.is_valid]
        if not failures:
            self.show_success_message(
                f"{category.value}: {len(results)} records validated successfully"
            )
            return

        table = Table(title=f"Validation errors: {category.value}")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Errors", style="red")
        for item_id, result in failures:
            table.add_row(escape(item_id), escape("\n".join(result.errors)))
        self.console.print(table)
        self.show_error_message(
            f"{category.value}: {len(failures)} of {len(results)} records failed validation"
        )

    def show_server_config(self, host: str, port: int, data_dir: str, cors_origin: str) -> None:
        """Display admin API configuration."""
        config_text = " | ".join(
            [f"URL: http://{host}:{port}", f"Data: {data_dir}", f"CORS: {cors_origin}"]
        )
        endpoints = "\n".join(
            [
                "GET    /api/{category}",
                "GET    /api/{category}/{id}",
                "POST   /api/{category}",
                "PUT    /api/{category}/{id}",
                "DELETE /api/{category}/{id}",
                f"categories: {', '.join(Category.names())}",
            ]
        )
        panel = Panel.fit(
            f"[bold blue]Admin API[/bold blue]\n{config_text}\n[dim]{endpoints}[/dim]",
            border_style="blue",
        )
        self.console.print(panel)

    def show_success_message(self, message: str) -> None:
        """Display a success message."""
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def show_warning_message(self, message: str) -> None:
        """Display a warning message."""
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def show_error_message(self, message: str) -> None:
        """Display an error message."""
        self.console.print(f"[red]✗ {escape(message)}[/red]")
