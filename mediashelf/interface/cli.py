"""CLI commands for the media shelf application."""

from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..browse.filters import (
    extract_filter_options,
    extract_numeric_options,
    get_added_year,
)
from ..browse.models import RecordView
from ..browse.services import FilterSystem
from ..catalog.models import item_from_record, to_number
from ..catalog.schema import validate_item
from ..catalog.store import CatalogStore, parse_payload, resolve_category
from ..core.config import AppInfo, Category, FilterConfig, ServerSettings
from ..core.exceptions import (
    MediaShelfError,
    ValidationError,
)
from ..core.log import setup_logging
from .display import CatalogDisplay

# Initialize Rich console and Typer app
console = Console()
app = typer.Typer(
    name=AppInfo.NAME,
    help=AppInfo.DESCRIPTION,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

display = CatalogDisplay(console)


def handle_error(error: Exception) -> None:
    """Centralized error handling."""
    if isinstance(error, ValidationError):
        display.show_error_message(error.message)
        for message in error.errors:
            console.print(f"  [red]- {escape(message)}[/red]")
    elif isinstance(error, MediaShelfError):
        display.show_error_message(str(error))
    else:
        display.show_error_message(f"Unexpected error: {str(error)}")

    raise typer.Exit(1)


def _store(ctx: typer.Context) -> CatalogStore:
    return CatalogStore(ctx.obj.get("data_dir"))


def _parse_filters(values: List[str]) -> Dict[str, str]:
    """Turn repeated 'dimension=value' options into a mapping."""
    filters = {}
    for value in values:
        dimension, sep, filter_value = value.partition("=")
        if not sep or not dimension.strip():
            raise typer.BadParameter(
                f"Expected dimension=value, got '{value}'", param_hint="--filter"
            )
        filters[dimension.strip()] = filter_value.strip()
    return filters


def build_views(category: Category, records: List[dict]) -> List[RecordView]:
    """Item views for a category; cinema items carry their movie/series type."""
    if category in (Category.MOVIES, Category.SERIES):
        item_type = "movie" if category is Category.MOVIES else "series"
        return [RecordView({"type": item_type, **record}) for record in records]
    return [RecordView(record) for record in records]


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    data_dir: Optional[Path] = typer.Option(
        None, "--data-dir", "-d", help="Directory holding the category JSON files"
    ),
):
    """Personal media collection catalog and admin API."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["data_dir"] = data_dir
    setup_logging(verbose)

    if ctx.invoked_subcommand and ctx.invoked_subcommand != "--help":
        display.show_app_header()


@app.command()
def serve(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on"),
    admin_key: Optional[str] = typer.Option(
        None, "--admin-key", help="Shared secret required for writes"
    ),
    cors_origin: Optional[str] = typer.Option(
        None, "--cors-origin", help="Origin allowed to call the API"
    ),
):
    """Run the admin API server."""
    import uvicorn

    from ..api.server import create_app

    try:
        settings = ServerSettings.from_env(
            data_dir=ctx.obj.get("data_dir"),
            admin_key=admin_key,
            host=host,
            port=port,
            cors_origin=cors_origin,
        )
    except ValueError as e:
        display.show_error_message(str(e))
        raise typer.Exit(1)

    display.show_server_config(
        settings.host, settings.port, str(settings.data_dir), settings.cors_origin
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


@app.command()
def browse(
    ctx: typer.Context,
    category: str = typer.Argument(help="books, movies, series or music"),
    filters: List[str] = typer.Option(
        [], "--filter", "-f", help="Filter as dimension=value (repeatable)"
    ),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Status filter"),
    sort: str = typer.Option(
        FilterConfig.DEFAULT_SORT, "--sort", help="Sort as field-direction, e.g. rating-desc"
    ),
):
    """List a collection through the page's filter and sort system."""
    try:
        resolved = resolve_category(category)
        records = _store(ctx).read_all(resolved)
        system = FilterSystem(
            build_views(resolved, records), FilterConfig.dimensions_for(resolved)
        )

        for dimension, value in _parse_filters(filters).items():
            if dimension not in system.filters.dimensions:
                display.show_warning_message(
                    f"'{dimension}' is not a filter on this page; ignored"
                )
            system.select_filter(dimension, value)
        if status:
            system.change_status(status)
        system.change_sort(sort)

        items = [item_from_record(resolved, view.record) for view in system.visible_items()]
        display.show_items_table(resolved, items, system.stats)

    except MediaShelfError as e:
        handle_error(e)


@app.command()
def options(
    ctx: typer.Context,
    category: str = typer.Argument(help="books, movies, series or music"),
):
    """Show the filter chip values available for a collection."""
    try:
        resolved = resolve_category(category)
        views = build_views(resolved, _store(ctx).read_all(resolved))

        chip_values = {}
        for dimension in FilterConfig.dimensions_for(resolved):
            if dimension == "added":
                years = {get_added_year(view.get_field(dimension)) for view in views}
                chip_values[dimension] = sorted((y for y in years if y), reverse=True)
            elif dimension == "year":
                years = extract_numeric_options(
                    views, lambda view: to_number(view.get_field(dimension))
                )
                chip_values[dimension] = [f"{year:g}" for year in years]
            else:
                chip_values[dimension] = extract_filter_options(
                    views, lambda view, d=dimension: view.get_field(d)
                )

        display.show_filter_options(resolved, chip_values)

    except MediaShelfError as e:
        handle_error(e)


@app.command()
def show(
    ctx: typer.Context,
    category: str = typer.Argument(help="books, movies, series or music"),
    item_id: str = typer.Argument(help="Item identifier, e.g. book-3"),
):
    """Show one catalog item."""
    try:
        resolved = resolve_category(category)
        record = _store(ctx).get(resolved, item_id)
        display.show_item_details(item_from_record(resolved, record))

    except MediaShelfError as e:
        handle_error(e)


@app.command()
def add(
    ctx: typer.Context,
    category: str = typer.Argument(help="books, movies, series or music"),
    payload: str = typer.Argument(help='Item fields as a JSON object, e.g. \'{"title": "T"}\''),
):
    """Validate and add an item to a collection."""
    try:
        body = parse_payload(payload)
        created = _store(ctx).create(resolve_category(category), body)
        display.show_success_message(f"Created {created['id']}: {created.get('title')}")

    except MediaShelfError as e:
        handle_error(e)


@app.command()
def remove(
    ctx: typer.Context,
    category: str = typer.Argument(help="books, movies, series or music"),
    item_id: str = typer.Argument(help="Item identifier, e.g. book-3"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation"),
):
    """Delete an item from a collection."""
    try:
        resolved = resolve_category(category)
        store = _store(ctx)
        record = store.get(resolved, item_id)

        if not yes and not typer.confirm(f"Delete {item_id} ({record.get('title')})?"):
            return

        deleted = store.delete(resolved, item_id)
        display.show_success_message(f"Deleted {item_id}: {deleted.get('title')}")

    except MediaShelfError as e:
        handle_error(e)


@app.command()
def validate(
    ctx: typer.Context,
    category: str = typer.Argument("all", help="books, movies, series, music or all"),
):
    """Validate every stored record against its category schema."""
    try:
        categories = list(Category) if category == "all" else [resolve_category(category)]
        store = _store(ctx)

        failed = False
        for resolved in categories:
            results = [
                (str(record.get("id", f"#{index}")), validate_item(resolved, record))
                for index, record in enumerate(store.read_all(resolved))
            ]
            display.show_validation_report(resolved, results)
            failed = failed or any(not result.is_valid for _, result in results)

        if failed:
            raise typer.Exit(1)

    except MediaShelfError as e:
        handle_error(e)
