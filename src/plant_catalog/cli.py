"""CLI for the plant catalog (search, facets, details, MCP server)."""

import json
from dataclasses import asdict
from typing import Annotated

import typer
from loguru import logger

from plant_catalog.catalog import PlantCatalog
from plant_catalog.config import DEFAULT_RENDER_WINDOW, resolve_data_source
from plant_catalog.core.dataset.loader import DatasetLoader
from plant_catalog.core.detail.projector import (
    detail_as_dict,
    project_detail,
    render_detail_text,
)
from plant_catalog.core.filters.facets import Facet
from plant_catalog.core.view.results import paginate
from plant_catalog.core.view.state import ViewState
from plant_catalog.errors import CatalogError
from plant_catalog.logging_config import configure_logging
from plant_catalog.transport import open_fetcher

app = typer.Typer(help="Plant catalog: search, filter and browse plant records.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _open_loader(source: str | None) -> DatasetLoader:
    return DatasetLoader(open_fetcher(source or resolve_data_source()))


def _load_catalog(source: str | None) -> PlantCatalog:
    try:
        catalog = PlantCatalog.load(_open_loader(source))
    except CatalogError as e:
        logger.error("Cannot load plant dataset: {}", e)
        raise typer.Exit(1) from e
    return catalog


def _restrict(state: ViewState, facet: Facet, values: list[str] | None) -> ViewState:
    if not values:
        return state
    return state.with_selection(state.selection.with_values(facet, values))


SourceOption = Annotated[
    str | None,
    typer.Option("--source", "-s", help="Data source: base URL or directory"),
]


@app.command()
def search(
    query: str = typer.Argument("", help="Search text (empty matches everything)"),
    plant_type: Annotated[
        list[str] | None, typer.Option("--type", "-t", help="Restrict to plant type")
    ] = None,
    zone: Annotated[
        list[str] | None, typer.Option("--zone", "-z", help="Restrict to hardiness zone")
    ] = None,
    light: Annotated[
        list[str] | None, typer.Option("--light", "-l", help="Restrict to light need")
    ] = None,
    maintenance: Annotated[
        list[str] | None, typer.Option("--maintenance", "-m", help="Restrict to maintenance")
    ] = None,
    no_problem_plants: bool = typer.Option(
        False, "--no-problem-plants", help="Hide plants with listed problems"
    ),
    window: int = typer.Option(DEFAULT_RENDER_WINDOW, "--window", "-n", help="Max rows shown"),
    source: SourceOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Search and filter plants."""
    catalog = _load_catalog(source)

    state = catalog.initial_state().with_search(query)
    state = _restrict(state, Facet.TYPE, plant_type)
    state = _restrict(state, Facet.ZONE, zone)
    state = _restrict(state, Facet.LIGHT, light)
    state = _restrict(state, Facet.MAINTENANCE, maintenance)
    if no_problem_plants:
        state = state.with_problem_plants(False)

    page = paginate(catalog.filter(state), window)
    rows = catalog.rows(page)

    if output_json:
        data = {
            "results": [asdict(r) for r in rows],
            "count": len(rows),
            "total": page.total,
            "has_more": page.has_more,
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"Found {page.total} plants (showing {len(rows)}):\n")
    for r in rows:
        line = f"  {r.title}"
        if r.common_names:
            line += f" ({r.common_names})"
        typer.echo(line)
        details = [f"key={r.key}"]
        if r.zone_range:
            details.append(f"zones {r.zone_range}")
        if r.plant_types:
            details.append(", ".join(r.plant_types))
        typer.echo("    " + "  ".join(details))


@app.command()
def facets(
    source: SourceOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List every facet value with its plant count."""
    catalog = _load_catalog(source)
    universe = catalog.universe

    if output_json:
        data = {
            facet.value: [
                {"value": v, "count": universe.count(facet, v)} for v in universe[facet]
            ]
            for facet in Facet
        }
        typer.echo(json.dumps(data, indent=2))
        return

    for facet in Facet:
        typer.echo(f"{facet.value} ({len(universe[facet])} values):")
        for value in universe[facet]:
            typer.echo(f"  {value}  [{universe.count(facet, value)}]")
        typer.echo()


@app.command()
def show(
    key: str = typer.Argument(..., help="Plant key"),
    source: SourceOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show the full detail record of a plant."""
    loader = _open_loader(source)
    try:
        record = loader.load_detail_record(key)
    except CatalogError as e:
        logger.error("Cannot load details for {}: {}", key, e)
        raise typer.Exit(1) from e

    view = project_detail(record)
    if output_json:
        typer.echo(json.dumps({"key": key, **detail_as_dict(view)}, indent=2))
    else:
        typer.echo(render_detail_text(view))


@app.command()
def serve() -> None:
    """Start the MCP server (stdio transport)."""
    from plant_catalog.mcp.server import run_mcp_server

    run_mcp_server()
