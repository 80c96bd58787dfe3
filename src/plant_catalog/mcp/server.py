"""MCP server exposing plant catalog search, facet and detail tools."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass, field
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from plant_catalog.catalog import PlantCatalog
from plant_catalog.config import DEFAULT_RENDER_WINDOW, resolve_data_source
from plant_catalog.core.dataset.loader import DatasetLoader
from plant_catalog.core.detail.projector import detail_as_dict, project_detail
from plant_catalog.core.filters.facets import Facet
from plant_catalog.core.view.results import paginate
from plant_catalog.errors import CatalogError
from plant_catalog.transport import open_fetcher

# --- Core functions (testable without MCP context) ---


def plant_search(
    catalog: PlantCatalog,
    *,
    query: str = "",
    plant_types: list[str] | None = None,
    zones: list[str] | None = None,
    light: list[str] | None = None,
    maintenance: list[str] | None = None,
    include_problem_plants: bool = True,
    limit: int = DEFAULT_RENDER_WINDOW,
    offset: int = 0,
) -> dict[str, Any]:
    """Search and filter the catalog.

    Facet arguments left as None keep every value of that facet selected.
    Results keep dataset order.

    Args:
        query: Search text; each word must prefix a word of the plant's text.
        plant_types: Plant types to keep.
        zones: Hardiness zones to keep.
        light: Light needs to keep.
        maintenance: Maintenance levels to keep.
        include_problem_plants: If False, hide plants with listed problems.
        limit: Max results (1-500).
        offset: Pagination offset.
    """
    limit = max(1, min(limit, 500))
    offset = max(offset, 0)

    state = catalog.initial_state().with_search(query)
    for facet, values in (
        (Facet.TYPE, plant_types),
        (Facet.ZONE, zones),
        (Facet.LIGHT, light),
        (Facet.MAINTENANCE, maintenance),
    ):
        if values is not None:
            state = state.with_selection(state.selection.with_values(facet, values))
    state = state.with_problem_plants(include_problem_plants)

    keys = catalog.filter(state)
    page = paginate(keys[offset:], limit)
    rows = catalog.rows(page)

    output: dict[str, Any] = {
        "results": [asdict(r) for r in rows],
        "count": len(rows),
        "total": len(keys),
        "has_more": offset + len(rows) < len(keys),
    }
    if output["has_more"]:
        output["next_offset"] = offset + limit
    return output


def plant_facets(catalog: PlantCatalog) -> dict[str, Any]:
    """List every facet value, in display order, with plant counts."""
    universe = catalog.universe
    return {
        facet.value: [{"value": v, "count": universe.count(facet, v)} for v in universe[facet]]
        for facet in Facet
    }


def plant_detail(loader: DatasetLoader, *, key: str) -> dict[str, Any]:
    """Load one plant's full record and project it onto labelled fields."""
    try:
        record = loader.load_detail_record(key)
    except CatalogError as e:
        return {"error": f"Could not load details for '{key}': {e}"}
    return {"key": key, **detail_as_dict(project_detail(record))}


# --- Server lifetime ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    loader: DatasetLoader
    catalog: PlantCatalog | None = None
    error: str | None = None
    load_lock: asyncio.Lock = field(default_factory=asyncio.Lock)


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Resolve the data source on startup. The dataset itself loads on first use."""
    source = resolve_data_source()
    logger.info("Serving plant catalog from {}", source)
    yield ServerContext(loader=DatasetLoader(open_fetcher(source)))


mcp_server = FastMCP(
    "plant-catalog",
    instructions="""\
A catalog of plants with hardiness zones, light and maintenance needs.

1. Call plant_facets_tool to see which types, zones, light and maintenance
   values exist.
2. Call plant_search_tool with a query and/or facet values to list plants.
3. Call plant_detail_tool with a result's key for the full record.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


async def _catalog(ctx: ServerContext) -> PlantCatalog | None:
    """Load the catalog once. A failed load is remembered and not retried."""
    async with ctx.load_lock:
        if ctx.catalog is None and ctx.error is None:
            try:
                ctx.catalog = await asyncio.to_thread(PlantCatalog.load, ctx.loader)
            except CatalogError as e:
                logger.error("Failed to load plant dataset: {}", e)
                ctx.error = str(e)
    return ctx.catalog


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def plant_search_tool(
    ctx: Context,
    query: str = "",
    plant_types: list[str] | None = None,
    zones: list[str] | None = None,
    light: list[str] | None = None,
    maintenance: list[str] | None = None,
    include_problem_plants: bool = True,
    limit: int = 50,
    offset: int = 0,
) -> dict[str, Any]:
    """Search plants by text and filter by facets.

    Every word of the query must prefix a word in the plant's names, soil,
    problems, attracts, resistances or tags ("rhod" finds rhododendrons).
    An empty query lists everything that passes the facet filters.

    Pagination: When has_more is true, use next_offset in a follow-up call.

    Args:
        query: Search text.
        plant_types: Keep only these plant types (see plant_facets_tool).
        zones: Keep only these hardiness zones, e.g. ["6a", "6b"].
        light: Keep only these light needs.
        maintenance: Keep only these maintenance levels.
        include_problem_plants: If False, hide plants with listed problems.
        limit: Max results (1-500, default 50).
        offset: Pagination offset.
    """
    server_ctx = _ctx(ctx)
    catalog = await _catalog(server_ctx)
    if catalog is None:
        return {"error": server_ctx.error, "results": [], "count": 0, "total": 0}
    return plant_search(
        catalog,
        query=query,
        plant_types=plant_types,
        zones=zones,
        light=light,
        maintenance=maintenance,
        include_problem_plants=include_problem_plants,
        limit=limit,
        offset=offset,
    )


@mcp_server.tool()
async def plant_facets_tool(ctx: Context) -> dict[str, Any]:
    """List facet values (type, zone, light, maintenance) with plant counts."""
    server_ctx = _ctx(ctx)
    catalog = await _catalog(server_ctx)
    if catalog is None:
        return {"error": server_ctx.error}
    return plant_facets(catalog)


@mcp_server.tool()
async def plant_detail_tool(ctx: Context, key: str) -> dict[str, Any]:
    """Read the full record of one plant as labelled sections.

    Args:
        key: Plant key from search results.
    """
    return await asyncio.to_thread(plant_detail, _ctx(ctx).loader, key=key)


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from plant_catalog.logging_config import configure_logging

    configure_logging(verbose=False)
    mcp_server.run(transport="stdio")
