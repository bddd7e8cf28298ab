"""ODHF Directory MCP Server.

FastMCP server exposing the Open Database of Healthcare Facilities as MCP
tools, plain JSON routes and SSE tool discovery.
Run: odhf-directory-mcp
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import uvicorn
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from sse_starlette.sse import EventSourceResponse
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response

from .core.columns import ColumnResolutionError
from .core.dataset import DatasetStore, DatasetUnavailableError
from .core.models import SearchMessage
from .core.search import list_columns, search_facilities as run_search
from .streaming import keepalive_events, one_shot_events

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080

SSE_HEADERS = {"Cache-Control": "no-cache", "X-Accel-Buffering": "no"}

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=False)

# Process-wide dataset, parsed on the first request that needs it.
store = DatasetStore()

mcp = FastMCP(
    "ODHF Directory",
    instructions="Look up Canadian healthcare facilities from the Open Database of Healthcare Facilities by province and facility type.",
)


def _store_for(request: Request) -> DatasetStore:
    return getattr(request.app.state, "dataset_store", store)


# ─── MCP Tools ───────────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def list_fields() -> dict:
    """List dataset columns."""
    return {"columns": list_columns(store.require())}


@mcp.tool(annotations=READ_ONLY)
async def search_facilities(province: str = "", facility_type: str = "") -> list[dict] | dict:
    """Search facilities by province and/or ODHF facility type.

    Args:
        province: Province name or code to match, e.g. 'Quebec' or 'QC'. Substring, case-insensitive.
        facility_type: ODHF facility type to match, e.g. 'Hospitals'. Substring, case-insensitive.
    """
    result = run_search(store.require(), province, facility_type)
    if isinstance(result, SearchMessage):
        return result.model_dump()
    return result


# ─── HTTP Routes ─────────────────────────────────────────────────────────────


@mcp.custom_route("/", methods=["GET"])
async def health(request: Request) -> Response:
    try:
        dataset = _store_for(request).require()
        return PlainTextResponse(f"ODHF MCP Server (Python) is running! csv_found=true rows={len(dataset)}")
    except DatasetUnavailableError as exc:
        logger.warning("Health check failed: %s", exc)
        return PlainTextResponse(f"Startup error: {exc}", status_code=500)
    except Exception as exc:
        logger.exception("Health check failed")
        return PlainTextResponse(f"Startup error: {exc}", status_code=500)


@mcp.custom_route("/list_fields", methods=["GET"])
async def list_fields_route(request: Request) -> Response:
    try:
        dataset = _store_for(request).require()
        return JSONResponse({"columns": list_columns(dataset)})
    except DatasetUnavailableError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    except Exception as exc:
        logger.exception("list_fields failed")
        return JSONResponse({"error": str(exc)}, status_code=500)


@mcp.custom_route("/search_facilities", methods=["GET"])
async def search_facilities_route(request: Request) -> Response:
    try:
        dataset = _store_for(request).require()
        result = run_search(
            dataset,
            province=request.query_params.get("province"),
            facility_type=request.query_params.get("facility_type"),
        )
    except DatasetUnavailableError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    except ColumnResolutionError as exc:
        logger.warning("Search rejected, columns present: %s", exc.have)
        return JSONResponse(exc.to_dict(), status_code=400)
    except Exception as exc:
        logger.exception("search_facilities failed")
        return JSONResponse({"error": str(exc)}, status_code=500)

    if isinstance(result, SearchMessage):
        return JSONResponse(result.model_dump())
    return JSONResponse(result)


# ─── Tool Discovery (SSE) ────────────────────────────────────────────────────


@mcp.custom_route("/sse_once", methods=["GET"])
async def sse_once(request: Request) -> Response:
    """Send the tool manifest once and close. No dataset needed."""
    return EventSourceResponse(one_shot_events(), headers=SSE_HEADERS)


@mcp.custom_route("/sse", methods=["GET"])
async def sse_debug(request: Request) -> Response:
    """Send the tool manifest, then keepalive pings until the client disconnects."""
    return EventSourceResponse(keepalive_events(), headers=SSE_HEADERS)


def create_app(dataset_store: Optional[DatasetStore] = None) -> Starlette:
    """Build the ASGI app: MCP transport at /mcp plus the plain routes, with open CORS.

    A given dataset_store replaces the process-wide store, so the HTTP routes
    and the MCP tools always read the same dataset.
    """
    global store
    if dataset_store is not None:
        store = dataset_store
    app = mcp.streamable_http_app()
    app.state.dataset_store = store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )
    return app


def main():
    """Entry point for the CLI command."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", str(DEFAULT_PORT)))
    logger.info("ODHF MCP (Python) listening on %s (dataset: %s)", port, store.path)
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
