"""
Reference descriptor server.

Starlette application exposing the descriptor store over HTTP:
GET /api/form returns the descriptor list, POST /api/form replaces it
wholesale. HttpDescriptorStore is its client.
"""

import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from dynaform.config import get_config
from dynaform.errors import DescriptorError
from dynaform.models.field_descriptor import dump_descriptors, parse_descriptors
from dynaform.store.base import DescriptorStore
from dynaform.store.memory import InMemoryDescriptorStore

logger = logging.getLogger("dynaform.server")

ALLOWED_METHODS = "GET, POST"


def create_app(store: DescriptorStore | None = None, debug: bool = False) -> Starlette:
    """
    Create the Starlette app serving a descriptor store.

    Args:
        store: Store to serve. If None, an InMemoryDescriptorStore seeded
            with the sample form is used.
        debug: Starlette debug mode.
    """
    store = store if store is not None else InMemoryDescriptorStore()

    async def form_endpoint(request: Request) -> JSONResponse:
        """Handle /api/form for every method so 405s are JSON too."""
        if request.method == "GET":
            descriptors = await store.fetch()
            return JSONResponse(dump_descriptors(descriptors))

        if request.method == "POST":
            try:
                payload = await request.json()
            except ValueError:
                return JSONResponse({"message": "Request body must be JSON"}, status_code=400)

            try:
                descriptors = parse_descriptors(payload)
            except DescriptorError as e:
                logger.warning(f"Rejected descriptor list: {e}")
                return JSONResponse(e.to_dict(), status_code=400)

            ack = await store.replace(descriptors)
            return JSONResponse(ack)

        return JSONResponse(
            {"message": "Method not allowed"},
            status_code=405,
            headers={"Allow": ALLOWED_METHODS},
        )

    async def health_check(request: Request) -> JSONResponse:
        """Health check endpoint."""
        config = get_config()
        return JSONResponse({
            "status": "healthy",
            "service": "dynaform",
            "port": config.server_port,
        })

    return Starlette(
        debug=debug,
        routes=[
            Route("/health", health_check, methods=["GET"]),
            Route(
                "/api/form",
                form_endpoint,
                methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
            ),
        ],
    )


async def run_server(host: str | None = None, port: int | None = None) -> None:
    """
    Run the reference server with uvicorn.

    Args:
        host: Host to bind to. If None, uses config.server_host.
        port: Port to listen on. If None, uses config.server_port.
    """
    import uvicorn

    config = get_config()
    host = host or config.server_host
    port = port or config.server_port

    logger.info(f"Starting descriptor server on {host}:{port}...")

    app = create_app()
    server_config = uvicorn.Config(app, host=host, port=port, log_level=config.log_level.lower())
    server_instance = uvicorn.Server(server_config)
    await server_instance.serve()
