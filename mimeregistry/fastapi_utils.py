from contextlib import asynccontextmanager
from typing import Any
from typing import AsyncContextManager
from typing import AsyncGenerator
from typing import Callable
from typing import Iterable
from typing import Optional

from fastapi import FastAPI
from fastapi import HTTPException
from fastapi import Request
from fastapi import Response

from mimeregistry.config import RegistryConfig
from mimeregistry.exceptions import NotAcceptable
from mimeregistry.interfaces import ResponseContext
from mimeregistry.log_config import configure_logging
from mimeregistry.log_config import logger
from mimeregistry.registry import MimeRegistry
from mimeregistry.render import RenderDispatcher


def lifespan_manager(
    registry: MimeRegistry,
    dispatcher: RenderDispatcher,
    config: Optional[RegistryConfig] = None,
) -> Callable[[FastAPI], AsyncContextManager[None]]:
    """
    Returns a FastAPI lifespan function that:
      1) Applies the logging settings from config, if given
      2) Publishes the registry and dispatcher on app.state
      3) Logs the formats the application will serve
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncGenerator[None, Any]:
        if config is not None:
            configure_logging(config.json_logging)
        app.state.mime_registry = registry
        app.state.render_dispatcher = dispatcher
        logger.info("Serving formats: %s", ", ".join(registry.keys()))
        try:
            yield
        finally:
            logger.info("Mime registry shut down")

    return _lifespan


def get_registry(request: Request) -> MimeRegistry:
    return request.app.state.mime_registry


def get_dispatcher(request: Request) -> RenderDispatcher:
    return request.app.state.render_dispatcher


def negotiate_request(request: Request, provides: Iterable[str] = ()) -> str:
    """
    Format key for this request's Accept header; 406 when none fits.
    """
    provides = list(provides)
    accept = request.headers.get("accept")
    key = get_registry(request).negotiate(accept, provides)
    if key is None:
        err = NotAcceptable(accept, provides)
        logger.info("Not acceptable: %s for %s", accept, provides)
        raise HTTPException(status_code=406, detail=err.to_dict())
    return key


def negotiated_format(*provides: str) -> Callable[[Request], str]:
    """
    Dependency factory: ``fmt: str = Depends(negotiated_format("json"))``.
    """

    def _dependency(request: Request) -> str:
        return negotiate_request(request, provides)

    return _dependency


def respond(
    request: Request,
    obj: Any,
    provides: Iterable[str] = (),
    status_code: int = 200,
) -> Response:
    """
    Negotiate, render ``obj`` in the chosen format, and wrap it in a Response.
    """
    key = negotiate_request(request, provides)
    context = get_dispatcher(request).render(
        key, obj, ResponseContext(status=status_code)
    )
    return Response(
        content=context.body,
        status_code=context.status,
        headers=context.headers,
    )
