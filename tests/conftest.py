import pytest
from fastapi import Depends
from fastapi import FastAPI
from fastapi import Request

from mimeregistry.builtin import new_registry
from mimeregistry.fastapi_utils import lifespan_manager
from mimeregistry.fastapi_utils import negotiated_format
from mimeregistry.fastapi_utils import respond
from mimeregistry.middleware import vary_middleware
from mimeregistry.registry import MimeRegistry
from mimeregistry.render import RenderDispatcher


@pytest.fixture
def registry():
    # fresh registry with the built-in formats
    return new_registry()


@pytest.fixture
def bare_registry():
    # only the `all` type
    return MimeRegistry()


@pytest.fixture
def scenario_registry(bare_registry):
    bare_registry.register("html", None, ["text/html"])
    bare_registry.register("json", "to_json", ["application/json"])
    return bare_registry


@pytest.fixture
def dispatcher(registry):
    return RenderDispatcher(registry)


@pytest.fixture
def recorder():
    class RecordingGenerator:
        def __init__(self):
            self.keys = []

        def define_render_entry_point(self, key):
            self.keys.append(key)

    return RecordingGenerator()


@pytest.fixture
def fastapi_app(registry):
    dispatcher = RenderDispatcher(registry)
    dispatcher.add_middleware(vary_middleware)
    app = FastAPI(lifespan=lifespan_manager(registry, dispatcher))

    @app.get("/items")
    async def list_items(request: Request):
        return respond(request, {"items": [1, 2]}, provides=["json", "text"])

    @app.post("/items")
    async def create_item(request: Request):
        return respond(request, {"id": 3}, provides=["json"], status_code=201)

    @app.get("/page")
    async def page(fmt: str = Depends(negotiated_format("html", "json"))):
        return {"format": fmt}

    return app
