import csv
import io
import logging
from typing import Any
from typing import List

import uvicorn
from fastapi import Depends
from fastapi import FastAPI
from fastapi import Request
from pydantic import BaseModel

from mimeregistry.builtin import new_registry
from mimeregistry.config import RegistryConfig
from mimeregistry.fastapi_utils import lifespan_manager
from mimeregistry.fastapi_utils import negotiated_format
from mimeregistry.fastapi_utils import respond
from mimeregistry.interfaces import ResponseContext
from mimeregistry.middleware import logging_middleware
from mimeregistry.middleware import metrics_middleware
from mimeregistry.middleware import vary_middleware
from mimeregistry.render import RenderDispatcher

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("mimeregistry")
logger.setLevel(logging.INFO)

# ─────────────────────────────────────────────────────────────────────────────
# 0. Payload models
# ─────────────────────────────────────────────────────────────────────────────


class Drug(BaseModel):
    name: str
    dose_mg: int


class DrugList(BaseModel):
    drugs: List[Drug]


CATALOG = DrugList(
    drugs=[Drug(name="DrugX", dose_mg=50), Drug(name="DrugY", dose_mg=200)]
)

# ─────────────────────────────────────────────────────────────────────────────
# 1. CSV format, registered on top of the built-ins
# ─────────────────────────────────────────────────────────────────────────────


class CSVSerializer:
    def serialize(self, obj: Any) -> bytes:
        rows = obj.model_dump()["drugs"] if isinstance(obj, DrugList) else obj
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=list(rows[0]) if rows else [])
        writer.writeheader()
        writer.writerows(rows)
        return buf.getvalue().encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        return list(csv.DictReader(io.StringIO(data.decode("utf-8"))))


def attachment(context: ResponseContext) -> None:
    context.headers["Content-Disposition"] = 'attachment; filename="drugs.csv"'


config = RegistryConfig()
registry = new_registry(config)
registry.register(
    "csv",
    "to_csv",
    ["text/csv", "application/csv"],
    {"charset": "utf-8"},
    default_quality=0.9,
    response_hook=attachment,
    serializer=CSVSerializer(),
)

dispatcher = RenderDispatcher(registry)
dispatcher.add_middleware(logging_middleware)
dispatcher.add_middleware(metrics_middleware)
dispatcher.add_middleware(vary_middleware)

app = FastAPI(lifespan=lifespan_manager(registry, dispatcher, config))

# ─────────────────────────────────────────────────────────────────────────────
# 2. Endpoints
# ─────────────────────────────────────────────────────────────────────────────


def drugs_html(drugs: DrugList) -> str:
    rows = "".join(f"<li>{d.name}: {d.dose_mg} mg</li>" for d in drugs.drugs)
    return f"<h1>Drugs</h1><ul>{rows}</ul>"


@app.get("/drugs")
async def list_drugs(
    request: Request,
    fmt: str = Depends(negotiated_format("json", "csv", "html", "text")),
):
    # no to_html serializer; html is rendered here
    body = drugs_html(CATALOG) if fmt == "html" else CATALOG
    return respond(request, body, provides=[fmt])


@app.get("/drugs/{name}")
async def get_drug(
    name: str, request: Request, fmt: str = Depends(negotiated_format("json", "html"))
):
    drug = next((d for d in CATALOG.drugs if d.name == name), None)
    if fmt == "html":
        body = f"<h1>{name}</h1><p>{drug.dose_mg if drug else 'unknown'} mg</p>"
        return respond(request, body, provides=["html"])
    return respond(request, drug or {}, provides=["json"])


@app.get("/formats")
async def formats():
    return {
        key: {"accepts": list(t.accepts), "content_type": t.content_type}
        for key, t in registry.list_types().items()
    }


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
