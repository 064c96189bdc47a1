import time
from typing import Any

from mimeregistry.interfaces import RenderEntryPoint
from mimeregistry.interfaces import ResponseContext
from mimeregistry.log_config import logger


def logging_middleware(
    key: str, obj: Any, context: ResponseContext, nxt: RenderEntryPoint
) -> ResponseContext:
    """Logs before and after each render."""
    logger.info("→ render_%s %s", key, type(obj).__name__)
    out = nxt(obj, context)
    logger.info("✓ render_%s produced %d bytes", key, len(out.body or b""))
    return out


def vary_middleware(
    key: str, obj: Any, context: ResponseContext, nxt: RenderEntryPoint
) -> ResponseContext:
    """
    Marks the response as negotiated on Accept, so caches keep
    one copy per format.
    """
    out = nxt(obj, context)
    vary = [v.strip() for v in out.headers.get("Vary", "").split(",") if v.strip()]
    if "accept" not in (v.lower() for v in vary):
        vary.append("Accept")
    out.headers["Vary"] = ", ".join(vary)
    return out


def metrics_middleware(
    key: str, obj: Any, context: ResponseContext, nxt: RenderEntryPoint
) -> ResponseContext:
    """Measures and logs the time taken by each render."""
    start = time.time()
    out = nxt(obj, context)
    duration = time.time() - start
    logger.info("METRICS render_%s took %.3fs", key, duration)
    return out
