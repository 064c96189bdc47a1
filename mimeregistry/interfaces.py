from typing import Any
from typing import Callable
from typing import Dict
from typing import NamedTuple
from typing import Optional
from typing import Protocol
from typing import Tuple

from pydantic import BaseModel
from pydantic import Field


class ResponseContext(BaseModel):
    """
    The controller-side view of a response while it is being rendered.
    Response hooks receive it and may adjust headers or status.
    """

    content_type: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    status: int = 200
    body: Optional[bytes] = None


# Called with the ResponseContext once a type has been selected
ResponseHook = Callable[[ResponseContext], None]


class MimeType(BaseModel):
    """
    One registered response format.

    ``accepts[0]`` is the canonical wire type; ``content_type`` is the
    exact Content-Type header value, charset included.
    """

    key: str
    accepts: Tuple[str, ...]
    transform_method: Optional[str] = None
    content_type: str
    response_headers: Dict[str, str] = Field(default_factory=dict)
    default_quality: float = 1.0
    response_hook: Optional[Callable[..., Any]] = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @property
    def charset(self) -> Optional[str]:
        _, sep, rest = self.content_type.partition(";")
        if not sep:
            return None
        name, _, value = rest.strip().partition("=")
        if name.strip().lower() != "charset":
            return None
        return value.strip() or None


class Candidate(NamedTuple):
    """A negotiated key with the quality it was accepted at."""

    key: str
    quality: float


class RenderGenerator(Protocol):
    """Told by the registry that a render path must exist for a key."""

    def define_render_entry_point(self, key: str) -> None: ...


RenderEntryPoint = Callable[[Any, ResponseContext], ResponseContext]

# Middleware wraps an entry point: (key, obj, context, next) -> context
RenderMiddleware = Callable[
    [str, Any, ResponseContext, RenderEntryPoint],
    ResponseContext,
]
