from .accept import AcceptEntry
from .accept import parse_accept_header
from .builtin import builtin_types
from .builtin import new_registry
from .config import MimeTypeSpec
from .config import RegistryConfig
from .exceptions import NOT_PRESENT
from .exceptions import NOT_REMOVABLE
from .exceptions import InvalidArgument
from .exceptions import MimeRegistryError
from .exceptions import MissingSerializer
from .exceptions import NotAcceptable
from .exceptions import UnknownMimeType
from .interfaces import Candidate
from .interfaces import MimeType
from .interfaces import RenderGenerator
from .interfaces import ResponseContext
from .middleware import logging_middleware
from .middleware import metrics_middleware
from .middleware import vary_middleware
from .registry import ALL
from .registry import MimeRegistry
from .render import RenderDispatcher

__all__ = [
    "ALL",
    "MimeRegistry",
    "MimeType",
    "Candidate",
    "ResponseContext",
    "RenderGenerator",
    "RenderDispatcher",
    "RegistryConfig",
    "MimeTypeSpec",
    "AcceptEntry",
    "parse_accept_header",
    "builtin_types",
    "new_registry",
    "MimeRegistryError",
    "InvalidArgument",
    "UnknownMimeType",
    "MissingSerializer",
    "NotAcceptable",
    "NOT_REMOVABLE",
    "NOT_PRESENT",
    "logging_middleware",
    "metrics_middleware",
    "vary_middleware",
]
