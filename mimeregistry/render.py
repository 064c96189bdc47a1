from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from mimeregistry.exceptions import UnknownMimeType
from mimeregistry.interfaces import MimeType
from mimeregistry.interfaces import RenderEntryPoint
from mimeregistry.interfaces import RenderMiddleware
from mimeregistry.interfaces import ResponseContext
from mimeregistry.log_config import logger
from mimeregistry.registry import MimeRegistry


class RenderDispatcher:
    """
    Keeps one render entry point per registered mime type, in a table
    looked up at request time. Each entry point selects its type on the
    response context, then serializes the object with the serializer
    named by the type's transform method.
    """

    def __init__(self, registry: MimeRegistry) -> None:
        self._registry = registry
        self._entry_points: Dict[str, RenderEntryPoint] = {}
        self._middleware: List[RenderMiddleware] = []
        registry.add_render_generator(self)

    def define_render_entry_point(self, key: str) -> None:
        if key in self._entry_points:
            return

        def render_as(obj: Any, context: ResponseContext) -> ResponseContext:
            return self._render(key, obj, context)

        render_as.__name__ = f"render_{key}"
        self._entry_points[key] = render_as
        logger.debug("Render entry point defined for '%s'", key)

    def add_middleware(self, mw: RenderMiddleware) -> None:
        self._middleware.append(mw)
        logger.debug("Middleware added: %s", getattr(mw, "__name__", repr(mw)))

    def defined(self) -> List[str]:
        return list(self._entry_points)

    def entry_point(self, key: str) -> RenderEntryPoint:
        if key not in self._entry_points and key in self._registry:
            # attached while the key was being registered
            self.define_render_entry_point(key)
        try:
            pipeline = self._entry_points[key]
        except KeyError:
            raise UnknownMimeType(key) from None
        for mw in reversed(self._middleware):
            pipeline = self._wrap_middleware(mw, key, pipeline)
        return pipeline

    def render(
        self,
        key: str,
        obj: Any = None,
        context: Optional[ResponseContext] = None,
    ) -> ResponseContext:
        return self.entry_point(key)(obj, context or ResponseContext())

    def set_content_type(
        self, context: ResponseContext, key: str
    ) -> ResponseContext:
        """
        Make ``key`` the active type of the response: its headers and
        Content-Type are applied, then its response hook runs.
        """
        return self._apply(context, self._registry.get(key))

    def _apply(
        self, context: ResponseContext, descriptor: MimeType
    ) -> ResponseContext:
        context.content_type = descriptor.key
        context.headers.update(descriptor.response_headers)
        context.headers["Content-Type"] = descriptor.content_type
        if descriptor.response_hook is not None:
            descriptor.response_hook(context)
        return context

    def _render(
        self, key: str, obj: Any, context: ResponseContext
    ) -> ResponseContext:
        descriptor = self._registry.get(key)
        self._apply(context, descriptor)
        context.body = self._serialize(descriptor, obj)
        return context

    def _serialize(self, descriptor: MimeType, obj: Any) -> bytes:
        # already-rendered content is sent as is
        if obj is None:
            return b""
        if isinstance(obj, bytes):
            return obj
        if isinstance(obj, str):
            return obj.encode(descriptor.charset or "utf-8")
        if descriptor.transform_method is None:
            raise TypeError(
                f"'{descriptor.key}' has no transform method; "
                f"cannot render {type(obj).__name__}"
            )
        serializer = self._registry.serializers.get(descriptor.transform_method)
        return serializer.serialize(obj)

    @staticmethod
    def _wrap_middleware(
        mw: RenderMiddleware, key: str, nxt: RenderEntryPoint
    ) -> RenderEntryPoint:
        def wrapped(obj: Any, context: ResponseContext) -> ResponseContext:
            return mw(key, obj, context, nxt)

        return wrapped
