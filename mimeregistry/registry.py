import math
import threading
from typing import Any
from typing import Dict
from typing import Iterable
from typing import List
from typing import Mapping
from typing import NamedTuple
from typing import Optional
from typing import Sequence
from typing import Set
from typing import Tuple
from typing import Union

from pydantic import ValidationError

from mimeregistry.accept import ANY_MEDIA_RANGE
from mimeregistry.accept import media_range_matches
from mimeregistry.accept import parse_accept_header
from mimeregistry.exceptions import NOT_PRESENT
from mimeregistry.exceptions import NOT_REMOVABLE
from mimeregistry.exceptions import InvalidArgument
from mimeregistry.exceptions import UnknownMimeType
from mimeregistry.exceptions import _Outcome
from mimeregistry.interfaces import Candidate
from mimeregistry.interfaces import MimeType
from mimeregistry.interfaces import RenderGenerator
from mimeregistry.interfaces import ResponseHook
from mimeregistry.log_config import logger
from mimeregistry.serializers.base import Serializer
from mimeregistry.serializers.registry import SerializerRegistry

# Key for */*; always registered, never removable
ALL = "all"


class _State(NamedTuple):
    types: Dict[str, MimeType]
    accepts: Dict[str, str]


class MimeRegistry:
    """
    Table of response formats keyed by symbolic name, plus the reverse
    index from wire content-type strings to those names.

    Both tables live in one immutable snapshot. Writers build a new
    snapshot under a lock and swap it in with a single assignment, so a
    reader always sees the two tables from the same moment and never
    needs the lock.
    """

    def __init__(self, serializers: Optional[SerializerRegistry] = None) -> None:
        self.serializers = serializers or SerializerRegistry()
        self._lock = threading.Lock()
        self._state = _State({}, {})
        self._generators: List[RenderGenerator] = []
        self.register(ALL, None, [ANY_MEDIA_RANGE])

    # ── reads ────────────────────────────────────────────────────────────

    def list_types(self) -> Dict[str, MimeType]:
        return dict(self._state.types)

    def list_wire_mappings(self) -> Dict[str, str]:
        return dict(self._state.accepts)

    def keys(self) -> List[str]:
        """Registered keys, in registration order."""
        return list(self._state.types)

    def __contains__(self, key: object) -> bool:
        return key in self._state.types

    def __len__(self) -> int:
        return len(self._state.types)

    def get(self, key: str) -> MimeType:
        try:
            return self._state.types[key]
        except KeyError:
            raise UnknownMimeType(key) from None

    def transform_method_for(self, key: str) -> Optional[str]:
        return self.get(key).transform_method

    def key_for_wire_type(self, wire_type: str) -> Optional[str]:
        """
        Raw reverse-index lookup. After unregister() the wire types of the
        removed key still point at it; callers get that stale key back.
        """
        return self._state.accepts.get(wire_type)

    # ── writes ───────────────────────────────────────────────────────────

    def register(
        self,
        key: str,
        transform_method: Optional[str],
        accepts: Sequence[str],
        response_headers: Optional[Mapping[str, str]] = None,
        default_quality: float = 1.0,
        response_hook: Optional[ResponseHook] = None,
        serializer: Optional[Serializer] = None,
    ) -> None:
        """
        Add a format, replacing any earlier one with the same key.

        ``response_headers`` may carry a ``charset`` entry as a shortcut:
        it is removed from the stored headers and appended to the
        Content-Type value instead. Every string in ``accepts`` is pointed
        at ``key`` in the reverse index, taking it over from any other key.
        """
        _check_key(key)
        _check_accepts(accepts)
        if transform_method is not None and (
            not isinstance(transform_method, str) or not transform_method
        ):
            raise InvalidArgument(
                f"Invalid transform method {transform_method!r}",
                {"key": key},
            )
        if serializer is not None:
            if transform_method is None:
                raise InvalidArgument(
                    "A serializer needs a transform method to be registered under",
                    {"key": key},
                )
            if not isinstance(serializer, Serializer):
                raise InvalidArgument(
                    f"{serializer!r} does not implement Serializer",
                    {"key": key},
                )
        _check_quality(key, default_quality)

        headers = dict(response_headers or {})
        content_type = headers.get("Content-Type") or accepts[0]
        charset = headers.pop("charset", None)
        if charset:
            content_type += f"; charset={charset}"

        try:
            descriptor = MimeType(
                key=key,
                accepts=tuple(accepts),
                transform_method=transform_method,
                content_type=content_type,
                response_headers=headers,
                default_quality=float(default_quality),
                response_hook=response_hook,
            )
        except ValidationError as e:
            raise InvalidArgument(
                f"Invalid mime type definition for {key!r}: {e}",
                {"key": key},
            ) from e

        # render paths exist before readers can negotiate the key
        with self._lock:
            generators = list(self._generators)
        for generator in generators:
            generator.define_render_entry_point(key)

        with self._lock:
            state = self._state
            types = {**state.types, key: descriptor}
            wire_map = dict(state.accepts)
            for wire in descriptor.accepts:
                wire_map[wire] = key
            self._state = _State(types, wire_map)
            if serializer is not None:
                self.serializers.register(transform_method, serializer)

        logger.debug(
            "Registered mime type '%s' as %s (accepts=%s)",
            key,
            content_type,
            ", ".join(descriptor.accepts),
        )

    def unregister(self, key: str) -> Union[MimeType, _Outcome]:
        """
        Remove a format and return its descriptor.

        Returns NOT_REMOVABLE for ``all`` and NOT_PRESENT for an unknown
        key. The reverse index is left as it is.
        """
        if key == ALL:
            logger.warning("Mime type '%s' cannot be removed", ALL)
            return NOT_REMOVABLE
        with self._lock:
            state = self._state
            if key not in state.types:
                return NOT_PRESENT
            types = dict(state.types)
            removed = types.pop(key)
            self._state = _State(types, state.accepts)
        logger.info("Removed mime type '%s'", key)
        return removed

    def add_render_generator(self, generator: RenderGenerator) -> None:
        """
        Attach a rendering subsystem. It is told about every key already
        registered, then about each later register() call.
        """
        with self._lock:
            self._generators.append(generator)
            existing = list(self._state.types)
        for key in existing:
            generator.define_render_entry_point(key)

    # ── negotiation ──────────────────────────────────────────────────────

    def resolve_accept_header(self, accept: Optional[str]) -> List[Candidate]:
        """
        Rank registered keys for an Accept header value.

        An explicit ``q`` wins over the format's default quality. Ties
        keep registration order, with ``all`` last. Wire types that still
        point at a removed key are skipped. When nothing matches, the
        ``all`` fallback is returned on its own.
        """
        candidates, _ = _rank(self._state, accept)
        return candidates

    def negotiate(
        self, accept: Optional[str], provided: Iterable[str] = ()
    ) -> Optional[str]:
        """
        Pick the format to respond with from those an action provides.

        With nothing provided, every registered format other than ``all``
        is on offer. ``all`` winning means the first provided format the
        header does not refuse with ``q=0``. Returns None when no
        provided format is acceptable.
        """
        state = self._state
        provided = list(provided)
        if provided:
            offered = [k for k in provided if k in state.types]
        else:
            offered = [k for k in state.types if k != ALL]
        candidates, refused = _rank(state, accept)
        for candidate in candidates:
            if candidate.key == ALL:
                return next((k for k in offered if k not in refused), None)
            if candidate.key in offered:
                return candidate.key
        return None


def _rank(
    state: _State, accept: Optional[str]
) -> Tuple[List[Candidate], Set[str]]:
    """Ranked candidates, plus the keys the header refuses with q=0."""
    best: Dict[str, float] = {}
    refused: Set[str] = set()
    for entry in parse_accept_header(accept):
        for key in _match(state, entry.media_range):
            descriptor = state.types.get(key)
            if descriptor is None:
                logger.debug(
                    "Wire type '%s' points at unregistered '%s'",
                    entry.media_range,
                    key,
                )
                continue
            quality = (
                entry.quality
                if entry.quality is not None
                else descriptor.default_quality
            )
            if quality <= 0:
                refused.add(key)
                continue
            if quality > best.get(key, 0.0):
                best[key] = quality
    refused.difference_update(best)

    if not best:
        return [Candidate(ALL, state.types[ALL].default_quality)], refused

    order = {key: i for i, key in enumerate(state.types)}
    ranked = sorted(
        best.items(), key=lambda kv: (-kv[1], kv[0] == ALL, order[kv[0]])
    )
    return [Candidate(key, quality) for key, quality in ranked], refused


def _match(state: _State, media_range: str) -> List[str]:
    key = state.accepts.get(media_range)
    if key is not None:
        return [key]
    matched = [
        key
        for wire, key in state.accepts.items()
        if media_range_matches(media_range, wire)
    ]
    # */* only stands in when nothing more specific matched
    specific = [key for key in matched if key != ALL]
    return specific or matched


def _check_key(key: Any) -> None:
    if not isinstance(key, str) or not key.isidentifier():
        raise InvalidArgument(f"Invalid mime type key {key!r}", {"key": key})


def _check_accepts(accepts: Any) -> None:
    if (
        isinstance(accepts, (str, bytes))
        or not isinstance(accepts, Sequence)
        or not accepts
    ):
        raise InvalidArgument(
            "accepts must be a non-empty sequence of content types",
            {"accepts": accepts},
        )
    for wire in accepts:
        if not isinstance(wire, str) or "/" not in wire:
            raise InvalidArgument(
                f"Invalid content type {wire!r}", {"accepts": list(accepts)}
            )


def _check_quality(key: str, quality: Any) -> None:
    if (
        isinstance(quality, bool)
        or not isinstance(quality, (int, float))
        or not math.isfinite(quality)
        or quality <= 0
    ):
        raise InvalidArgument(
            f"default_quality must be a positive number, got {quality!r}",
            {"key": key},
        )
