import threading
from typing import Dict
from typing import List
from typing import Optional

from mimeregistry.exceptions import MissingSerializer
from mimeregistry.serializers.base import Serializer


class SerializerRegistry:
    """
    Serializers keyed by transform-method name (``to_json``, ``to_text``).
    Several mime types may share one transform, e.g. ``js`` and ``json``.
    """

    def __init__(self) -> None:
        self._map: Dict[str, Serializer] = {}
        self._lock = threading.Lock()

    def supported(self) -> List[str]:
        return list(self._map)

    def register(self, transform_method: str, serializer: Serializer) -> None:
        if not isinstance(serializer, Serializer):
            raise TypeError(f"{serializer!r} does not implement Serializer")
        with self._lock:
            self._map = {**self._map, transform_method: serializer}

    def get(self, transform_method: str) -> Serializer:
        serializer: Optional[Serializer] = self._map.get(transform_method)
        if serializer is None:
            raise MissingSerializer(transform_method)
        return serializer
