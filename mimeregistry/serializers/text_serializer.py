from typing import Any

from mimeregistry.serializers.base import Serializer


class PlainTextSerializer(Serializer):
    """
    str() of the object, encoded. Bytes pass through untouched.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def serialize(self, obj: Any) -> bytes:
        if isinstance(obj, bytes):
            return obj
        return str(obj).encode(self.encoding)

    def deserialize(self, data: bytes) -> str:
        return data.decode(self.encoding)
