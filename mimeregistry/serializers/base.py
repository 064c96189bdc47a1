from typing import Any
from typing import Protocol
from typing import runtime_checkable


@runtime_checkable
class Serializer(Protocol):
    """
    Serializer protocol: the explicit form of a transform method.
    Renders an object into response bytes, and reads it back.
    """

    def serialize(self, obj: Any) -> bytes:
        """
        Convert a Python object into bytes.
        """
        ...

    def deserialize(self, data: bytes) -> Any:
        """
        Convert bytes back into a Python object.
        """
        ...
