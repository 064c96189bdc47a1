import json
from typing import Any

from pydantic import BaseModel

from mimeregistry.serializers.base import Serializer


class JSONSerializer(Serializer):
    """
    JSON ↔ bytes serializer. Pydantic models are dumped in JSON mode first.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def serialize(self, obj: Any) -> bytes:
        if isinstance(obj, BaseModel):
            obj = obj.model_dump(mode="json")
        return json.dumps(obj).encode(self.encoding)

    def deserialize(self, data: bytes) -> Any:
        return json.loads(data.decode(self.encoding))
