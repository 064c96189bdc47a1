import io
from typing import Any
from typing import Dict

from fastavro import parse_schema
from fastavro import schemaless_reader
from fastavro import schemaless_writer
from pydantic import BaseModel

from mimeregistry.serializers.base import Serializer


class AvroSerializer(Serializer):
    """
    Avro ↔ bytes serializer for a single record schema.
    Register it for a binary type such as ``application/avro``.
    """

    def __init__(self, schema_dict: Dict[str, Any]):
        self._parsed_schema = parse_schema(schema_dict)

    def serialize(self, obj: Any) -> bytes:
        """
        Serialize a dict (or pydantic model) matching the schema.
        """
        if isinstance(obj, BaseModel):
            obj = obj.model_dump()
        buf = io.BytesIO()
        schemaless_writer(buf, self._parsed_schema, obj)
        return buf.getvalue()

    def deserialize(self, data: bytes) -> Any:
        buf = io.BytesIO(data)
        # writer and reader schema are the same record
        return schemaless_reader(buf, self._parsed_schema, self._parsed_schema)
