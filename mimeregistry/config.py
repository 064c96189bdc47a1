from typing import Dict
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import Field


class MimeTypeSpec(BaseModel):
    """
    Declarative form of a register() call, for types loaded from config.
    Hooks and serializers are code, so they are registered programmatically.
    """

    key: str
    transform_method: Optional[str] = None
    accepts: List[str]
    response_headers: Dict[str, str] = Field(default_factory=dict)
    default_quality: float = 1.0


class RegistryConfig(BaseModel):
    """
    Configuration for building the process-wide registry at startup.
    """

    load_builtins: bool = True
    default_charset: str = "utf-8"
    json_logging: bool = False
    extra_types: List[MimeTypeSpec] = Field(default_factory=list)
