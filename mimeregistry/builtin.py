from typing import List
from typing import Optional

from mimeregistry.config import MimeTypeSpec
from mimeregistry.config import RegistryConfig
from mimeregistry.registry import MimeRegistry
from mimeregistry.serializers.json_serializer import JSONSerializer
from mimeregistry.serializers.text_serializer import PlainTextSerializer


def builtin_types(charset: str = "utf-8") -> List[MimeTypeSpec]:
    """
    The formats every application starts with, besides ``all``.
    """
    headers = {"charset": charset}
    return [
        MimeTypeSpec(
            key="yaml",
            transform_method="to_yaml",
            accepts=["application/x-yaml", "text/yaml"],
            response_headers=headers,
        ),
        MimeTypeSpec(
            key="text",
            transform_method="to_text",
            accepts=["text/plain"],
            response_headers=headers,
        ),
        MimeTypeSpec(
            key="html",
            transform_method="to_html",
            accepts=["text/html", "application/xhtml+xml", "application/html"],
            response_headers=headers,
        ),
        # just below html so browsers sending both get html
        MimeTypeSpec(
            key="xml",
            transform_method="to_xml",
            accepts=["application/xml", "text/xml", "application/x-xml"],
            response_headers=headers,
            default_quality=0.9998,
        ),
        MimeTypeSpec(
            key="js",
            transform_method="to_json",
            accepts=[
                "text/javascript",
                "application/javascript",
                "application/x-javascript",
            ],
            response_headers=headers,
        ),
        MimeTypeSpec(
            key="json",
            transform_method="to_json",
            accepts=["application/json", "text/x-json"],
            response_headers=headers,
        ),
    ]


def register_spec(registry: MimeRegistry, spec: MimeTypeSpec) -> None:
    registry.register(
        spec.key,
        spec.transform_method,
        spec.accepts,
        spec.response_headers,
        spec.default_quality,
    )


def new_registry(config: Optional[RegistryConfig] = None) -> MimeRegistry:
    """
    Build the registry an application wires through its startup.
    Call once at process init and pass the instance to request handling.
    """
    config = config or RegistryConfig()
    registry = MimeRegistry()
    registry.serializers.register("to_json", JSONSerializer())
    registry.serializers.register(
        "to_text", PlainTextSerializer(config.default_charset)
    )
    if config.load_builtins:
        for spec in builtin_types(config.default_charset):
            register_spec(registry, spec)
    for spec in config.extra_types:
        register_spec(registry, spec)
    return registry
