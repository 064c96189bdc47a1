from mimeregistry.builtin import builtin_types
from mimeregistry.builtin import new_registry
from mimeregistry.config import MimeTypeSpec
from mimeregistry.config import RegistryConfig
from mimeregistry.registry import ALL


def test_default_config_loads_builtins():
    registry = new_registry()
    assert registry.keys() == [ALL, "yaml", "text", "html", "xml", "js", "json"]
    assert registry.get("html").content_type == "text/html; charset=utf-8"
    assert registry.get("xml").default_quality == 0.9998
    assert registry.get(ALL).content_type == "*/*"


def test_builtins_can_be_skipped():
    registry = new_registry(RegistryConfig(load_builtins=False))
    assert registry.keys() == [ALL]


def test_default_charset_applies_to_builtins():
    registry = new_registry(RegistryConfig(default_charset="iso-8859-1"))
    assert registry.get("json").content_type == (
        "application/json; charset=iso-8859-1"
    )
    assert registry.serializers.get("to_text").encoding == "iso-8859-1"


def test_extra_types_from_config():
    config = RegistryConfig.model_validate(
        {
            "extra_types": [
                {
                    "key": "csv",
                    "accepts": ["text/csv"],
                    "response_headers": {"charset": "utf-8"},
                    "default_quality": 0.5,
                }
            ]
        }
    )
    assert isinstance(config.extra_types[0], MimeTypeSpec)
    registry = new_registry(config)
    csv = registry.get("csv")
    assert csv.content_type == "text/csv; charset=utf-8"
    assert csv.transform_method is None
    assert csv.default_quality == 0.5
    assert registry.keys()[-1] == "csv"


def test_builtin_specs_are_fresh_per_call():
    first = builtin_types()
    first[0].response_headers["X"] = "1"
    assert "X" not in builtin_types()[0].response_headers
