import pytest

from mimeregistry.registry import ALL


def test_any_on_bootstrap_registry_falls_back_to_all(bare_registry):
    assert bare_registry.resolve_accept_header("*/*") == [(ALL, 1.0)]


def test_explicit_qualities_order_candidates(scenario_registry):
    resolved = scenario_registry.resolve_accept_header(
        "application/json;q=0.9, text/html;q=0.8"
    )
    assert resolved == [("json", 0.9), ("html", 0.8)]
    assert resolved[0].key == "json"
    assert resolved[0].quality == 0.9


def test_ties_keep_registration_order(scenario_registry):
    # html was registered first
    assert scenario_registry.resolve_accept_header(
        "application/json, text/html"
    ) == [("html", 1.0), ("json", 1.0)]


def test_default_quality_applies_without_q(registry):
    assert registry.resolve_accept_header("application/xml, text/html") == [
        ("html", 1.0),
        ("xml", 0.9998),
    ]


def test_browser_accept_header(registry):
    resolved = registry.resolve_accept_header(
        "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
    )
    assert resolved == [("html", 1.0), ("xml", 0.9), (ALL, 0.8)]


def test_wildcard_subtype_expands_to_registered_types(registry):
    keys = [c.key for c in registry.resolve_accept_header("text/*")]
    assert keys == ["yaml", "text", "html", "js", "json", "xml"]


def test_registered_wildcard_pattern_matches(bare_registry):
    bare_registry.register("image", None, ["image/*"], {}, 0.5)
    assert bare_registry.resolve_accept_header("image/png") == [("image", 0.5)]


def test_unregistered_type_falls_back_to_all(registry):
    assert registry.resolve_accept_header("image/png") == [(ALL, 1.0)]
    assert registry.resolve_accept_header("image/png;q=0.3") == [(ALL, 0.3)]


def test_zero_quality_is_not_acceptable(registry):
    assert registry.resolve_accept_header("application/json;q=0") == [(ALL, 1.0)]
    resolved = registry.resolve_accept_header("application/json;q=0, text/html")
    assert resolved == [("html", 1.0)]


def test_each_key_listed_once_with_best_quality(registry):
    resolved = registry.resolve_accept_header(
        "text/x-json;q=0.2, application/json;q=0.7"
    )
    assert resolved == [("json", 0.7)]


def test_stale_wire_type_is_skipped_not_raised(registry):
    registry.unregister("json")
    assert registry.resolve_accept_header("application/json") == [(ALL, 1.0)]
    keys = [c.key for c in registry.resolve_accept_header("text/*")]
    assert "json" not in keys


def test_garbage_header_falls_back_to_all(registry):
    assert registry.resolve_accept_header("nonsense") == [(ALL, 1.0)]


@pytest.mark.parametrize(
    "accept,provided,expected",
    [
        ("application/json", ["html", "json"], "json"),
        ("*/*", ["html", "json"], "html"),
        (None, ["json", "html"], "json"),
        ("image/png", ["json"], "json"),
        ("application/xml", ["json"], None),
        ("application/xml;q=0.5, text/html", ["json", "xml"], "xml"),
        ("text/html", [], "html"),
        ("*/*", ["nope"], None),
        ("text/html;q=0, */*", ["html", "json"], "json"),
        ("text/html;q=0", ["html", "json"], "json"),
        ("text/html;q=0", ["html"], None),
        ("application/json;q=0, text/x-json", ["json"], "json"),
    ],
)
def test_negotiate_picks_from_provided(registry, accept, provided, expected):
    assert registry.negotiate(accept, provided) == expected


def test_negotiate_on_bootstrap_registry_has_nothing_to_offer(bare_registry):
    assert bare_registry.negotiate("*/*") is None
