import pytest

from groupflow.lib.aggregations import (
    AGGREGATOR_REGISTRY,
    ClassifyingFactory,
    ConfigurationError,
    CountingFactory,
    MultiValueClassifier,
    RegistryError,
    SingleValueClassifier,
    SummingFactory,
    build_aggregator_from_spec,
    register_aggregator,
)


def _feed(factory, items):
    agg = factory.create()
    for item in items:
        agg.put(item)
    return agg.get_state()


def test_build_count_and_sum():
    count = build_aggregator_from_spec({"type": "count"})
    assert isinstance(count, CountingFactory)

    total = build_aggregator_from_spec({"type": "SUM ", "args": {"by": "amount"}})
    assert isinstance(total, SummingFactory)
    assert _feed(total, [{"amount": 2}, {"amount": 5}]) == 7


def test_build_nested_classify_from_spec(region_status_items):
    spec = {
        "type": "classify",
        "args": {
            "by": "region",
            "inner": {
                "type": "classify",
                "args": {"by": "status", "inner": {"type": "count"}},
            },
        },
    }
    factory = build_aggregator_from_spec(spec)
    assert isinstance(factory, ClassifyingFactory)
    assert factory.config.classifier_cls is SingleValueClassifier
    assert _feed(factory, region_status_items) == {
        "EU": {"ok": 1, "fail": 1},
        "US": {"ok": 1},
    }


def test_classify_defaults_to_count_and_supports_multi():
    factory = build_aggregator_from_spec(
        {"type": "classify", "args": {"by": "tags", "multi": True}}
    )
    assert factory.config.classifier_cls is MultiValueClassifier
    assert _feed(factory, [{"tags": ["a", "b"]}, {"tags": ["a"]}]) == {"a": 2, "b": 1}


def test_classify_accepts_factory_instance_as_inner():
    factory = build_aggregator_from_spec(
        {"type": "classify", "args": {"by": "k", "inner": SummingFactory("v")}}
    )
    assert _feed(factory, [{"k": "x", "v": 1}, {"k": "x", "v": 2}]) == {"x": 3}


@pytest.mark.parametrize(
    "spec",
    [
        {},
        {"type": 1},
        {"type": "median"},
        {"type": "count", "args": ["x"]},
    ],
)
def test_invalid_specs_raise_registry_error(spec):
    with pytest.raises(RegistryError):
        build_aggregator_from_spec(spec)


def test_custom_registry_is_used_for_nested_specs():
    registry = {"count": CountingFactory, "classify": AGGREGATOR_REGISTRY["classify"]}
    spec = {"type": "classify", "args": {"by": "k", "inner": {"type": "sum"}}}
    with pytest.raises(RegistryError):
        build_aggregator_from_spec(spec, registry=registry)


def test_register_aggregator(monkeypatch):
    monkeypatch.setattr(
        "groupflow.lib.aggregations.registry.AGGREGATOR_REGISTRY",
        dict(AGGREGATOR_REGISTRY),
    )
    from groupflow.lib.aggregations import registry as reg

    register_aggregator("tally", CountingFactory)
    assert reg.AGGREGATOR_REGISTRY["tally"] is CountingFactory
    assert isinstance(build_aggregator_from_spec({"type": "tally"}), CountingFactory)
    assert "tally" not in AGGREGATOR_REGISTRY

    with pytest.raises(RegistryError):
        register_aggregator("", CountingFactory)
    with pytest.raises(RegistryError):
        register_aggregator("x", object())  # type: ignore[arg-type]


@pytest.mark.parametrize("inner", ["count", 3])
def test_classify_with_invalid_inner_fails_at_build_time(inner):
    with pytest.raises(ConfigurationError):
        build_aggregator_from_spec(
            {"type": "classify", "args": {"by": "k", "inner": inner}}
        )
