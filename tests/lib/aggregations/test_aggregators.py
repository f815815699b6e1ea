from decimal import Decimal

import pandas as pd
import pytest

from groupflow.lib.aggregations import (
    ClassifyingAggregator,
    ConfigurationError,
    CountingAggregator,
    CountingFactory,
    ExtractionError,
    SingleValueClassifier,
    SummingAggregator,
    SummingFactory,
)


@pytest.mark.parametrize("n", [0, 1, 7])
def test_counting_aggregator_counts_put_calls(n):
    agg = CountingAggregator()
    for i in range(n):
        agg.put({"i": i})
    assert agg.get_state() == n


def test_counting_aggregator_accepts_any_item():
    agg = CountingAggregator()
    for item in (None, 0, "", object(), {"x": 1}):
        agg.put(item)
    assert agg.get_state() == 5


def test_counting_factory_creates_independent_instances():
    factory = CountingFactory()
    a, b = factory.create(), factory.create()
    assert a is not b

    a.put("x")
    a.put("y")
    assert a.get_state() == 2
    assert b.get_state() == 0


def test_summing_aggregator_starts_at_zero_and_adds_extracted_values():
    agg = SummingAggregator("amount")
    assert agg.get_state() == 0
    for amount in (3, 4, 5):
        agg.put({"amount": amount})
    assert agg.get_state() == 12


def test_summing_is_order_independent():
    items = [{"amount": v} for v in (1, 10, 100, -5, 7)]
    forward = SummingAggregator("amount")
    backward = SummingAggregator("amount")
    for item in items:
        forward.put(item)
    for item in reversed(items):
        backward.put(item)
    assert forward.get_state() == backward.get_state() == 113


def test_summing_respects_numeric_domain_of_start():
    dec = SummingAggregator("amount", start=Decimal("0"))
    dec.put({"amount": Decimal("0.10")})
    dec.put({"amount": Decimal("0.20")})
    assert dec.get_state() == Decimal("0.30")

    td = SummingAggregator(lambda item: item["dur"], start=pd.Timedelta(0))
    td.put({"dur": pd.Timedelta(minutes=5)})
    td.put({"dur": pd.Timedelta(seconds=30)})
    assert td.get_state() == pd.Timedelta(minutes=5, seconds=30)


def test_summing_extraction_error_propagates_and_keeps_sum():
    agg = SummingAggregator("amount")
    agg.put({"amount": 2})
    with pytest.raises(ExtractionError):
        agg.put({"other": 1})
    assert agg.get_state() == 2


def test_summing_factory_creates_independent_instances(order_cls):
    factory = SummingFactory("amount")
    a, b = factory.create(), factory.create()
    a.put(order_cls("EU", "ok", amount=10))
    assert a.get_state() == 10
    assert b.get_state() == 0


def test_summing_factory_rejects_missing_extractor():
    with pytest.raises(ConfigurationError):
        SummingFactory(None)  # type: ignore[arg-type]


def test_classifying_aggregator_delegates_put_and_state():
    classifier = SingleValueClassifier(CountingFactory(), "region")
    agg = ClassifyingAggregator(classifier)

    agg.put({"region": "EU"})
    agg.put({"region": "EU"})

    assert agg.classifier is classifier
    assert agg.get_state() == {"EU": 2}
    assert list(classifier.get_classes()) == ["EU"]


def test_classifying_aggregator_requires_classifier():
    with pytest.raises(ConfigurationError):
        ClassifyingAggregator(CountingFactory())  # type: ignore[arg-type]
