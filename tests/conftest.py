import pytest

from groupflow.lib.aggregations import (
    ClassifierConfig,
    ClassifyingFactory,
    CountingFactory,
    FieldExtractor,
    SingleValueClassifier,
)


class Order:
    """Item acessado por atributo (não é Mapping)."""

    def __init__(self, region, status, amount=0):
        self.region = region
        self.status = status
        self.amount = amount


@pytest.fixture
def order_cls():
    return Order


@pytest.fixture
def region_status_items():
    return [
        {"region": "EU", "status": "ok"},
        {"region": "EU", "status": "fail"},
        {"region": "US", "status": "ok"},
    ]


@pytest.fixture
def make_region_status_classifier():
    """Classificador region -> status -> contagem, novo a cada chamada."""

    def _factory():
        inner = ClassifierConfig(
            SingleValueClassifier, CountingFactory(), FieldExtractor("status")
        )
        return SingleValueClassifier(ClassifyingFactory(inner), "region")

    return _factory
