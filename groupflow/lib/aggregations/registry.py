"""Registry and builder for aggregator factories."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from groupflow.lib.aggregations.aggregators import (
    ClassifyingFactory,
    CountingFactory,
    SummingFactory,
)
from groupflow.lib.aggregations.base import BaseAggregatorFactory
from groupflow.lib.aggregations.classifiers import (
    MultiValueClassifier,
    SingleValueClassifier,
)
from groupflow.lib.aggregations.exceptions import RegistryError
from groupflow.lib.aggregations.extractors import ExtractorLike, as_extractor
from groupflow.lib.aggregations.models import ClassifierConfig

Builder = Callable[..., BaseAggregatorFactory]


def _build_sum(by: ExtractorLike, start: Any = 0) -> SummingFactory:
    return SummingFactory(by, start=start)


def _build_classify(
    by: ExtractorLike,
    inner: BaseAggregatorFactory | None = None,
    multi: bool = False,
) -> ClassifyingFactory:
    cls = MultiValueClassifier if multi else SingleValueClassifier
    factory = CountingFactory() if inner is None else inner
    return ClassifyingFactory(ClassifierConfig(cls, factory, as_extractor(by)))


AGGREGATOR_REGISTRY: dict[str, Builder] = {
    "count": CountingFactory,
    "sum": _build_sum,
    "classify": _build_classify,
}


def register_aggregator(name: str, builder: Builder) -> None:
    if not name:
        raise RegistryError("Nome do agregador não pode ser vazio")
    if not callable(builder):
        raise RegistryError("Construtor do agregador deve ser chamável")
    AGGREGATOR_REGISTRY[name] = builder


Spec = Mapping[str, Any]


def _is_spec(value: Any) -> bool:
    return isinstance(value, Mapping) and "type" in value


def build_aggregator_from_spec(
    spec: Spec, *, registry: Mapping[str, Builder] | None = None
) -> BaseAggregatorFactory:
    """Constrói uma fábrica de agregadores a partir de uma spec declarativa.

    Exemplo::

        {"type": "classify",
         "args": {"by": "region",
                  "inner": {"type": "classify",
                            "args": {"by": "status", "inner": {"type": "count"}}}}}

    Argumentos que sejam eles próprios specs (mapeamentos com ``type``) são
    construídos recursivamente com o mesmo registry.
    """
    reg = dict(AGGREGATOR_REGISTRY if registry is None else registry)
    t = spec.get("type")
    if not isinstance(t, str):
        raise RegistryError("Spec inválida: campo 'type' ausente/não-string")
    builder = reg.get(t.strip().lower())
    if builder is None:
        raise RegistryError(f"Agregador não suportado: {t}")
    args = spec.get("args", {})
    if not isinstance(args, Mapping):
        raise RegistryError("Spec inválida: 'args' deve ser um dict")
    kwargs = {
        k: build_aggregator_from_spec(v, registry=reg) if _is_spec(v) else v
        for k, v in args.items()
    }
    return builder(**kwargs)
