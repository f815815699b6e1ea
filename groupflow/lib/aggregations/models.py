"""Data models for aggregations."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from groupflow.lib.aggregations.base import BaseAggregatorFactory, BaseExtractor
from groupflow.lib.aggregations.exceptions import ConfigurationError

if TYPE_CHECKING:
    from groupflow.lib.aggregations.classifiers import BaseClassifier


@dataclass(frozen=True)
class ClassifierConfig:
    """Configuração imutável de um classificador (o "molde" de um ramo).

    Attributes:
        classifier_cls: classe concreta do classificador.
        factory: fábrica usada para criar os buckets.
        extractor: extrator de chave; ``None`` para classificadores que não
            recebem extrator no construtor.
        options: argumentos nomeados extras repassados ao construtor
            (parâmetros próprios de subclasses).
    """

    classifier_cls: type[BaseClassifier]
    factory: BaseAggregatorFactory
    extractor: BaseExtractor | None = None
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.classifier_cls, type):
            raise ConfigurationError("classifier_cls deve ser uma classe de classificador")
        if self.factory is None or not callable(getattr(self.factory, "create", None)):
            raise ConfigurationError(
                "ClassifierConfig exige uma fábrica de agregadores com create()"
            )

    def build(self) -> BaseClassifier:
        """Constrói um classificador novo, sempre com mapeamento de buckets vazio."""
        if self.extractor is None:
            return self.classifier_cls(self.factory, **self.options)
        return self.classifier_cls(self.factory, self.extractor, **self.options)  # type: ignore[call-arg]
