"""Concrete aggregators (counting, summing, classifying) and their factories."""

from __future__ import annotations

import logging
from typing import Any

from groupflow.lib.aggregations.base import BaseAggregator, BaseAggregatorFactory
from groupflow.lib.aggregations.classifiers import BaseClassifier
from groupflow.lib.aggregations.exceptions import ConfigurationError
from groupflow.lib.aggregations.extractors import ExtractorLike, as_extractor
from groupflow.lib.aggregations.models import ClassifierConfig

logger = logging.getLogger(__name__)


class CountingAggregator(BaseAggregator):
    """Conta os itens recebidos. Estado: ``int`` >= 0."""

    def __init__(self) -> None:
        self._count = 0

    def put(self, item: Any) -> None:
        self._count += 1

    def get_state(self) -> int:
        return self._count


class CountingFactory(BaseAggregatorFactory):
    def create(self) -> CountingAggregator:
        return CountingAggregator()


class SummingAggregator(BaseAggregator):
    """Soma os valores extraídos de cada item.

    Args:
        extractor: extrator do valor numérico (``BaseExtractor``, nome de campo
            ou chamável).
        start: zero do domínio numérico (``0``, ``0.0``, ``Decimal("0")``,
            ``pd.Timedelta(0)``...).

    Notas:
      - Soma estritamente aditiva, sem tratamento de overflow.
      - Se a extração falhar, o erro propaga e a soma não muda.
    """

    def __init__(self, extractor: ExtractorLike, start: Any = 0) -> None:
        self.extractor = as_extractor(extractor)
        self._sum = start

    def put(self, item: Any) -> None:
        self._sum = self._sum + self.extractor.extract(item)

    def get_state(self) -> Any:
        return self._sum


class SummingFactory(BaseAggregatorFactory):
    """Cria somadores que compartilham apenas o extrator (imutável)."""

    def __init__(self, extractor: ExtractorLike, start: Any = 0) -> None:
        self.extractor = as_extractor(extractor)
        self.start = start

    def create(self) -> SummingAggregator:
        return SummingAggregator(self.extractor, self.start)


class ClassifyingAggregator(BaseAggregator):
    """Torna um classificador inteiro utilizável como agregador.

    ``put`` delega ao classificador encapsulado; ``get_state`` devolve o
    mapeamento nome -> estado dos sub-buckets, resolvido recursivamente.
    É isso que permite aninhar classificações em qualquer profundidade.
    """

    def __init__(self, classifier: BaseClassifier) -> None:
        if not isinstance(classifier, BaseClassifier):
            raise ConfigurationError("ClassifyingAggregator exige um classificador")
        self._classifier = classifier

    @property
    def classifier(self) -> BaseClassifier:
        return self._classifier

    def put(self, item: Any) -> None:
        self._classifier.put(item)

    def get_state(self) -> dict[Any, Any]:
        return self._classifier.get_states()


class ClassifyingFactory(BaseAggregatorFactory):
    """Produz agregadores classificadores a partir de um molde.

    O molde pode ser um :class:`ClassifierConfig` ou um classificador ainda
    não usado; neste caso apenas a sua configuração é guardada. Cada
    ``create()`` constrói um classificador novo, com buckets vazios, que não
    compartilha nenhum agregador com o molde nem com os irmãos.

    Raises:
        ConfigurationError: se o molde não puder construir um classificador
            (fábrica ou extrator ausente, parâmetros de subclasse não expostos
            em ``config_options``).
    """

    def __init__(self, template: ClassifierConfig | BaseClassifier) -> None:
        if isinstance(template, BaseClassifier):
            if len(template):
                logger.warning(
                    "ClassifyingFactory: molde %s já possui %d bucket(s); "
                    "apenas a configuração será reutilizada",
                    template.__class__.__name__,
                    len(template),
                )
            template = template.config
        if not isinstance(template, ClassifierConfig):
            raise ConfigurationError(
                "ClassifyingFactory exige um ClassifierConfig ou um classificador"
            )
        # constrói uma vez para que erros de configuração apareçam aqui, não no put
        try:
            template.build()
        except ConfigurationError:
            raise
        except TypeError as exc:
            raise ConfigurationError(
                f"Molde inválido para {template.classifier_cls.__name__}: {exc}"
            ) from exc
        self.config = template

    def create(self) -> ClassifyingAggregator:
        return ClassifyingAggregator(self.config.build())
