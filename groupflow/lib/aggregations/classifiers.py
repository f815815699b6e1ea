"""Classifiers: route items to lazily created, named buckets."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

import pandas as pd

from groupflow.lib.aggregations.base import (
    BaseAggregator,
    BaseAggregatorFactory,
    BaseExtractor,
)
from groupflow.lib.aggregations.exceptions import (
    ConfigurationError,
    InvalidBucketNameError,
)
from groupflow.lib.aggregations.extractors import ExtractorLike, as_extractor
from groupflow.lib.aggregations.models import ClassifierConfig
from groupflow.lib.constants import UNKNOWN_BUCKET

logger = logging.getLogger(__name__)


def normalize_bucket_name(name: Any) -> Hashable:
    """Normaliza o nome derivado de um item.

    Nomes vazios/ausentes (``None``, ``""``, strings ou bytes só com espaços,
    containers vazios, ``NaN``/``NaT``/``pd.NA``) viram :data:`UNKNOWN_BUCKET`; assim
    nenhum item é descartado silenciosamente. ``0`` e ``False`` são chaves
    válidas.

    Raises:
        InvalidBucketNameError: se o nome não for hashable.
    """
    if isinstance(name, (str, bytes)):
        return name if name.strip() else UNKNOWN_BUCKET
    if isinstance(name, (list, tuple, set, frozenset, dict)) and not name:
        return UNKNOWN_BUCKET
    if pd.api.types.is_scalar(name) and pd.isna(name):
        return UNKNOWN_BUCKET
    try:
        hash(name)
    except TypeError as exc:
        raise InvalidBucketNameError(
            f"Nome de bucket não-hashable: {type(name).__name__}"
        ) from exc
    return name


def resolve_state(value: Any) -> Any:
    """Resolve recursivamente agregadores/mapeamentos em valores simples."""
    if isinstance(value, BaseAggregator):
        return resolve_state(value.get_state())
    if isinstance(value, Mapping):
        return {k: resolve_state(v) for k, v in value.items()}
    return value


# -----------------------------------------------------------------------------
# BaseClassifier: dono do mapeamento nome -> agregador
# -----------------------------------------------------------------------------
class BaseClassifier(ABC):
    """Recebe itens e os organiza em buckets nomeados.

    Cada bucket é criado sob demanda pela fábrica injetada e nunca é
    substituído nem removido durante a vida do classificador.

    Args:
        factory: fábrica de agregadores usada para criar os buckets.

    Raises:
        ConfigurationError: se ``factory`` não for uma fábrica válida.
    """

    def __init__(self, factory: BaseAggregatorFactory) -> None:
        if factory is None or not callable(getattr(factory, "create", None)):
            raise ConfigurationError(
                "Classificador exige uma fábrica de agregadores com create()"
            )
        self.factory = factory
        self._classes: dict[Hashable, BaseAggregator] = {}

    @abstractmethod
    def put(self, item: Any) -> None:
        raise NotImplementedError

    def get_classes(self) -> Mapping[Hashable, BaseAggregator]:
        """View somente-leitura (sem cópia) de nome -> agregador, em ordem de criação."""
        return MappingProxyType(self._classes)

    def get_states(self) -> dict[Hashable, Any]:
        """Snapshot de nome -> estado, com classificadores aninhados resolvidos."""
        return {name: resolve_state(agg) for name, agg in self._classes.items()}

    def config_options(self) -> dict[str, Any]:
        """Argumentos nomeados extras do construtor, repassados aos clones.

        Subclasses com parâmetros próprios devem sobrescrever este método.
        """
        return {}

    @property
    def config(self) -> ClassifierConfig:
        return ClassifierConfig(type(self), self.factory, options=self.config_options())

    def spawn(self) -> BaseClassifier:
        """Novo classificador com a mesma configuração e nenhum bucket."""
        return self.config.build()

    def _bucket(self, name: Hashable) -> BaseAggregator:
        bucket = self._classes.get(name)
        if bucket is None:
            bucket = self.factory.create()
            # registra antes de encaminhar o item
            self._classes[name] = bucket
            logger.debug(
                "%s: bucket %r criado (%s)",
                self.__class__.__name__,
                name,
                bucket.__class__.__name__,
            )
        return bucket

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._classes)

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}({list(self._classes.keys())!r})"


class SinglePassClassifier(BaseClassifier):
    """Classificação em passo único: os nomes de todos os buckets do item são
    determinados de uma vez, sem olhar itens anteriores.

    Subclasses implementam :meth:`get_class_names`. Nomes duplicados
    encaminham o item para o mesmo bucket mais de uma vez (sem deduplicação).
    O roteamento não é transacional: se um bucket falhar, os anteriores já
    foram atualizados.

    Parâmetros próprios do construtor devem ser expostos em
    :meth:`config_options` para que o classificador sirva de molde a um
    ``ClassifyingFactory``.
    """

    @abstractmethod
    def get_class_names(self, item: Any) -> Iterable[Any]:
        raise NotImplementedError

    def put(self, item: Any) -> None:
        names = list(self.get_class_names(item))
        for name in names:
            self._bucket(normalize_bucket_name(name)).put(item)


class SingleValueClassifier(SinglePassClassifier):
    """Agrupa por exatamente uma chave extraída ("group by campo X").

    Args:
        factory: fábrica dos buckets.
        extractor: extrator da chave (``BaseExtractor``, nome de campo ou chamável).
    """

    def __init__(self, factory: BaseAggregatorFactory, extractor: ExtractorLike) -> None:
        super().__init__(factory)
        self.extractor: BaseExtractor = as_extractor(extractor)

    def get_class_names(self, item: Any) -> list[Any]:
        return [self.extractor.extract(item)]

    @property
    def config(self) -> ClassifierConfig:
        return ClassifierConfig(
            type(self), self.factory, self.extractor, options=self.config_options()
        )


class MultiValueClassifier(SingleValueClassifier):
    """Roteia o item para cada nome devolvido pelo extrator (ex.: tags).

    Uma string isolada conta como um único nome; um iterável vazio não
    encaminha o item para nenhum bucket.
    """

    def get_class_names(self, item: Any) -> list[Any]:
        value = self.extractor.extract(item)
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            return [value]
        return list(value)
