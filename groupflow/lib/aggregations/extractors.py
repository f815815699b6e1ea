"""Concrete extractors (field, callable)."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Union

import pandas as pd

from groupflow.lib.aggregations.base import BaseExtractor
from groupflow.lib.aggregations.exceptions import ConfigurationError, ExtractionError


class FieldExtractor(BaseExtractor):
    """Lê um campo nomeado do item.

    Suporta ``Mapping`` (``item[field]``), linhas ``pd.Series`` (campo no
    índice) e qualquer outro objeto via ``getattr`` (dataclasses, namedtuples
    de ``DataFrame.itertuples``...).

    Args:
        field: nome do campo a ler.

    Raises:
        ConfigurationError: se ``field`` for vazio ou não-string.
        ExtractionError: em ``extract`` quando o item não possui o campo.
    """

    def __init__(self, field: str) -> None:
        if not isinstance(field, str) or not field:
            raise ConfigurationError("field deve ser uma string não vazia")
        self.field = field

    def extract(self, item: Any) -> Any:
        if isinstance(item, pd.Series):
            if self.field not in item.index:
                raise ExtractionError(f"Campo ausente no item: {self.field!r}")
            return item[self.field]
        if isinstance(item, Mapping):
            try:
                return item[self.field]
            except KeyError as exc:
                raise ExtractionError(f"Campo ausente no item: {self.field!r}") from exc
        try:
            return getattr(item, self.field)
        except AttributeError as exc:
            raise ExtractionError(f"Campo ausente no item: {self.field!r}") from exc

    def __repr__(self) -> str:
        return f"FieldExtractor({self.field!r})"


class CallableExtractor(BaseExtractor):
    """Adapta qualquer função ``item -> valor`` ao contrato de extrator.

    Erros lançados pela função propagam sem alteração.
    """

    def __init__(self, func: Callable[[Any], Any]) -> None:
        if not callable(func):
            raise ConfigurationError("func deve ser chamável")
        self.func = func

    def extract(self, item: Any) -> Any:
        return self.func(item)

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", type(self.func).__name__)
        return f"CallableExtractor({name})"


ExtractorLike = Union[BaseExtractor, str, Callable[[Any], Any]]


def as_extractor(spec: ExtractorLike | None) -> BaseExtractor:
    """Converte ``spec`` em um :class:`BaseExtractor`.

    - ``BaseExtractor``: devolvido como está;
    - ``str``: vira ``FieldExtractor(spec)``;
    - chamável: vira ``CallableExtractor(spec)``.
    """
    if isinstance(spec, BaseExtractor):
        return spec
    if isinstance(spec, str):
        return FieldExtractor(spec)
    if callable(spec):
        return CallableExtractor(spec)
    raise ConfigurationError(
        f"Extrator inválido: esperado BaseExtractor, nome de campo ou chamável, recebido {spec!r}"
    )
