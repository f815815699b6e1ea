"""Lazy view for classification pipelines (ClassificationView)."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

import pandas as pd

from groupflow.lib.aggregations.base import BaseAggregatorFactory
from groupflow.lib.aggregations.classifiers import resolve_state
from groupflow.lib.aggregations.exceptions import AggregationError

logger = logging.getLogger(__name__)

Source = Union[pd.DataFrame, Iterable[Any]]


def _flatten(
    state: Any, prefix: tuple[Any, ...] = ()
) -> Iterator[tuple[tuple[Any, ...], Any]]:
    if isinstance(state, Mapping):
        for name, sub in state.items():
            yield from _flatten(sub, prefix + (name,))
    else:
        yield prefix, state


@dataclass(frozen=True)
class ClassificationView:
    """Wrapper *lazy* para alimentar uma árvore de agregação com itens.

    Use `with_factory(...)` para definir a fábrica do agregador raiz
    (normalmente um ``ClassifyingFactory``). Nada é computado até
    `compute()` / `to_frame()`; cada chamada parte de um agregador novo.

    Args:
        base: ``DataFrame`` (cada linha vira um ``dict``) ou qualquer iterável
            de itens. Iteradores de passo único só podem ser computados uma vez.
        factory: fábrica do agregador raiz.
    """

    base: Source
    factory: BaseAggregatorFactory | None = None

    def with_factory(self, factory: BaseAggregatorFactory) -> ClassificationView:
        return ClassificationView(self.base, factory)

    def compute(self) -> Any:
        if self.factory is None:
            raise AggregationError("Nenhuma fábrica definida. Use with_factory(...)")

        aggregator = self.factory.create()
        n = 0
        for item in self._items():
            aggregator.put(item)
            n += 1

        logger.debug(
            "ClassificationView.compute: agregador=%s, itens=%d",
            aggregator.__class__.__name__,
            n,
        )
        return resolve_state(aggregator)

    def to_dict(self) -> Any:
        return self.compute()

    def to_frame(
        self, levels: Sequence[str] | None = None, value_name: str = "value"
    ) -> pd.DataFrame:
        """Achata o estado aninhado em um DataFrame "longo".

        Uma linha por folha, uma coluna por nível de aninhamento (``level_0``,
        ``level_1``... ou os nomes em ``levels``). Ramos mais rasos são
        completados com ``None``. Sem folhas (entrada vazia ou todos os ramos
        vazios), devolve um DataFrame vazio com as colunas pedidas.
        """
        rows = list(_flatten(self.compute()))
        if not rows:
            return pd.DataFrame(columns=[*(levels or []), value_name])
        depth = max((len(path) for path, _ in rows), default=0)
        if levels is None:
            levels = [f"level_{i}" for i in range(depth)]
        elif len(levels) != depth:
            raise AggregationError(
                f"levels deve ter {depth} nome(s), recebido {len(levels)}"
            )
        records = [
            list(path) + [None] * (depth - len(path)) + [value] for path, value in rows
        ]
        return pd.DataFrame(records, columns=[*levels, value_name])

    def _items(self) -> Iterable[Any]:
        if isinstance(self.base, pd.DataFrame):
            return self.base.to_dict(orient="records")
        return self.base
