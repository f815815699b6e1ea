from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# -----------------------------------------------------------------------------
# Contratos de capacidade: agregador, fábrica de agregadores e extrator
# -----------------------------------------------------------------------------
class BaseAggregator(ABC):
    """Acumula itens um a um e expõe um estado computado.

    Ciclo de vida:
      1) Criado vazio (normalmente por uma :class:`BaseAggregatorFactory`).
      2) ``put(item)`` incorpora um item; não há ``reset``.
      3) ``get_state()`` devolve a visão agregada atual.

    ``put`` não revalida decisões de roteamento: qualquer item que o chamador
    encaminhar para cá deve ser aceito.
    """

    @abstractmethod
    def put(self, item: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_state(self) -> Any:
        raise NotImplementedError


class BaseAggregatorFactory(ABC):
    """Produz instâncias **novas e independentes** de agregadores."""

    @abstractmethod
    def create(self) -> BaseAggregator:
        raise NotImplementedError


class BaseExtractor(ABC):
    """Mapeia um item para um valor derivado (campo, chave, projeção).

    Deve ser uma função pura do item: não pode mutá-lo. Quando o valor não
    puder ser derivado, lance :class:`ExtractionError`.
    """

    @abstractmethod
    def extract(self, item: Any) -> Any:
        raise NotImplementedError

    def __call__(self, item: Any) -> Any:
        return self.extract(item)
