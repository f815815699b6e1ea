"""Exceptions for aggregations."""

from __future__ import annotations


class AggregationError(Exception):
    """Erro genérico no pipeline de agregação."""


class ExtractionError(AggregationError, LookupError):
    """Lançada quando um extrator não consegue derivar um valor do item."""


class ConfigurationError(AggregationError, TypeError):
    """Classificador/agregador construído sem colaborador obrigatório."""


class InvalidBucketNameError(AggregationError, TypeError):
    """Nome de bucket não utilizável como chave (ex.: não-hashable)."""


class RegistryError(AggregationError):
    """Problemas ao registrar ou construir agregadores via especificação declarativa."""
