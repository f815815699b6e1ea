"""Aggregations: classificação em buckets nomeados com agregação por bucket

Reexporta a API pública dividida em módulos menores dentro de
`groupflow.lib.aggregations`.
"""

from __future__ import annotations

# Concrete aggregators & factories
from groupflow.lib.aggregations.aggregators import (
    ClassifyingAggregator,
    ClassifyingFactory,
    CountingAggregator,
    CountingFactory,
    SummingAggregator,
    SummingFactory,
)

# Capability interfaces
from groupflow.lib.aggregations.base import (
    BaseAggregator,
    BaseAggregatorFactory,
    BaseExtractor,
)

# Routing engine
from groupflow.lib.aggregations.classifiers import (
    BaseClassifier,
    MultiValueClassifier,
    SinglePassClassifier,
    SingleValueClassifier,
    normalize_bucket_name,
    resolve_state,
)

# Re-export exceptions
from groupflow.lib.aggregations.exceptions import (
    AggregationError,
    ConfigurationError,
    ExtractionError,
    InvalidBucketNameError,
    RegistryError,
)

# Extractors
from groupflow.lib.aggregations.extractors import (
    CallableExtractor,
    FieldExtractor,
    as_extractor,
)

# Data models
from groupflow.lib.aggregations.models import ClassifierConfig

# Registry & builder
from groupflow.lib.aggregations.registry import (
    AGGREGATOR_REGISTRY,
    build_aggregator_from_spec,
    register_aggregator,
)

# Lazy view
from groupflow.lib.aggregations.view import ClassificationView

__all__ = [
    "AggregationError",
    "ConfigurationError",
    "ExtractionError",
    "InvalidBucketNameError",
    "RegistryError",
    "BaseAggregator",
    "BaseAggregatorFactory",
    "BaseExtractor",
    "FieldExtractor",
    "CallableExtractor",
    "as_extractor",
    "CountingAggregator",
    "CountingFactory",
    "SummingAggregator",
    "SummingFactory",
    "ClassifyingAggregator",
    "ClassifyingFactory",
    "BaseClassifier",
    "SinglePassClassifier",
    "SingleValueClassifier",
    "MultiValueClassifier",
    "normalize_bucket_name",
    "resolve_state",
    "ClassifierConfig",
    "ClassificationView",
    "AGGREGATOR_REGISTRY",
    "register_aggregator",
    "build_aggregator_from_spec",
]
