# src/cwagent_translator/core/pipeline/__init__.py
"""
# Pipeline de tradução

Este pacote define as **estruturas compartilhadas** pelas duas etapas
da tradução (merge hierárquico e derivação de declarações).

## Componentes

- `TranslationContext` → eventos de log estruturados e warnings por seção
- `types`              → modelo tipado de saída (`ExporterConfig` e afins)

## Invariantes

- Cada tradução possui seu próprio contexto
- Os tipos de saída são imutáveis após construídos
"""

from .context import TranslationContext
from .types import (
    ExporterConfig,
    KubernetesFeatureFlags,
    LabelMatcher,
    MetricDeclaration,
    MetricDescriptor,
    ResourceKind,
    ResourceToTelemetrySettings,
)

__all__ = [
    "ExporterConfig",
    "KubernetesFeatureFlags",
    "LabelMatcher",
    "MetricDeclaration",
    "MetricDescriptor",
    "ResourceKind",
    "ResourceToTelemetrySettings",
    "TranslationContext",
]
