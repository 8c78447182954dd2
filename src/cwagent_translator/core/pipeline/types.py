# src/cwagent_translator/core/pipeline/types.py
"""
Tipos canônicos da tradução de configuração.

Este módulo define as estruturas produzidas pelo motor de derivação e
consumidas pelo transporte de exportação (externo a este pacote).

Componentes principais:
    - ResourceKind             → tipo de ambiente monitorado (ECS, Kubernetes, Prometheus)
    - KubernetesFeatureFlags   → toggles booleanos da seção kubernetes
    - LabelMatcher             → filtro de labels de uma declaração
    - MetricDeclaration        → conjuntos de dimensões + seletores de métricas
    - MetricDescriptor         → override explícito de unidade de métrica
    - ExporterConfig           → configuração tipada final do exportador

Invariantes:
    - A ordem de `MetricDeclaration.dimensions` e de
      `ExporterConfig.metric_declarations` é semântica: o consumidor usa
      o primeiro conjunto de dimensões que casa com a métrica
    - `None` e lista vazia são valores distintos em `ExporterConfig`
      (`parse_json_encoded_attr_values`, `metric_descriptors`)

Limites explícitos:
    - Nenhuma lógica de derivação vive neste módulo
    - Não realiza chamadas ao serviço de métricas
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ResourceKind(str, Enum):
    """
    Categoria do ambiente monitorado.

    O valor textual é a chave da seção correspondente em
    `logs.metrics_collected` da configuração do agente.
    """
    ECS = "ecs"
    KUBERNETES = "kubernetes"
    PROMETHEUS = "prometheus"


@dataclass(frozen=True)
class KubernetesFeatureFlags:
    """
    Toggles que expandem ou substituem entradas do template Kubernetes.

    Cada flag é independente; combinações são válidas e compostas
    pelo motor de derivação.
    """
    enable_full_pod_metrics: bool = False
    enable_container_metrics: bool = False
    enable_node_detailed_metrics: bool = False


@dataclass(frozen=True)
class LabelMatcher:
    """Filtro por labels: os valores de `label_names` devem casar com `regex`."""
    label_names: List[str]
    regex: str


@dataclass(frozen=True)
class MetricDeclaration:
    """
    Unidade de saída do motor de derivação.

    Campos:
        - dimensions: lista ordenada de conjuntos de dimensões
        - metric_name_selectors: padrões (regex) de nomes de métricas
        - label_matchers: filtros opcionais por label (None quando ausentes)
    """
    dimensions: List[List[str]] = field(default_factory=list)
    metric_name_selectors: List[str] = field(default_factory=list)
    label_matchers: Optional[List[LabelMatcher]] = None


@dataclass(frozen=True)
class MetricDescriptor:
    metric_name: str
    unit: str
    overwrite: bool = False


@dataclass(frozen=True)
class ResourceToTelemetrySettings:
    enabled: bool = True


@dataclass(frozen=True)
class ExporterConfig:
    """
    Configuração tipada final do exportador EMF.

    Decisões arquiteturais:
        - O objeto é imutável (frozen) após a derivação
        - Campos opcionais usam `None` para "ausente", nunca lista vazia
        - Valores fixos do exportador possuem defaults explícitos

    Limites explícitos:
        - Não valida templates de log group / log stream
        - Não executa transporte
    """
    namespace: str = ""
    log_group_name: str = ""
    log_stream_name: str = ""
    dimension_rollup_option: str = "NoDimensionRollup"
    parse_json_encoded_attr_values: Optional[List[str]] = None
    output_destination: str = "cloudwatch"
    eks_fargate_container_insights_enabled: bool = False
    resource_to_telemetry_conversion: ResourceToTelemetrySettings = field(
        default_factory=ResourceToTelemetrySettings
    )
    metric_declarations: List[MetricDeclaration] = field(default_factory=list)
    metric_descriptors: Optional[List[MetricDescriptor]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável (None é preservado)."""
        return asdict(self)
