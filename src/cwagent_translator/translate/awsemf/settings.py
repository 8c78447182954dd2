# src/cwagent_translator/translate/awsemf/settings.py
"""
Configurações escalares do exportador por tipo de recurso.

Namespace, templates de log group / log stream e a lista de atributos
JSON a decodificar dependem apenas do tipo de recurso (e, para
Prometheus, dos valores informados pelo usuário).

Invariantes:
    - `parse_json_encoded_attr_values` é None quando o tipo de recurso
      não declara atributos (Prometheus), nunca lista vazia
    - Templates com `{Placeholder}` são repassados literalmente; a
      expansão é responsabilidade do exportador
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from cwagent_translator.core.pipeline.types import ResourceKind
from .prometheus import PrometheusScrapeConfig


@dataclass(frozen=True)
class ScalarSettings:
    namespace: str
    log_group_name: str
    log_stream_name: str
    parse_json_encoded_attr_values: Optional[List[str]] = None


ECS_NAMESPACE = "ECS/ContainerInsights"
ECS_LOG_GROUP_NAME = "/aws/ecs/containerinsights/{ClusterName}/performance"
ECS_LOG_STREAM_NAME = "NodeTelemetry-{ContainerInstanceId}"
ECS_JSON_ATTRIBUTES = ("Sources",)

KUBERNETES_NAMESPACE = "ContainerInsights"
KUBERNETES_LOG_GROUP_NAME = "/aws/containerinsights/{ClusterName}/performance"
KUBERNETES_LOG_STREAM_NAME = "{NodeName}"
KUBERNETES_JSON_ATTRIBUTES = ("Sources", "kubernetes")


def ecs_settings() -> ScalarSettings:
    return ScalarSettings(
        namespace=ECS_NAMESPACE,
        log_group_name=ECS_LOG_GROUP_NAME,
        log_stream_name=ECS_LOG_STREAM_NAME,
        parse_json_encoded_attr_values=list(ECS_JSON_ATTRIBUTES),
    )


def kubernetes_settings() -> ScalarSettings:
    return ScalarSettings(
        namespace=KUBERNETES_NAMESPACE,
        log_group_name=KUBERNETES_LOG_GROUP_NAME,
        log_stream_name=KUBERNETES_LOG_STREAM_NAME,
        parse_json_encoded_attr_values=list(KUBERNETES_JSON_ATTRIBUTES),
    )


def prometheus_settings(scrape: PrometheusScrapeConfig) -> ScalarSettings:
    # sem emf_processor o namespace fica vazio (default do exportador)
    return ScalarSettings(
        namespace=scrape.metric_namespace if scrape.has_emf_processor else "",
        log_group_name=scrape.log_group_name,
        log_stream_name=scrape.log_stream_name,
        parse_json_encoded_attr_values=None,
    )


def settings_for(kind: ResourceKind, scrape: Optional[PrometheusScrapeConfig] = None) -> ScalarSettings:
    if kind is ResourceKind.ECS:
        return ecs_settings()
    if kind is ResourceKind.KUBERNETES:
        return kubernetes_settings()
    return prometheus_settings(scrape or PrometheusScrapeConfig())
