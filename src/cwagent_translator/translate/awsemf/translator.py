# src/cwagent_translator/translate/awsemf/translator.py
"""
Motor de derivação de declarações para o exportador EMF.

Consome a configuração canônica (já mesclada) e produz o
`ExporterConfig` tipado:

    configuração canônica
        → tipo de recurso (ECS | Kubernetes | Prometheus)
        → flags / seção de scrape
        → `derive(...)` → `ExporterConfig`

Política de detecção:
    O primeiro tipo presente em `logs.metrics_collected`, na ordem
    ECS, Kubernetes, Prometheus, é selecionado. Nenhum presente é o
    único erro de controle de fluxo desta etapa
    (`UnsupportedResourceKindError`).

Invariantes:
    - A mesma entrada sempre produz o mesmo `ExporterConfig`
    - A derivação é total: não há resultado parcial
    - A derivação não depende do motor de merge, apenas da árvore canônica
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple, Union

from cwagent_translator.core.pipeline.context import TranslationContext
from cwagent_translator.core.pipeline.types import (
    ExporterConfig,
    KubernetesFeatureFlags,
    ResourceKind,
    ResourceToTelemetrySettings,
)
from cwagent_translator.translate.errors import UnsupportedResourceKindError
from .common import (
    LOGS_METRICS_COLLECTED,
    OUTPUT_CLOUDWATCH,
    ROLLUP_NO_DIMENSIONS,
    get_bool,
    get_mapping,
    is_set,
    section_path,
)
from .ecs import ecs_metric_declarations
from .kubernetes import kubernetes_metric_declarations
from .prometheus import (
    PrometheusScrapeConfig,
    parse_prometheus_section,
    prometheus_metric_declarations,
    prometheus_metric_descriptors,
)
from .settings import settings_for

# ordem de precedência da detecção
RESOURCE_KIND_PRECEDENCE = (ResourceKind.ECS, ResourceKind.KUBERNETES, ResourceKind.PROMETHEUS)


def resource_path(kind: ResourceKind) -> Tuple[str, ...]:
    return LOGS_METRICS_COLLECTED + (kind.value,)


def detect_resource_kind(conf: Mapping[str, Any]) -> ResourceKind:
    """
    Seleciona o tipo de recurso a partir da configuração canônica.

    Raises:
        UnsupportedResourceKindError: Se nenhuma seção suportada estiver presente.
    """
    for kind in RESOURCE_KIND_PRECEDENCE:
        if is_set(conf, resource_path(kind)):
            return kind
    raise UnsupportedResourceKindError(None, [k.value for k in RESOURCE_KIND_PRECEDENCE])


def read_kubernetes_flags(conf: Mapping[str, Any]) -> KubernetesFeatureFlags:
    base = resource_path(ResourceKind.KUBERNETES)
    return KubernetesFeatureFlags(
        enable_full_pod_metrics=get_bool(conf, base + ("enable_full_pod_metrics",)),
        enable_container_metrics=get_bool(conf, base + ("enable_container_metrics",)),
        enable_node_detailed_metrics=get_bool(conf, base + ("enable_node_detailed_metrics",)),
    )


def coerce_resource_kind(kind: Union[ResourceKind, str]) -> ResourceKind:
    if isinstance(kind, ResourceKind):
        return kind
    try:
        return ResourceKind(kind)
    except ValueError:
        raise UnsupportedResourceKindError(kind, [k.value for k in ResourceKind]) from None


def derive(
    kind: Union[ResourceKind, str],
    flags: Optional[KubernetesFeatureFlags] = None,
    scrape: Optional[PrometheusScrapeConfig] = None,
    ctx: Optional[TranslationContext] = None,
) -> ExporterConfig:
    """
    Deriva o `ExporterConfig` para um tipo de recurso.

    Args:
        kind (Union[ResourceKind, str]): Tipo de recurso monitorado.
        flags (Optional[KubernetesFeatureFlags]): Flags Kubernetes
            (ignoradas pelos demais tipos; default: todas desligadas).
        scrape (Optional[PrometheusScrapeConfig]): Seção Prometheus já
            interpretada (ignorada pelos demais tipos).
        ctx (Optional[TranslationContext]): Contexto para warnings.

    Returns:
        ExporterConfig: Configuração tipada final.

    Raises:
        UnsupportedResourceKindError: Se `kind` não for um tipo suportado.
    """
    kind = coerce_resource_kind(kind)
    path = section_path(resource_path(kind))
    descriptors = None

    if kind is ResourceKind.ECS:
        declarations = ecs_metric_declarations()
    elif kind is ResourceKind.KUBERNETES:
        declarations = kubernetes_metric_declarations(flags or KubernetesFeatureFlags())
    else:
        scrape = scrape or PrometheusScrapeConfig()
        declarations = prometheus_metric_declarations(scrape, ctx, path)
        descriptors = prometheus_metric_descriptors(scrape, ctx, path)

    settings = settings_for(kind, scrape)

    if ctx is not None:
        ctx.log(
            section=path,
            level="INFO",
            message="derived",
            resource_kind=kind.value,
            declarations=len(declarations),
            descriptors=None if descriptors is None else len(descriptors),
        )

    return ExporterConfig(
        namespace=settings.namespace,
        log_group_name=settings.log_group_name,
        log_stream_name=settings.log_stream_name,
        dimension_rollup_option=ROLLUP_NO_DIMENSIONS,
        parse_json_encoded_attr_values=settings.parse_json_encoded_attr_values,
        output_destination=OUTPUT_CLOUDWATCH,
        eks_fargate_container_insights_enabled=False,
        resource_to_telemetry_conversion=ResourceToTelemetrySettings(enabled=True),
        metric_declarations=declarations,
        metric_descriptors=descriptors,
    )


class Translator:
    """
    Tradutor da configuração canônica para o exportador `awsemf`.

    O tradutor não mantém estado entre chamadas; uma instância pode ser
    reutilizada para qualquer número de traduções.
    """

    ID = "awsemf"

    @property
    def id(self) -> str:
        return self.ID

    def translate(
        self,
        conf: Mapping[str, Any],
        ctx: Optional[TranslationContext] = None,
    ) -> ExporterConfig:
        kind = detect_resource_kind(conf)
        if ctx is not None:
            ctx.meta["resource_kind"] = kind.value

        flags = None
        scrape = None
        if kind is ResourceKind.KUBERNETES:
            flags = read_kubernetes_flags(conf)
        elif kind is ResourceKind.PROMETHEUS:
            path = resource_path(kind)
            scrape = parse_prometheus_section(get_mapping(conf, path), ctx, section_path(path))

        return derive(kind, flags=flags, scrape=scrape, ctx=ctx)
