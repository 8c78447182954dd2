# src/cwagent_translator/translate/awsemf/kubernetes.py
"""
Declarações de métricas para Container Insights em Kubernetes.

As declarações são montadas a partir de um template segmentado por
escopo e reescritas por funções puras, uma por feature flag:

    template base ──► full_pod ──► container ──► node_detailed ──► lista final

Segmentos (na ordem de achatamento):
    container, pod, node, node_filesystem, service, workload, namespace, cluster

Decisões arquiteturais:
    - Cada transformação recebe um template e devolve um novo template
    - Uma transformação altera apenas os segmentos do seu escopo, o que
      mantém as flags independentes entre si
    - A ordem de aplicação é fixa e explícita (`FLAG_TRANSFORMS`)

Invariantes:
    - Conjuntos de dimensões mais específicos precedem os mais amplos
      dentro de uma declaração (o consumidor usa o primeiro que casar)
    - O template base é reconstruído a cada derivação; nenhuma lista é
      compartilhada entre resultados

Limites explícitos:
    - Não lê a configuração (recebe `KubernetesFeatureFlags` prontas)
    - Não decide namespace nem templates de log (ver `settings`)
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Callable, List, Sequence, Tuple

from cwagent_translator.core.pipeline.types import KubernetesFeatureFlags, MetricDeclaration

# -----------------------------
# Conjuntos de dimensões
# -----------------------------
CLUSTER = ("ClusterName",)
NAMESPACE = ("Namespace", "ClusterName")
SERVICE = ("Service", "Namespace", "ClusterName")
POD = ("PodName", "Namespace", "ClusterName")
FULL_POD = ("FullPodName", "PodName", "Namespace", "ClusterName")
NODE = ("NodeName", "InstanceId", "ClusterName")
CONTAINER = ("ContainerName", "Namespace", "ClusterName")
CONTAINER_FULL_POD = ("ContainerName", "FullPodName", "Namespace", "ClusterName")

# -----------------------------
# Seletores de métricas
# -----------------------------
POD_UTILIZATION_METRICS = (
    "pod_cpu_utilization",
    "pod_memory_utilization",
    "pod_network_rx_bytes",
    "pod_network_tx_bytes",
    "pod_cpu_utilization_over_pod_limit",
    "pod_memory_utilization_over_pod_limit",
)
POD_RESERVED_CAPACITY_METRICS = ("pod_cpu_reserved_capacity", "pod_memory_reserved_capacity")
POD_RESTART_METRICS = ("pod_number_of_container_restarts",)
POD_CONTAINER_COUNT_METRICS = ("pod_number_of_containers", "pod_number_of_running_containers")

NODE_INSTANCE_METRICS = (
    "node_cpu_utilization",
    "node_memory_utilization",
    "node_network_total_bytes",
    "node_cpu_reserved_capacity",
    "node_memory_reserved_capacity",
    "node_number_of_running_pods",
    "node_number_of_running_containers",
)
NODE_CLUSTER_METRICS = (
    "node_cpu_usage_total",
    "node_cpu_limit",
    "node_memory_working_set",
    "node_memory_limit",
)
NODE_STATUS_METRICS = (
    "node_status_condition_ready",
    "node_status_condition_disk_pressure",
    "node_status_condition_memory_pressure",
    "node_status_condition_pid_pressure",
    "node_status_condition_network_unavailable",
    "node_status_capacity_pods",
    "node_status_allocatable_pods",
)
NODE_FILESYSTEM_METRICS = ("node_filesystem_utilization",)
NODE_FILESYSTEM_INODE_METRICS = ("node_filesystem_inodes", "node_filesystem_inodes_free")

CONTAINER_METRICS = (
    "container_cpu_utilization",
    "container_memory_utilization",
    "container_filesystem_usage",
)
DEPLOYMENT_METRICS = (
    "deployment_spec_replicas",
    "deployment_status_replicas",
    "deployment_status_replicas_available",
    "deployment_status_replicas_unavailable",
)
DAEMONSET_METRICS = (
    "daemonset_status_number_available",
    "daemonset_status_number_unavailable",
    "daemonset_status_desired_number_scheduled",
    "daemonset_status_current_number_scheduled",
)
SERVICE_METRICS = ("service_number_of_running_pods",)
NAMESPACE_METRICS = ("namespace_number_of_running_pods",)
CLUSTER_METRICS = ("cluster_node_count", "cluster_failed_node_count")


def _declaration(dimensions: Sequence[Sequence[str]], *selector_groups: Sequence[str]) -> MetricDeclaration:
    selectors: List[str] = []
    for group in selector_groups:
        selectors.extend(group)
    return MetricDeclaration(
        dimensions=[list(d) for d in dimensions],
        metric_name_selectors=selectors,
    )


Segment = Tuple[MetricDeclaration, ...]


@dataclass(frozen=True)
class KubernetesTemplate:
    """Declarações agrupadas por escopo; a ordem dos campos é a ordem de saída."""
    container: Segment = ()
    pod: Segment = ()
    node: Segment = ()
    node_filesystem: Segment = ()
    service: Segment = ()
    workload: Segment = ()
    namespace: Segment = ()
    cluster: Segment = ()

    def declarations(self) -> List[MetricDeclaration]:
        result: List[MetricDeclaration] = []
        for f in fields(self):
            result.extend(getattr(self, f.name))
        return result


def baseline_template() -> KubernetesTemplate:
    return KubernetesTemplate(
        pod=(
            _declaration([POD, SERVICE, NAMESPACE, CLUSTER], POD_UTILIZATION_METRICS),
            _declaration([POD, CLUSTER], POD_RESERVED_CAPACITY_METRICS),
            _declaration([POD], POD_RESTART_METRICS),
        ),
        node=(
            _declaration([NODE, CLUSTER], NODE_INSTANCE_METRICS),
            _declaration([CLUSTER], NODE_CLUSTER_METRICS),
        ),
        node_filesystem=(_declaration([NODE, CLUSTER], NODE_FILESYSTEM_METRICS),),
        service=(_declaration([SERVICE, CLUSTER], SERVICE_METRICS),),
        namespace=(_declaration([NAMESPACE, CLUSTER], NAMESPACE_METRICS),),
        cluster=(_declaration([CLUSTER], CLUSTER_METRICS),),
    )


def with_full_pod_metrics(template: KubernetesTemplate) -> KubernetesTemplate:
    """
    Adiciona o conjunto `FullPodName` à frente das dimensões de pod.

    A declaração de utilização ganha `FULL_POD` como primeiro conjunto;
    as declarações de capacidade reservada e de reinícios são
    consolidadas em uma única declaração, que passa a incluir as
    contagens de containers do pod.
    """
    utilization = template.pod[0]
    return replace(
        template,
        pod=(
            replace(utilization, dimensions=[list(FULL_POD)] + [list(d) for d in utilization.dimensions]),
            _declaration(
                [FULL_POD, POD, CLUSTER, SERVICE],
                POD_RESERVED_CAPACITY_METRICS,
                POD_RESTART_METRICS,
                POD_CONTAINER_COUNT_METRICS,
            ),
        ),
    )


def with_container_metrics(template: KubernetesTemplate) -> KubernetesTemplate:
    """Antepõe a declaração de containers e adiciona deployments e daemonsets."""
    return replace(
        template,
        container=(_declaration([CONTAINER_FULL_POD, CONTAINER], CONTAINER_METRICS),),
        workload=(
            _declaration([POD, CLUSTER], DEPLOYMENT_METRICS),
            _declaration([POD, CLUSTER], DAEMONSET_METRICS),
        ),
    )


def with_node_detailed_metrics(template: KubernetesTemplate) -> KubernetesTemplate:
    """
    Substitui (não estende) as declarações de node.

    O segmento de node passa a ter uma única declaração cujos seletores
    reúnem as métricas por instância, as de nível de cluster e as de
    status/capacidade; o filesystem ganha as métricas de inodes.
    """
    return replace(
        template,
        node=(
            _declaration(
                [NODE, CLUSTER],
                NODE_INSTANCE_METRICS,
                NODE_CLUSTER_METRICS,
                NODE_STATUS_METRICS,
            ),
        ),
        node_filesystem=(
            _declaration([NODE, CLUSTER], NODE_FILESYSTEM_METRICS, NODE_FILESYSTEM_INODE_METRICS),
        ),
    )


TemplateTransform = Callable[[KubernetesTemplate], KubernetesTemplate]

FLAG_TRANSFORMS: Tuple[Tuple[str, TemplateTransform], ...] = (
    ("enable_full_pod_metrics", with_full_pod_metrics),
    ("enable_container_metrics", with_container_metrics),
    ("enable_node_detailed_metrics", with_node_detailed_metrics),
)


def kubernetes_template(flags: KubernetesFeatureFlags) -> KubernetesTemplate:
    template = baseline_template()
    for flag_name, transform in FLAG_TRANSFORMS:
        if getattr(flags, flag_name):
            template = transform(template)
    return template


def kubernetes_metric_declarations(flags: KubernetesFeatureFlags) -> List[MetricDeclaration]:
    return kubernetes_template(flags).declarations()
