# src/cwagent_translator/translate/awsemf/ecs.py
"""
Declarações de métricas para Container Insights em ECS.

O conjunto é fixo (sem sensibilidade a flags): uma declaração por
instância de container e um rollup apenas por cluster.
"""

from __future__ import annotations

from typing import List

from cwagent_translator.core.pipeline.types import MetricDeclaration

INSTANCE_DIMENSIONS = ("ContainerInstanceId", "InstanceId", "ClusterName")
CLUSTER_DIMENSIONS = ("ClusterName",)

INSTANCE_METRICS = (
    "instance_cpu_reserved_capacity",
    "instance_cpu_utilization",
    "instance_filesystem_utilization",
    "instance_memory_reserved_capacity",
    "instance_memory_utilization",
    "instance_network_total_bytes",
    "instance_number_of_running_tasks",
)

CLUSTER_METRICS = (
    "instance_cpu_limit",
    "instance_cpu_reserved_capacity",
    "instance_cpu_usage_total",
    "instance_cpu_utilization",
    "instance_filesystem_utilization",
    "instance_memory_limit",
    "instance_memory_reserved_capacity",
    "instance_memory_utilization",
    "instance_memory_working_set",
    "instance_network_total_bytes",
    "instance_number_of_running_tasks",
)


def ecs_metric_declarations() -> List[MetricDeclaration]:
    return [
        MetricDeclaration(
            dimensions=[list(INSTANCE_DIMENSIONS)],
            metric_name_selectors=list(INSTANCE_METRICS),
        ),
        MetricDeclaration(
            dimensions=[list(CLUSTER_DIMENSIONS)],
            metric_name_selectors=list(CLUSTER_METRICS),
        ),
    ]
