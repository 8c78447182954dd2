# tests/translate/awsemf/test_translator.py
"""
Testes de derivação do `ExporterConfig` a partir da configuração canônica.

Cada cenário compara a saída completa (escalares, declarações e
descritores) com o valor esperado literal, incluindo a distinção entre
`None` e lista vazia.

Cenários:
    - ECS
    - Kubernetes: sem flags, full pod, container, full pod + container, node detalhado
    - Prometheus: com declarações, sem declarações, sem `emf_processor`

Invariantes:
    - Escalares fixos do exportador não variam por tipo de recurso
    - A ordem das declarações e dos conjuntos de dimensões é preservada
"""

import pytest

try:
    from cwagent_translator.core.pipeline.types import (
        LabelMatcher,
        MetricDeclaration,
        MetricDescriptor,
        ResourceToTelemetrySettings,
    )
    from cwagent_translator.translate.awsemf import Translator
    from cwagent_translator.translate.errors import UnsupportedResourceKindError
except Exception as e:  # noqa: BLE001
    Translator = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o tradutor awsemf esteja disponível para os testes.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing awsemf translator. Implement:\n"
            "- src/cwagent_translator/translate/awsemf/translator.py (Translator)\n"
            "- src/cwagent_translator/core/pipeline/types.py (ExporterConfig, MetricDeclaration)\n"
            f"Import error: {_IMPORT_ERR}"
        )


# -----------------------------
# Valores esperados
# -----------------------------
POD = ["PodName", "Namespace", "ClusterName"]
FULL_POD = ["FullPodName", "PodName", "Namespace", "ClusterName"]
SERVICE = ["Service", "Namespace", "ClusterName"]
NAMESPACE = ["Namespace", "ClusterName"]
CLUSTER = ["ClusterName"]
NODE = ["NodeName", "InstanceId", "ClusterName"]

POD_UTILIZATION = [
    "pod_cpu_utilization",
    "pod_memory_utilization",
    "pod_network_rx_bytes",
    "pod_network_tx_bytes",
    "pod_cpu_utilization_over_pod_limit",
    "pod_memory_utilization_over_pod_limit",
]
NODE_INSTANCE = [
    "node_cpu_utilization",
    "node_memory_utilization",
    "node_network_total_bytes",
    "node_cpu_reserved_capacity",
    "node_memory_reserved_capacity",
    "node_number_of_running_pods",
    "node_number_of_running_containers",
]
NODE_CLUSTER = ["node_cpu_usage_total", "node_cpu_limit", "node_memory_working_set", "node_memory_limit"]


def _decl(dimensions, selectors, label_matchers=None):
    return MetricDeclaration(
        dimensions=dimensions,
        metric_name_selectors=selectors,
        label_matchers=label_matchers,
    )


def _pod_baseline():
    return [
        _decl([POD, SERVICE, NAMESPACE, CLUSTER], POD_UTILIZATION),
        _decl([POD, CLUSTER], ["pod_cpu_reserved_capacity", "pod_memory_reserved_capacity"]),
        _decl([POD], ["pod_number_of_container_restarts"]),
    ]


def _pod_full():
    return [
        _decl([FULL_POD, POD, SERVICE, NAMESPACE, CLUSTER], POD_UTILIZATION),
        _decl(
            [FULL_POD, POD, CLUSTER, SERVICE],
            [
                "pod_cpu_reserved_capacity",
                "pod_memory_reserved_capacity",
                "pod_number_of_container_restarts",
                "pod_number_of_containers",
                "pod_number_of_running_containers",
            ],
        ),
    ]


def _node_baseline():
    return [
        _decl([NODE, CLUSTER], NODE_INSTANCE),
        _decl([CLUSTER], NODE_CLUSTER),
        _decl([NODE, CLUSTER], ["node_filesystem_utilization"]),
    ]


def _container():
    return [
        _decl(
            [["ContainerName", "FullPodName", "Namespace", "ClusterName"], ["ContainerName", "Namespace", "ClusterName"]],
            ["container_cpu_utilization", "container_memory_utilization", "container_filesystem_usage"],
        )
    ]


def _service():
    return [_decl([SERVICE, CLUSTER], ["service_number_of_running_pods"])]


def _workload():
    return [
        _decl(
            [POD, CLUSTER],
            [
                "deployment_spec_replicas",
                "deployment_status_replicas",
                "deployment_status_replicas_available",
                "deployment_status_replicas_unavailable",
            ],
        ),
        _decl(
            [POD, CLUSTER],
            [
                "daemonset_status_number_available",
                "daemonset_status_number_unavailable",
                "daemonset_status_desired_number_scheduled",
                "daemonset_status_current_number_scheduled",
            ],
        ),
    ]


def _tail():
    return [
        _decl([NAMESPACE, CLUSTER], ["namespace_number_of_running_pods"]),
        _decl([CLUSTER], ["cluster_node_count", "cluster_failed_node_count"]),
    ]


def _assert_kubernetes_scalars(cfg):
    assert cfg.namespace == "ContainerInsights"
    assert cfg.log_group_name == "/aws/containerinsights/{ClusterName}/performance"
    assert cfg.log_stream_name == "{NodeName}"
    assert cfg.parse_json_encoded_attr_values == ["Sources", "kubernetes"]
    assert cfg.metric_descriptors is None


def _assert_fixed_scalars(cfg):
    assert cfg.dimension_rollup_option == "NoDimensionRollup"
    assert cfg.output_destination == "cloudwatch"
    assert cfg.eks_fargate_container_insights_enabled is False
    assert cfg.resource_to_telemetry_conversion == ResourceToTelemetrySettings(enabled=True)


# -----------------------------
# ECS
# -----------------------------
def test_translator_id():
    _require_imports()
    assert Translator().id == "awsemf"


def test_ecs(ecs_fragment):
    """
    Verifica a derivação completa para ECS.

    Invariantes:
        - Duas declarações fixas (instância e cluster)
        - `metric_descriptors` é None
    """
    _require_imports()
    cfg = Translator().translate(ecs_fragment)

    _assert_fixed_scalars(cfg)
    assert cfg.namespace == "ECS/ContainerInsights"
    assert cfg.log_group_name == "/aws/ecs/containerinsights/{ClusterName}/performance"
    assert cfg.log_stream_name == "NodeTelemetry-{ContainerInstanceId}"
    assert cfg.parse_json_encoded_attr_values == ["Sources"]
    assert cfg.metric_descriptors is None
    assert cfg.metric_declarations == [
        _decl(
            [["ContainerInstanceId", "InstanceId", "ClusterName"]],
            [
                "instance_cpu_reserved_capacity",
                "instance_cpu_utilization",
                "instance_filesystem_utilization",
                "instance_memory_reserved_capacity",
                "instance_memory_utilization",
                "instance_network_total_bytes",
                "instance_number_of_running_tasks",
            ],
        ),
        _decl(
            [["ClusterName"]],
            [
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
            ],
        ),
    ]


# -----------------------------
# Kubernetes
# -----------------------------
def test_kubernetes_baseline(kubernetes_fragment):
    _require_imports()
    cfg = Translator().translate(kubernetes_fragment())

    _assert_fixed_scalars(cfg)
    _assert_kubernetes_scalars(cfg)
    assert cfg.metric_declarations == _pod_baseline() + _node_baseline() + _service() + _tail()


def test_kubernetes_full_pod(kubernetes_fragment):
    _require_imports()
    cfg = Translator().translate(kubernetes_fragment(enable_full_pod_metrics=True))

    _assert_kubernetes_scalars(cfg)
    assert cfg.metric_declarations == _pod_full() + _node_baseline() + _service() + _tail()


def test_kubernetes_container(kubernetes_fragment):
    """
    Verifica a flag de containers isoladamente.

    Invariantes:
        - A declaração de containers é a primeira da lista
        - Declarações de pod permanecem as do template base
        - Deployments e daemonsets entram após services
    """
    _require_imports()
    cfg = Translator().translate(kubernetes_fragment(enable_container_metrics=True))

    _assert_kubernetes_scalars(cfg)
    assert cfg.metric_declarations == (
        _container() + _pod_baseline() + _node_baseline() + _service() + _workload() + _tail()
    )


def test_kubernetes_full_pod_and_container(kubernetes_fragment):
    _require_imports()
    cfg = Translator().translate(
        kubernetes_fragment(enable_full_pod_metrics=True, enable_container_metrics=True)
    )

    _assert_kubernetes_scalars(cfg)
    assert cfg.metric_declarations == (
        _container() + _pod_full() + _node_baseline() + _service() + _workload() + _tail()
    )


def test_kubernetes_node_detailed(kubernetes_fragment):
    _require_imports()
    cfg = Translator().translate(kubernetes_fragment(enable_node_detailed_metrics=True))

    node_detailed = [
        _decl(
            [NODE, CLUSTER],
            NODE_INSTANCE
            + NODE_CLUSTER
            + [
                "node_status_condition_ready",
                "node_status_condition_disk_pressure",
                "node_status_condition_memory_pressure",
                "node_status_condition_pid_pressure",
                "node_status_condition_network_unavailable",
                "node_status_capacity_pods",
                "node_status_allocatable_pods",
            ],
        ),
        _decl(
            [NODE, CLUSTER],
            ["node_filesystem_utilization", "node_filesystem_inodes", "node_filesystem_inodes_free"],
        ),
    ]

    _assert_kubernetes_scalars(cfg)
    assert cfg.metric_declarations == _pod_baseline() + node_detailed + _service() + _tail()


def test_kubernetes_non_boolean_flag_is_off(kubernetes_fragment):
    _require_imports()
    baseline = Translator().translate(kubernetes_fragment())
    cfg = Translator().translate(kubernetes_fragment(enable_full_pod_metrics="true"))
    assert cfg == baseline


# -----------------------------
# Prometheus
# -----------------------------
def test_prometheus_with_declarations(prometheus_fragment, prometheus_declaration):
    _require_imports()
    fragment = prometheus_fragment(
        {
            "metric_declaration": [prometheus_declaration],
            "metric_unit": {"jvm_gc_collection_seconds_sum": "Milliseconds"},
        }
    )
    cfg = Translator().translate(fragment)

    _assert_fixed_scalars(cfg)
    assert cfg.namespace == "CWAgent/Prometheus"
    assert cfg.log_group_name == "/test/log/group"
    assert cfg.log_stream_name == "{ServiceName}"
    assert cfg.parse_json_encoded_attr_values is None
    assert cfg.metric_declarations == [
        _decl(
            [["Service", "Namespace"]],
            ["^coredns_dns_request_type_count_total$"],
            [
                LabelMatcher(
                    label_names=["Service", "Namespace"],
                    regex="(.*node-exporter.*|.*kube-dns.*);kube-system$",
                )
            ],
        )
    ]
    assert cfg.metric_descriptors == [
        MetricDescriptor(metric_name="jvm_gc_collection_seconds_sum", unit="Milliseconds")
    ]


def test_prometheus_no_declarations(prometheus_fragment):
    _require_imports()
    fragment = prometheus_fragment({"metric_unit": {"jvm_gc_collection_seconds_sum": "Milliseconds"}})
    cfg = Translator().translate(fragment)

    assert cfg.namespace == "CWAgent/Prometheus"
    assert cfg.metric_declarations == [MetricDeclaration(metric_name_selectors=["$^"])]
    assert cfg.metric_declarations[0].dimensions == []
    assert cfg.metric_declarations[0].label_matchers is None
    assert cfg.metric_descriptors == [
        MetricDescriptor(metric_name="jvm_gc_collection_seconds_sum", unit="Milliseconds")
    ]


def test_prometheus_no_emf_processor(prometheus_fragment):
    _require_imports()
    cfg = Translator().translate(prometheus_fragment())

    _assert_fixed_scalars(cfg)
    assert cfg.namespace == ""
    assert cfg.log_group_name == "/test/log/group"
    assert cfg.log_stream_name == "{ServiceName}"
    assert cfg.parse_json_encoded_attr_values is None
    assert cfg.metric_declarations == [MetricDeclaration(metric_name_selectors=["$^"])]
    assert cfg.metric_descriptors is None


# -----------------------------
# Detecção e erros
# -----------------------------
def test_detection_precedence_ecs_over_kubernetes():
    _require_imports()
    conf = {"logs": {"metrics_collected": {"kubernetes": {}, "ecs": {}}}}
    assert Translator().translate(conf).namespace == "ECS/ContainerInsights"


def test_detection_precedence_kubernetes_over_prometheus():
    _require_imports()
    conf = {"logs": {"metrics_collected": {"prometheus": {}, "kubernetes": {}}}}
    assert Translator().translate(conf).namespace == "ContainerInsights"


@pytest.mark.parametrize(
    "conf",
    [
        {},
        {"logs": {}},
        {"logs": {"metrics_collected": {}}},
        {"logs": {"metrics_collected": {"emf": {}}}},
        {"metrics": {"metrics_collected": {"cpu": {}}}},
    ],
)
def test_no_resource_kind_raises(conf):
    _require_imports()
    with pytest.raises(UnsupportedResourceKindError) as exc:
        Translator().translate(conf)
    assert exc.value.kind is None
    assert exc.value.supported == ("ecs", "kubernetes", "prometheus")


def test_translate_records_resource_kind(ctx, ecs_fragment):
    _require_imports()
    Translator().translate(ecs_fragment, ctx)
    assert ctx.meta["resource_kind"] == "ecs"
    derived = [e for e in ctx.events if e["message"] == "derived"]
    assert derived and derived[0]["declarations"] == 2


def test_translation_is_deterministic(kubernetes_fragment):
    _require_imports()
    conf = kubernetes_fragment(enable_full_pod_metrics=True, enable_node_detailed_metrics=True)
    assert Translator().translate(conf) == Translator().translate(conf)
