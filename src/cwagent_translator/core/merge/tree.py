# src/cwagent_translator/core/merge/tree.py
"""
Árvore padrão de seções da configuração do agente.

A árvore é montada de forma explícita e ordenada, das folhas para a
raiz: cada pai recebe suas filhas já construídas. O resultado é
registrado uma única vez em um `SectionRegistry` congelado.

Estrutura:

    agent/
    metrics/
        metrics_collected/      cpu, mem, disk, diskio, net, netstat,
                                swap, processes, statsd, collectd
        append_dimensions/
    logs/
        metrics_collected/
            ecs/
            kubernetes/
            prometheus/
                emf_processor/
        logs_collected/
            files/              collect_list → AppendUniqueListRule
            windows_events/     collect_list → AppendUniqueListRule
"""

from __future__ import annotations

from functools import lru_cache

from .registry import SectionRegistry
from .rules import AppendUniqueListRule
from .section import Section

HOST_METRIC_SECTIONS = (
    "cpu",
    "mem",
    "disk",
    "diskio",
    "net",
    "netstat",
    "swap",
    "processes",
    "statsd",
    "collectd",
)

COLLECT_LIST_KEY = "collect_list"


def _leaf(key: str) -> Section:
    return Section(key)


def build_metrics_section() -> Section:
    metrics_collected = Section(
        "metrics_collected",
        children=[_leaf(key) for key in HOST_METRIC_SECTIONS],
    )
    return Section("metrics", children=[metrics_collected, _leaf("append_dimensions")])


def build_logs_section() -> Section:
    prometheus = Section("prometheus", children=[_leaf("emf_processor")])
    metrics_collected = Section(
        "metrics_collected",
        children=[_leaf("ecs"), _leaf("kubernetes"), prometheus],
    )

    append_collect_list = {COLLECT_LIST_KEY: AppendUniqueListRule()}
    logs_collected = Section(
        "logs_collected",
        children=[
            Section("files", rules=append_collect_list),
            Section("windows_events", rules=append_collect_list),
        ],
    )
    return Section("logs", children=[metrics_collected, logs_collected])


def build_agent_sections() -> Section:
    """Constrói uma nova árvore (raiz de chave `""`) a cada chamada."""
    return Section("", children=[_leaf("agent"), build_metrics_section(), build_logs_section()])


@lru_cache(maxsize=1)
def default_registry() -> SectionRegistry:
    """Registro congelado da árvore padrão, construído uma única vez."""
    return SectionRegistry.from_root(build_agent_sections())
