# tests/conftest.py
"""
Fixtures compartilhados para testes do tradutor.

Este módulo define fixtures reutilizáveis que fornecem:
- um `TranslationContext` isolado por teste
- fragmentos de configuração mínimos por tipo de recurso
- a declaração de scrape Prometheus usada nos cenários literais

Decisões arquiteturais:
    - Fixtures retornam dicionários novos a cada uso (sem estado compartilhado)
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture executa a tradução completa

Este módulo existe como infraestrutura de teste e não
como validação funcional do tradutor.
"""

import pytest


# =====================================================
# Contexto
# =====================================================

@pytest.fixture
def ctx():
    """
    Fixture que fornece um `TranslationContext` determinístico.

    O import é lazy para que a ausência do módulo produza uma falha
    clara no teste que o utiliza, e não na coleta.

    Returns:
        TranslationContext: Contexto com `translation_id` fixo.
    """
    from cwagent_translator.core.pipeline.context import TranslationContext

    return TranslationContext.new(translation_id="test-translation")


# =====================================================
# Fragmentos por tipo de recurso
# =====================================================

def _metrics_collected(section: dict) -> dict:
    return {"logs": {"metrics_collected": section}}


@pytest.fixture
def ecs_fragment() -> dict:
    return _metrics_collected({"ecs": {}})


@pytest.fixture
def kubernetes_fragment():
    """
    Fábrica de fragmentos Kubernetes com flags arbitrárias.

    Returns:
        Callable[..., dict]: `kubernetes_fragment(enable_full_pod_metrics=True, ...)`.
    """
    def _make(**flags) -> dict:
        return _metrics_collected({"kubernetes": dict(flags)})

    return _make


@pytest.fixture
def prometheus_declaration() -> dict:
    """
    Declaração de scrape com label matcher, conforme o cenário literal
    de round-trip (dimensões e matcher devem chegar inalterados).
    """
    return {
        "source_labels": ["Service", "Namespace"],
        "label_matcher": "(.*node-exporter.*|.*kube-dns.*);kube-system$",
        "dimensions": [["Service", "Namespace"]],
        "metric_selectors": ["^coredns_dns_request_type_count_total$"],
    }


@pytest.fixture
def prometheus_fragment():
    """
    Fábrica de fragmentos Prometheus.

    Args (da fábrica):
        emf_processor (dict | None): conteúdo de `emf_processor`; None omite a seção.
    """
    def _make(emf_processor=None) -> dict:
        section = {
            "log_group_name": "/test/log/group",
            "log_stream_name": "{ServiceName}",
        }
        if emf_processor is not None:
            section["emf_processor"] = emf_processor
        return _metrics_collected({"prometheus": section})

    return _make
