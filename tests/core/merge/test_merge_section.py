# tests/core/merge/test_merge_section.py
"""
Testes do merge hierárquico por seção.

Os testes asseguram que:
- seção ausente na fonte não altera o acumulador
- seção ausente no acumulador é criada
- chaves sem regra seguem o merge padrão
- chaves com regra delegam para a regra, com o caminho estendido
- `collect_list` concatena entradas entre fragmentos sem duplicar
- o merge de documentos é idempotente

Limites explícitos:
    - Não valida a derivação de declarações
"""

import pytest

try:
    from cwagent_translator.core.merge.rules import AppendUniqueListRule
    from cwagent_translator.core.merge.section import Section, merge_map, merge_section
    from cwagent_translator.core.merge.tree import build_agent_sections
except Exception as e:  # noqa: BLE001
    merge_section = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing hierarchical merge. Implement:\n"
            "- src/cwagent_translator/core/merge/section.py (merge_section, merge_map)\n"
            "- src/cwagent_translator/core/merge/rules.py (AppendUniqueListRule)\n"
            f"Import error: {_IMPORT_ERR}"
        )


class RecordingRule:
    """Regra de teste que registra as chamadas recebidas."""

    def __init__(self):
        self.calls = []

    def merge(self, source, result, key, path, ctx=None):
        self.calls.append((key, path))
        result[key] = "from-rule"


def test_absent_section_is_noop():
    _require_imports()
    result = {"logs": {"x": 1}}
    merge_section({"agent": {}}, result, "logs", {}, "logs/")
    assert result == {"logs": {"x": 1}}


def test_missing_result_section_is_created():
    _require_imports()
    result = {}
    merge_section({"logs": {"force_flush_interval": 5}}, result, "logs", {}, "logs/")
    assert result == {"logs": {"force_flush_interval": 5}}


def test_non_mapping_source_section_wins_with_warning(ctx):
    _require_imports()
    result = {"logs": {"x": 1}}
    merge_section({"logs": ["oops"]}, result, "logs", {}, "logs/", ctx)
    assert result == {"logs": ["oops"]}
    assert ctx.warnings


def test_merge_map_dispatches_to_registered_rule(ctx):
    """
    Verifica o despacho de `merge_map` para a regra registrada.

    Invariantes:
        - A regra recebe o caminho estendido pela chave
        - Chaves sem regra seguem o merge padrão
    """
    _require_imports()
    rule = RecordingRule()
    result = {}
    merge_map(
        {"special": [1], "plain": {"a": 1}},
        result,
        {"special": rule},
        "logs/",
        ctx,
    )

    assert rule.calls == [("special", "logs/special/")]
    assert result == {"special": "from-rule", "plain": {"a": 1}}
    assert any(e["message"] == "merge_rule" for e in ctx.events_at("DEBUG"))


def test_append_unique_list_rule():
    _require_imports()
    rule = AppendUniqueListRule()
    result = {"collect_list": [{"file_path": "/var/log/a.log"}]}

    rule.merge(
        {"collect_list": [{"file_path": "/var/log/a.log"}, {"file_path": "/var/log/b.log"}]},
        result,
        "collect_list",
        "logs/logs_collected/files/collect_list/",
    )

    assert result == {
        "collect_list": [{"file_path": "/var/log/a.log"}, {"file_path": "/var/log/b.log"}]
    }


def test_append_unique_list_rule_replaces_non_list(ctx):
    _require_imports()
    result = {"collect_list": "broken"}
    AppendUniqueListRule().merge(
        {"collect_list": [{"file_path": "/x"}]}, result, "collect_list", "p/", ctx
    )
    assert result == {"collect_list": [{"file_path": "/x"}]}
    assert "p/" in ctx.warnings


def test_collect_list_concatenates_across_fragments():
    """
    Verifica que fragmentos distintos contribuem entradas para `collect_list`.

    Decisões arquiteturais:
        - `collect_list` é a única lista com merge por concatenação
        - Demais listas seguem substituição total
    """
    _require_imports()
    root = build_agent_sections()
    result = {}

    root.merge_document(
        {"logs": {"logs_collected": {"files": {"collect_list": [{"file_path": "/a"}]}}}},
        result,
    )
    root.merge_document(
        {"logs": {"logs_collected": {"files": {"collect_list": [{"file_path": "/b"}]}}}},
        result,
    )

    assert result["logs"]["logs_collected"]["files"]["collect_list"] == [
        {"file_path": "/a"},
        {"file_path": "/b"},
    ]


def test_other_lists_are_replaced():
    _require_imports()
    root = build_agent_sections()
    result = {}
    root.merge_document({"metrics": {"aggregation_dimensions": [["InstanceId"]]}}, result)
    root.merge_document({"metrics": {"aggregation_dimensions": [["ImageId"]]}}, result)
    assert result["metrics"]["aggregation_dimensions"] == [["ImageId"]]


def test_document_merge_is_idempotent():
    _require_imports()
    root = build_agent_sections()
    fragment = {
        "agent": {"interval": "60s"},
        "logs": {
            "metrics_collected": {"kubernetes": {"enable_full_pod_metrics": True}},
            "logs_collected": {"files": {"collect_list": [{"file_path": "/a"}]}},
        },
    }
    once = root.merge_document(fragment, {})
    twice = root.merge_document(fragment, root.merge_document(fragment, {}))
    assert once == twice


def test_sibling_sections_are_independent():
    _require_imports()
    root = build_agent_sections()
    result = root.merge_document(
        {"logs": {"metrics_collected": {"ecs": {"a": 1}, "kubernetes": {"b": 2}}}}, {}
    )
    root.merge_document({"logs": {"metrics_collected": {"ecs": {"a": 3}}}}, result)
    assert result["logs"]["metrics_collected"] == {"ecs": {"a": 3}, "kubernetes": {"b": 2}}


def test_source_is_not_mutated():
    _require_imports()
    root = build_agent_sections()
    fragment = {"logs": {"logs_collected": {"files": {"collect_list": [{"file_path": "/a"}]}}}}
    result = root.merge_document(fragment, {})
    result["logs"]["logs_collected"]["files"]["collect_list"].append({"file_path": "/b"})
    assert fragment == {"logs": {"logs_collected": {"files": {"collect_list": [{"file_path": "/a"}]}}}}


def test_section_merge_uses_own_path(ctx):
    _require_imports()
    kubernetes = Section("kubernetes")
    Section("metrics_collected", children=[kubernetes])
    result = {"kubernetes": {"x": {"nested": 1}}}
    kubernetes.merge({"kubernetes": {"x": "flat"}}, result, ctx=ctx)
    assert "metrics_collected/kubernetes/" in ctx.warnings
