# src/cwagent_translator/translate/awsemf/common.py
"""
Chaves de configuração e acesso tolerante à configuração canônica.

A configuração canônica é uma árvore de dicts sem schema; os acessores
deste módulo nunca levantam exceção: caminhos ausentes ou com tipo
inesperado resultam no default informado.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

LOGS_KEY = "logs"
METRICS_COLLECTED_KEY = "metrics_collected"
EMF_PROCESSOR_KEY = "emf_processor"

LOGS_METRICS_COLLECTED = (LOGS_KEY, METRICS_COLLECTED_KEY)

ROLLUP_NO_DIMENSIONS = "NoDimensionRollup"
OUTPUT_CLOUDWATCH = "cloudwatch"

_MISSING = object()


def get_path(conf: Mapping[str, Any], keys: Sequence[str], default: Any = None) -> Any:
    node: Any = conf
    for key in keys:
        if not isinstance(node, Mapping) or key not in node:
            return default
        node = node[key]
    return node


def is_set(conf: Mapping[str, Any], keys: Sequence[str]) -> bool:
    return get_path(conf, keys, _MISSING) is not _MISSING


def get_mapping(conf: Mapping[str, Any], keys: Sequence[str]) -> Optional[Mapping[str, Any]]:
    value = get_path(conf, keys)
    return value if isinstance(value, Mapping) else None


def get_string(conf: Mapping[str, Any], keys: Sequence[str], default: str = "") -> str:
    value = get_path(conf, keys)
    return value if isinstance(value, str) else default


def get_bool(conf: Mapping[str, Any], keys: Sequence[str], default: bool = False) -> bool:
    # sem coerção: apenas o booleano True habilita uma flag
    value = get_path(conf, keys)
    return value if isinstance(value, bool) else default


def section_path(keys: Sequence[str]) -> str:
    """Caminho de seção no mesmo formato do motor de merge (`a/b/`)."""
    return "".join(f"{k}/" for k in keys)
