# src/cwagent_translator/core/config/__init__.py

"""
Camada de configuração bruta do tradutor.

Responsabilidades do pacote:
    - Carregamento de fragmentos de configuração (JSON / YAML)
    - Política de merge padrão para chaves sem regra registrada
    - Hash canônico da configuração mesclada para rastreabilidade

Princípios fundamentais:
    - A configuração é sempre uma árvore de dicts, listas e escalares
    - O merge nunca aborta: conflitos viram warnings, não exceções
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não conhece seções nem regras por caminho (ver `core.merge`)
    - Não deriva declarações de métricas
"""

from .errors import (
    ConfigError,
    FragmentNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_fragment, load_fragment_dir, load_fragments
from .merge import (
    ConfigNode,
    NodeKind,
    copy_node,
    deep_merge,
    default_merge,
    merge_into,
    node_kind,
    record_type_conflict,
)

__all__ = [
    "ConfigError",
    "ConfigNode",
    "FragmentNotFoundError",
    "InvalidConfigRootTypeError",
    "NodeKind",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "copy_node",
    "deep_merge",
    "default_merge",
    "load_fragment",
    "load_fragment_dir",
    "load_fragments",
    "merge_into",
    "node_kind",
    "record_type_conflict",
]
