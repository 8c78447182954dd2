# src/cwagent_translator/core/merge/__init__.py
"""
Motor de merge hierárquico.

Este pacote combina fragmentos da árvore de configuração usando
semânticas de merge plugáveis por seção.

Componentes principais:
    - rules    → contrato `MergeRule` e regras reutilizáveis
    - section  → `Section` (folha ou composta), `merge_section`, `merge_map`
    - registry → `SectionRegistry` (caminho → seção), escrito uma única vez
    - tree     → árvore padrão de seções do agente

Invariantes:
    - Caminhos de seção são únicos e estáveis entre chamadas
    - O merge é idempotente e nunca aborta o pipeline
"""

from .errors import (
    DuplicateSectionKeyError,
    DuplicateSectionPathError,
    RegistryFrozenError,
    SectionRegistryError,
)
from .registry import SectionRegistry
from .rules import AppendUniqueListRule, MergeRule
from .section import Section, merge_map, merge_section
from .tree import build_agent_sections, default_registry

__all__ = [
    "AppendUniqueListRule",
    "DuplicateSectionKeyError",
    "DuplicateSectionPathError",
    "MergeRule",
    "RegistryFrozenError",
    "Section",
    "SectionRegistry",
    "SectionRegistryError",
    "build_agent_sections",
    "default_registry",
    "merge_map",
    "merge_section",
]
