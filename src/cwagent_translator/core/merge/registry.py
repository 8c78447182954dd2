# src/cwagent_translator/core/merge/registry.py
"""
Registro de handlers de seção indexado por caminho.

Este módulo define o `SectionRegistry`, a tabela caminho → `Section`
usada para localizar a tabela de regras de qualquer seção da árvore
(merge pontual por caminho, diagnóstico, inspeção em testes).

Ciclo de vida:
    - escrita: uma única fase de inicialização (`add` / `from_root`)
    - `freeze()` encerra a fase de escrita
    - leitura: a partir daí o registro é somente leitura e pode ser
      compartilhado entre traduções sem sincronização

Decisões arquiteturais:
    - O registro é construído a partir de uma árvore já montada
      (de baixo para cima), não por auto-registro em import
    - A ordem de registro é preservada separadamente do armazenamento

Invariantes:
    - Cada caminho registrado é único
    - Nenhuma seção é aceita após o congelamento

Limites explícitos:
    - Não constrói a árvore de seções (ver `core.merge.tree`)
    - Não deriva declarações de métricas
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from cwagent_translator.core.config.merge import ConfigNode
from .errors import DuplicateSectionPathError, RegistryFrozenError
from .rules import MergeRule
from .section import Section, merge_section

if TYPE_CHECKING:
    from cwagent_translator.core.pipeline.context import TranslationContext


@dataclass
class SectionRegistry:
    """
    Tabela somente leitura (após `freeze`) de caminho → `Section`.

    Decisões arquiteturais:
        - O caminho é calculado pela própria seção no momento do registro
        - Duplicidade de caminho é erro fatal de construção
        - O congelamento é explícito e irreversível
    """

    _sections: Dict[str, Section] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)
    _frozen: bool = field(default=False, init=False)

    @classmethod
    def from_root(cls, root: Section) -> "SectionRegistry":
        registry = cls()
        for section in root.walk():
            registry.add(section)
        registry.freeze()
        return registry

    def add(self, section: Section) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"Registry is frozen; cannot add {section.path()!r}")

        path = section.path()
        if path in self._sections:
            raise DuplicateSectionPathError(f"Duplicate section path: {path!r}")

        self._sections[path] = section
        self._order.append(path)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, path: str) -> Section:
        return self._sections[path]

    def __contains__(self, path: object) -> bool:
        return path in self._sections

    def __len__(self) -> int:
        return len(self._sections)

    def list(self) -> List[Section]:
        return [self._sections[p] for p in self._order]

    def paths(self) -> List[str]:
        return list(self._order)

    def rules_for(self, path: str) -> Mapping[str, MergeRule]:
        return MappingProxyType(self._sections[path].rules)

    @property
    def root(self) -> Section:
        return self._sections[""]

    def merge_at(
        self,
        path: str,
        source: Mapping[str, Any],
        result: ConfigNode,
        ctx: Optional["TranslationContext"] = None,
    ) -> None:
        """
        Mescla a seção registrada em `path`, recebendo os mapas do pai.
        Para a raiz (`""`), `source` e `result` são os próprios documentos.

        Raises:
            KeyError: Se `path` não estiver registrado.
        """
        section = self._sections[path]
        if not path:
            section.merge_document(source, result, ctx)
            return
        merge_section(source, result, section.key, section.rules, path, ctx)
