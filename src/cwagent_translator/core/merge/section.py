# src/cwagent_translator/core/merge/section.py
"""
Handlers de seção e motor de merge hierárquico.

Uma `Section` representa um nó nomeado da árvore de configuração do
agente (ex.: `logs`, `metrics_collected`, `kubernetes`). Seções são:

    - folhas: sem filhas, tabela de regras vazia; todo o conteúdo é
      mesclado pelo merge padrão chave a chave
    - compostas: a tabela de regras mapeia a chave de cada filha para a
      própria filha ("delegar ao handler filho"), além de regras extras

A árvore é construída de baixo para cima: as filhas são criadas
primeiro e injetadas no construtor do pai, que as adota. Não há
auto-registro por efeito colateral de import.

Caminho de seção:
    `path()` é recalculado a cada chamada como
    `parent.path() + key + "/"`. O valor nunca é memorizado, de modo que
    uma seção criada antes de ser adotada passa a reportar o caminho
    correto assim que ganha um pai.

Contratos de merge:
    - `merge_section(source, result, section_key, rule_table, base_path, ctx)`
      opera sobre os mapas do PAI e mescla a seção `section_key`
    - `merge_map(source, result, rule_table, path, ctx)` percorre as chaves
      de `source`, despachando para a regra registrada ou para o merge padrão

Invariantes:
    - `result` é mutado in-place; `source` nunca é mutado
    - O merge nunca levanta exceção por conteúdo da configuração
    - Chaves de filhas são únicas por pai
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from cwagent_translator.core.config.merge import ConfigNode, NodeKind, default_merge, node_kind, record_type_conflict
from .errors import DuplicateSectionKeyError, SectionRegistryError
from .rules import MergeRule

if TYPE_CHECKING:
    from cwagent_translator.core.pipeline.context import TranslationContext


def merge_map(
    source: Mapping[str, Any],
    result: ConfigNode,
    rule_table: Mapping[str, MergeRule],
    path: str,
    ctx: Optional["TranslationContext"] = None,
) -> None:
    """
    Mescla todas as chaves de `source` em `result`.

    Para cada chave, a regra registrada em `rule_table` é invocada com o
    caminho estendido pela chave; na ausência de regra, aplica-se
    `default_merge`.
    """
    for key in source:
        rule = rule_table.get(key)
        if rule is None:
            default_merge(source, result, key, path, ctx)
            continue

        if ctx is not None:
            ctx.log(section=path, level="DEBUG", message="merge_rule", key=key, rule=type(rule).__name__)
        rule.merge(source, result, key, f"{path}{key}/", ctx)


def merge_section(
    source: Mapping[str, Any],
    result: ConfigNode,
    section_key: str,
    rule_table: Mapping[str, MergeRule],
    base_path: str,
    ctx: Optional["TranslationContext"] = None,
) -> None:
    """
    Mescla a seção `section_key` de `source` em `result`.

    Decisões arquiteturais:
        - Seção ausente em `source` não altera `result`
        - Seção de `result` é criada quando ausente
        - Seção de `source` que não é mapeamento sobrescreve `result`
          (a fonte vence) e gera warning

    Args:
        source (Mapping[str, Any]): Mapa do pai no fragmento de origem.
        result (ConfigNode): Mapa do pai no acumulador.
        section_key (str): Chave da seção a mesclar.
        rule_table (Mapping[str, MergeRule]): Regras da seção.
        base_path (str): Caminho da seção (ex.: `logs/metrics_collected/`).
        ctx (Optional[TranslationContext]): Contexto para logs e warnings.
    """
    if section_key not in source:
        return

    value = source[section_key]
    if node_kind(value) is not NodeKind.MAPPING:
        default_merge(source, result, section_key, base_path, ctx)
        return

    node = result.get(section_key)
    if node_kind(node) is not NodeKind.MAPPING:
        if node is not None:
            record_type_conflict(ctx, base_path, section_key, node_kind(node), NodeKind.MAPPING)
        node = {}
        result[section_key] = node

    merge_map(value, node, rule_table, base_path, ctx)


class Section:
    """
    Handler de merge de uma seção da configuração.

    Uma `Section` é também uma `MergeRule`: o pai a registra em sua
    tabela de regras sob a chave da filha.

    Atributos:
        - key: chave da seção dentro do pai (`""` para a raiz)
        - parent: seção que adotou esta (None até ser adotada)
        - rules: tabela chave → regra (inclui as filhas)
    """

    def __init__(
        self,
        key: str,
        children: Iterable["Section"] = (),
        rules: Optional[Mapping[str, MergeRule]] = None,
    ) -> None:
        if "/" in key:
            raise SectionRegistryError(f"section key must not contain '/': {key!r}")
        self.key = key
        self.parent: Optional[Section] = None
        self.rules: Dict[str, MergeRule] = dict(rules or {})
        self._children: Dict[str, Section] = {}
        for child in children:
            self._adopt(child)

    def _adopt(self, child: "Section") -> None:
        if child.key in self._children or child.key in self.rules:
            raise DuplicateSectionKeyError(
                f"Duplicate section key {child.key!r} under {self.path()!r}"
            )
        if child.parent is not None:
            raise SectionRegistryError(
                f"Section {child.key!r} already belongs to {child.parent.path()!r}"
            )
        child.parent = self
        self._children[child.key] = child
        self.rules[child.key] = child

    @property
    def children(self) -> Tuple["Section", ...]:
        return tuple(self._children.values())

    @property
    def is_leaf(self) -> bool:
        return not self._children

    def child(self, key: str) -> "Section":
        return self._children[key]

    def path(self) -> str:
        base = self.parent.path() if self.parent is not None else ""
        if not self.key:
            return base
        return f"{base}{self.key}/"

    def walk(self) -> Iterator["Section"]:
        """Percorre a subárvore em profundidade (pré-ordem)."""
        yield self
        for child in self._children.values():
            yield from child.walk()

    def merge(
        self,
        source: Mapping[str, Any],
        result: ConfigNode,
        key: Optional[str] = None,
        path: Optional[str] = None,
        ctx: Optional["TranslationContext"] = None,
    ) -> None:
        merge_section(source, result, key or self.key, self.rules, self.path(), ctx)

    def merge_document(
        self,
        source: Mapping[str, Any],
        result: ConfigNode,
        ctx: Optional["TranslationContext"] = None,
    ) -> ConfigNode:
        """Mescla um documento inteiro usando esta seção como raiz."""
        merge_map(source, result, self.rules, self.path(), ctx)
        return result

    def __repr__(self) -> str:
        return f"Section(path={self.path()!r}, children={list(self._children)})"
