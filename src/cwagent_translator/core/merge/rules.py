# src/cwagent_translator/core/merge/rules.py
"""
Contrato de `MergeRule` e regras concretas reutilizáveis.

Uma `MergeRule` substitui o merge padrão para uma chave específica de
uma seção. Seções registram regras em sua tabela (`rules`), indexada
pelo nome da chave filha; a ausência de entrada significa "usar o
merge padrão" (`core.config.merge.default_merge`).

Contrato de chamada:
    rule.merge(source, result, key, path, ctx)

    - `source` / `result`: mapas da seção que contém `key`
    - `key`: a chave cuja regra foi selecionada
    - `path`: caminho da seção estendido com `key` (ex.: `logs/metrics_collected/`)
    - `ctx`: `TranslationContext` opcional para logs e warnings

Invariantes:
    - Uma regra nunca muta `source`
    - Uma regra nunca levanta exceção por conteúdo malformado

Limites explícitos:
    - Não registra regras (responsabilidade das seções)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional, Protocol, runtime_checkable

from cwagent_translator.core.config.merge import ConfigNode, NodeKind, copy_node, node_kind, record_type_conflict

if TYPE_CHECKING:
    from cwagent_translator.core.pipeline.context import TranslationContext


@runtime_checkable
class MergeRule(Protocol):
    """
    Comportamento de merge associado a uma chave de seção.

    O protocolo não impõe herança: `Section` e `AppendUniqueListRule`
    satisfazem o contrato por conformidade estrutural.
    """

    def merge(
        self,
        source: Mapping[str, Any],
        result: ConfigNode,
        key: str,
        path: str,
        ctx: Optional["TranslationContext"] = None,
    ) -> None:
        ...


@dataclass(frozen=True)
class AppendUniqueListRule:
    """
    Concatena listas entre fragmentos em vez de substituí-las.

    Usada para `collect_list` de arquivos e eventos: cada fragmento
    contribui com suas próprias entradas. Entradas já presentes
    (por igualdade) não são duplicadas, o que mantém o merge idempotente.

    Valores que não são listas seguem a política "a fonte vence".
    """

    def merge(
        self,
        source: Mapping[str, Any],
        result: ConfigNode,
        key: str,
        path: str,
        ctx: Optional["TranslationContext"] = None,
    ) -> None:
        value = source[key]
        existing = result.get(key)

        if node_kind(value) is not NodeKind.SEQUENCE:
            if existing is not None and node_kind(existing) is not node_kind(value):
                record_type_conflict(ctx, path, key, node_kind(existing), node_kind(value))
            result[key] = copy_node(value)
            return

        if node_kind(existing) is not NodeKind.SEQUENCE:
            if existing is not None:
                record_type_conflict(ctx, path, key, node_kind(existing), NodeKind.SEQUENCE)
            result[key] = copy_node(value)
            return

        if not isinstance(existing, list):
            existing = list(existing)
            result[key] = existing

        appended = 0
        for item in value:
            if item not in existing:
                existing.append(copy_node(item))
                appended += 1

        if ctx is not None:
            ctx.log(section=path, level="DEBUG", message="append_list", key=key, appended=appended)
