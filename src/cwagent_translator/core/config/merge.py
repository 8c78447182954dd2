# src/cwagent_translator/core/config/merge.py
"""
Merge padrão (sem regra registrada) de árvores de configuração.

Este módulo implementa a política de merge aplicada a toda chave que
não possui uma `MergeRule` registrada na seção em que aparece. É a
regra que decide como um fragmento de configuração ("source") é
incorporado ao acumulador ("result").

Política de merge:
    - mapping  + mapping     → merge recursivo por chave
    - sequence               → substituição total (sem merge elemento a elemento)
    - escalar                → sobrescrita direta
    - conflito de tipos      → a fonte vence (sobrescrita) + warning no contexto

Princípios fundamentais:
    - O merge nunca falha: entradas malformadas são sobrescritas, não rejeitadas
    - `result` é mutado in-place; `source` nunca é mutado
    - Nenhum objeto de `source` é compartilhado com `result` (cópias profundas)

Invariantes:
    - Aplicar o mesmo `source` duas vezes produz o mesmo `result`
    - Chaves irmãs são mescladas de forma independente
    - Chaves ausentes em `source` são preservadas em `result`

Limites explícitos:
    - Não consulta regras por seção (responsabilidade de `core.merge`)
    - Não valida semântica de domínio
    - Não carrega arquivos

Este módulo existe para que o comportamento padrão seja único,
explícito e testável isoladamente.
"""

from __future__ import annotations

from copy import deepcopy
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

if TYPE_CHECKING:
    from cwagent_translator.core.pipeline.context import TranslationContext


ConfigNode = Dict[str, Any]


class NodeKind(str, Enum):
    """
    Classificação estrutural de um valor da árvore de configuração.

    O merge padrão decide seu comportamento exclusivamente por esta
    classificação, nunca pelo tipo Python concreto do valor.
    """
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def node_kind(value: Any) -> NodeKind:
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    # str/bytes são sequências em Python, mas escalares na árvore
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def default_merge(
    source: Mapping[str, Any],
    result: ConfigNode,
    key: str,
    path: str = "",
    ctx: Optional["TranslationContext"] = None,
) -> None:
    """
    Mescla `source[key]` em `result[key]` segundo a política padrão.

    Decisões arquiteturais:
        - Mapeamentos só são combinados quando ambos os lados são mapeamentos
        - Sequências nunca são combinadas, apenas substituídas
        - Conflito de tipos resolve para o valor de `source` e gera warning

    Args:
        source (Mapping[str, Any]): Mapa de origem contendo `key`.
        result (ConfigNode): Mapa acumulador, mutado in-place.
        key (str): Chave a ser mesclada.
        path (str): Caminho da seção que contém `key` (diagnóstico).
        ctx (Optional[TranslationContext]): Contexto para warnings.
    """
    value = source[key]
    kind = node_kind(value)

    if key not in result:
        result[key] = copy_node(value)
        return

    existing = result[key]
    existing_kind = node_kind(existing)

    if kind is NodeKind.MAPPING:
        if existing_kind is NodeKind.MAPPING:
            sub_path = f"{path}{key}/"
            for sub_key in value:
                default_merge(value, existing, sub_key, sub_path, ctx)
            return
        if existing is not None:
            record_type_conflict(ctx, path, key, existing_kind, kind)
        result[key] = copy_node(value)
        return

    if kind is NodeKind.SEQUENCE:
        if existing_kind is not NodeKind.SEQUENCE and existing is not None:
            record_type_conflict(ctx, path, key, existing_kind, kind)
        result[key] = copy_node(value)
        return

    if existing_kind is not NodeKind.SCALAR:
        record_type_conflict(ctx, path, key, existing_kind, kind)
    result[key] = value


def merge_into(
    source: Mapping[str, Any],
    result: ConfigNode,
    path: str = "",
    ctx: Optional["TranslationContext"] = None,
) -> ConfigNode:
    """Aplica `default_merge` a todas as chaves de `source`; retorna `result`."""
    for key in source:
        default_merge(source, result, key, path, ctx)
    return result


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> ConfigNode:
    """
    Realiza um deep-merge funcional entre dois dicionários de configuração.

    Variante pura de `merge_into`: nenhum dos inputs é mutado e um novo
    dicionário é retornado. Conflitos de tipo resolvem para `override`.

    Args:
        base (Mapping[str, Any]): Configuração base.
        override (Mapping[str, Any]): Fragmento com precedência.

    Returns:
        ConfigNode: Nova configuração resultante.

    Raises:
        TypeError: Se algum dos argumentos não for um mapeamento.
    """
    if not isinstance(base, Mapping) or not isinstance(override, Mapping):
        raise TypeError(
            f"Deep-merge requer mapeamentos no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: ConfigNode = copy_node(base)
    return merge_into(override, result)


def copy_node(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: copy_node(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [copy_node(v) for v in value]
    return deepcopy(value)


def record_type_conflict(
    ctx: Optional["TranslationContext"],
    path: str,
    key: str,
    existing: NodeKind,
    incoming: NodeKind,
) -> None:
    if ctx is None:
        return
    message = (
        f"Conflito de tipo na chave '{key}': "
        f"{existing.value} sobrescrito por {incoming.value}"
    )
    ctx.add_warning(section=path, message=message)
    ctx.log(
        section=path,
        level="WARNING",
        message="type_conflict",
        key=key,
        existing=existing.value,
        incoming=incoming.value,
    )
