# src/cwagent_translator/core/merge/errors.py
"""
Exceções estruturais da árvore de seções e do registro de regras.

Estas exceções representam erros de construção da árvore de handlers
(programação), nunca erros de conteúdo da configuração do usuário: o
merge em si não levanta exceções.
"""


class SectionRegistryError(ValueError):
    """Exceção base para violações estruturais da árvore de seções."""


class DuplicateSectionKeyError(SectionRegistryError):
    """
    Exceção levantada quando duas seções filhas do mesmo pai
    compartilham a mesma chave.

    Invariantes:
        - Chaves são únicas por pai, portanto caminhos são únicos na árvore
    """


class DuplicateSectionPathError(SectionRegistryError):
    """
    Exceção levantada quando se tenta registrar duas seções com o mesmo
    caminho no `SectionRegistry`.
    """


class RegistryFrozenError(SectionRegistryError):
    """
    Exceção levantada ao registrar uma seção depois que o registro foi
    congelado. O registro é escrito uma única vez, na inicialização.
    """
