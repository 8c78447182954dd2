# src/cwagent_translator/translate/errors.py
"""
Exceções da etapa de derivação.

A derivação é total para os tipos de recurso suportados; o único erro
de controle de fluxo que ela levanta é a ausência de um tipo de recurso
reconhecido na configuração canônica.
"""

from typing import Iterable, Optional


class TranslationError(Exception):
    """Exceção base para falhas de tradução da configuração canônica."""


class UnsupportedResourceKindError(TranslationError):
    """
    Exceção levantada quando a configuração não seleciona nenhum tipo
    de recurso suportado (ou seleciona um tipo desconhecido).

    Decisões arquiteturais:
        - Nunca se produz uma configuração vazia/padrão silenciosamente
        - A mensagem lista os tipos suportados para orientar o usuário
    """

    def __init__(self, kind: Optional[str], supported: Iterable[str]) -> None:
        self.kind = kind
        self.supported = tuple(supported)
        found = "nenhum" if kind is None else repr(kind)
        super().__init__(
            f"Tipo de recurso não suportado: {found}; "
            f"esperado um de {', '.join(self.supported)}"
        )
