# src/cwagent_translator/translate/__init__.py
"""
Tradutores da configuração canônica para componentes de exportação.

Cada subpacote produz a configuração tipada de um componente
(atualmente apenas o exportador EMF, `awsemf`).
"""

from .errors import TranslationError, UnsupportedResourceKindError

__all__ = ["TranslationError", "UnsupportedResourceKindError"]
