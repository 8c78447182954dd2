# src/cwagent_translator/core/engine/__init__.py
"""
Engine do tradutor.

Este pacote executa, em sequência e de forma síncrona, as duas etapas
da tradução: merge hierárquico dos fragmentos e derivação do
`ExporterConfig`.

Invariantes:
    - O registro de seções é somente leitura durante a execução
    - Uma execução produz um único resultado imutável
"""

from .engine import TranslationEngine, TranslationResult, translate

__all__ = ["TranslationEngine", "TranslationResult", "translate"]
