# src/cwagent_translator/__init__.py
"""
cwagent_translator: núcleo de tradução de configuração de um agente de telemetria.

Converte a configuração escrita pelo usuário (árvore JSON/YAML sem
schema, possivelmente dividida em fragmentos) na configuração tipada do
exportador de métricas EMF.

Arquitetura em alto nível:
    - core.config       → fragmentos, merge padrão e hashing
    - core.merge        → merge hierárquico com regras por seção
    - core.pipeline     → contexto de tradução e tipos de saída
    - core.engine       → merge → configuração canônica → derivação
    - translate.awsemf  → derivação de declarações de métricas

Limites explícitos:
    - Não inicia processos nem expõe CLI
    - Não envia métricas nem chama APIs remotas
"""

__version__ = "0.1.0"

from .core.engine import TranslationEngine, TranslationResult, translate
from .core.pipeline import ExporterConfig, ResourceKind, TranslationContext

__all__ = [
    "__version__",
    "ExporterConfig",
    "ResourceKind",
    "TranslationContext",
    "TranslationEngine",
    "TranslationResult",
    "translate",
]
