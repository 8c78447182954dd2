# src/cwagent_translator/translate/awsemf/__init__.py
"""
Derivação da configuração do exportador EMF (`awsemf`).

Componentes:
    - translator  → detecção do tipo de recurso, `derive`, `Translator`
    - ecs         → declarações fixas de ECS
    - kubernetes  → template segmentado + transformações por feature flag
    - prometheus  → declarações e descritores a partir da seção de scrape
    - settings    → namespace, templates de log e atributos JSON
"""

from .prometheus import PrometheusScrapeConfig, parse_prometheus_section
from .translator import Translator, derive, detect_resource_kind, read_kubernetes_flags

__all__ = [
    "PrometheusScrapeConfig",
    "Translator",
    "derive",
    "detect_resource_kind",
    "parse_prometheus_section",
    "read_kubernetes_flags",
]
