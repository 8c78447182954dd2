# src/cwagent_translator/core/engine/engine.py
"""
Engine de tradução: merge hierárquico seguido de derivação.

Fluxo de uma chamada:

    fragmentos brutos
        → merge (árvore de seções, fragmento a fragmento, último vence)
        → configuração canônica (+ hash para rastreabilidade)
        → derivação (`Translator.translate`)
        → `TranslationResult`

Decisões arquiteturais:
    - O registro de seções é recebido já congelado; o engine nunca o altera
    - Cada chamada a `run` usa um `TranslationContext` próprio, salvo
      quando o chamador injeta um
    - Erros da derivação são propagados sem retry nem conversão
    - O engine é síncrono e não realiza I/O

Limites explícitos:
    - Não carrega arquivos (ver `core.config.loader`)
    - Não executa transporte de métricas
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from cwagent_translator.core.config.hashing import compute_config_hash
from cwagent_translator.core.config.merge import ConfigNode
from cwagent_translator.core.merge.registry import SectionRegistry
from cwagent_translator.core.merge.tree import default_registry
from cwagent_translator.core.pipeline.context import TranslationContext
from cwagent_translator.core.pipeline.types import ExporterConfig
from cwagent_translator.translate.awsemf.translator import Translator

ENGINE_SECTION = "engine"


@dataclass(frozen=True)
class TranslationResult:
    """Resultado agregado de uma tradução."""

    config: Dict[str, Any]
    exporter: ExporterConfig
    config_hash: str
    translation_id: str
    warnings: Dict[str, List[str]] = field(default_factory=dict)


class TranslationEngine:
    """Engine canônico (merge + derivação) do tradutor."""

    def __init__(
        self,
        *,
        registry: Optional[SectionRegistry] = None,
        translator: Optional[Translator] = None,
        ctx: Optional[TranslationContext] = None,
    ):
        self.registry: SectionRegistry = registry if registry is not None else default_registry()
        self.translator: Translator = translator if translator is not None else Translator()
        self.ctx: Optional[TranslationContext] = ctx

    def _context(self) -> TranslationContext:
        return self.ctx if self.ctx is not None else TranslationContext.new()

    def merge(
        self,
        fragments: Iterable[Mapping[str, Any]],
        ctx: Optional[TranslationContext] = None,
    ) -> ConfigNode:
        """Mescla os fragmentos, em ordem, em uma nova configuração canônica."""
        ctx = ctx if ctx is not None else self._context()
        root = self.registry.root
        result: ConfigNode = {}

        for index, fragment in enumerate(fragments):
            if not isinstance(fragment, Mapping):
                ctx.add_warning(
                    section=ENGINE_SECTION,
                    message=f"Fragmento {index} ignorado: raiz {type(fragment).__name__} não é mapa",
                )
                continue
            ctx.log(section=root.path(), level="DEBUG", message="merge_fragment", index=index)
            root.merge_document(fragment, result, ctx)

        return result

    def run(self, fragments: Iterable[Mapping[str, Any]]) -> TranslationResult:
        ctx = self._context()
        ctx.log(section=ENGINE_SECTION, level="INFO", message="merge_started")
        config = self.merge(fragments, ctx)

        config_hash = compute_config_hash(config)
        ctx.meta["config_hash"] = config_hash
        ctx.log(section=ENGINE_SECTION, level="INFO", message="merge_finished", config_hash=config_hash)

        ctx.log(section=ENGINE_SECTION, level="INFO", message="derive_started", translator=self.translator.id)
        exporter = self.translator.translate(config, ctx)
        ctx.log(section=ENGINE_SECTION, level="INFO", message="derive_finished")

        return TranslationResult(
            config=config,
            exporter=exporter,
            config_hash=config_hash,
            translation_id=ctx.translation_id,
            warnings={k: list(v) for k, v in ctx.warnings.items()},
        )


def translate(*fragments: Mapping[str, Any]) -> ExporterConfig:
    """Atalho: traduz fragmentos com o registro e o tradutor padrão."""
    return TranslationEngine().run(fragments).exporter
