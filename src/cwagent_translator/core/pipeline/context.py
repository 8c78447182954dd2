# src/cwagent_translator/core/pipeline/context.py
"""
Contexto de uma chamada de tradução.

Este módulo define o `TranslationContext`, a estrutura canônica que
acompanha uma única tradução (merge + derivação) e concentra seus
sinais de observabilidade.

O TranslationContext atua como o único meio de:
    - registro de logs estruturados (eventos, não texto livre)
    - coleta de warnings não fatais, agrupados por caminho de seção
    - anotação de metadados da tradução (ex.: hash da config canônica)

Princípios fundamentais:
    - Isolamento por tradução (cada chamada possui seu próprio contexto)
    - Ausência de estado global compartilhado
    - Estrutura simples e testável

Invariantes:
    - Eventos sempre incluem `translation_id` e `section`
    - Warnings são agrupados por `section`
    - O contexto não sobrevive à chamada de tradução que o criou

Limites explícitos:
    - Não executa merge nem derivação
    - Não persiste eventos
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from datetime import timezone


@dataclass
class TranslationContext:
    """
    Contexto de observabilidade de uma tradução.

    Campos:
        - translation_id: identificador da tradução
        - created_at: instante de criação (UTC)
        - meta: metadados livres (ex.: `config_hash`, `resource_kind`)
        - events: eventos de log estruturados, em ordem de emissão
        - warnings: mensagens não fatais indexadas por caminho de seção
    """
    translation_id: str
    created_at: datetime
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def new(cls, *, translation_id: Optional[str] = None) -> "TranslationContext":
        return cls(
            translation_id=translation_id or uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, section: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "translation_id": self.translation_id,
            "section": section,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, section: str, message: str) -> None:
        if section not in self.warnings:
            self.warnings[section] = []
        self.warnings[section].append(message)

    def events_at(self, level: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["level"] == level]
