# src/confdoc/core/context.py
"""
Contexto de montagem da documentação.

Este módulo define o `AssemblyContext`, a estrutura que acompanha uma
montagem de documentação e registra sua observabilidade:
    - logs estruturados por estágio (compose, scrub, render, ...)
    - warnings não fatais (ex.: opções renomeadas)

Princípios fundamentais:
    - Isolamento por montagem (cada passo possui seu próprio contexto)
    - Logs são eventos estruturados, não strings livres
    - Nenhum estado global é consultado ou alterado

Invariantes:
    - Todo evento inclui `run_id`, `stage`, `level`, `message` e `timestamp` UTC
    - Warnings são agrupados por estágio

Limites explícitos:
    - Não executa a montagem
    - Não persiste eventos
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class AssemblyContext:
    """
    Contexto de uma montagem de documentação.

    Campos:
    - run_id: identificador único da montagem
    - created_at: timestamp UTC de criação do contexto
    - meta: metadados livres do chamador (ex.: versão do sistema)
    - events: log estruturado de eventos
    - warnings: warnings por estágio
    """
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, stage: str, message: str) -> None:
        if stage not in self.warnings:
            self.warnings[stage] = []
        self.warnings[stage].append(message)
        self.log(stage=stage, level="WARNING", message=message)

    def events_for(self, stage: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("stage") == stage]
