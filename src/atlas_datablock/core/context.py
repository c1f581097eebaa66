# src/atlas_datablock/core/context.py
"""
Contexto de observabilidade de uma chamada do engine.

Este módulo define o `EngineContext`, a estrutura canônica utilizada para
registrar, de forma estruturada, o que o parser e os transformadores de view
descartaram ou degradaram durante uma cadeia parse → transform.

O engine é puro: nenhuma função mantém estado entre chamadas. Por isso o
contexto é sempre criado e possuído pelo chamador, e passado explicitamente
(argumento `ctx`) às funções que desejam reportar sinais não fatais.

Responsabilidades do módulo:
    - Manter identidade da chamada (`context_id`, `created_at`)
    - Registrar eventos de log estruturados
    - Coletar warnings por estágio (parser, kanban, calendar, ...)

Invariantes:
    - Logs sempre incluem `context_id` e `stage`
    - Warnings são agrupados por `stage`
    - Nenhuma função do engine exige um contexto para funcionar

Limites explícitos:
    - Não persiste eventos
    - Não altera o resultado das transformações
    - Não é compartilhado entre chamadas concorrentes
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .diagnostics import DiagnosticPayload


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class EngineContext:
    """
    Contexto de observabilidade de uma cadeia parse → transform.

    Decisões arquiteturais:
        - Logs não são strings livres, mas eventos estruturados
        - Warnings carregam o payload de diagnóstico serializado
        - O contexto é mutável apenas pelo chamador e pelas funções que o recebem

    Invariantes:
        - Cada evento contém `context_id`, `stage`, `level`, `message` e `timestamp`
        - A coleção de eventos cresce de forma incremental
    """

    context_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=_utcnow)
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------

    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "context_id": self.context_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": _utcnow().isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, stage: str, payload: DiagnosticPayload) -> None:
        if stage not in self.warnings:
            self.warnings[stage] = []
        self.warnings[stage].append(payload.to_dict())
        self.log(stage=stage, level="WARNING", message=payload.message, type=payload.type)

    def warnings_for(self, stage: str) -> List[Dict[str, Any]]:
        return list(self.warnings.get(stage, []))


def report(
    ctx: Optional[EngineContext],
    *,
    stage: str,
    payload: DiagnosticPayload,
) -> None:
    """Registra um warning quando houver contexto; no-op caso contrário."""
    if ctx is not None:
        ctx.add_warning(stage=stage, payload=payload)
