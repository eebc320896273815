# src/rootbuild/core/session/context.py
"""
Contexto de uma sessão do build.

Este módulo define o `SessionContext`, a estrutura canônica que acompanha
uma invocação do engine: identidade da sessão, declarações resolvidas do
descriptor e o registro estruturado de eventos.

O SessionContext é o único meio permitido de:
    - registrar eventos de log estruturados (configure, evaluate, tasks)
    - coletar warnings não fatais (ex.: repositórios duplicados)

Princípios fundamentais:
    - Isolamento por sessão (cada invocação possui seu próprio contexto)
    - Ausência de estado global compartilhado

Invariantes:
    - Eventos sempre incluem `session_id` e `scope`
    - Warnings são agrupados por `scope`

Limites explícitos:
    - Não executa tasks
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4


@dataclass
class SessionContext:
    """
    Contexto de execução de uma sessão do build.

    Consolida:
        - identidade da sessão (session_id, created_at)
        - declarações resolvidas do descriptor
        - eventos estruturados de log
        - warnings associados a um escopo (descriptor, projeto ou task)
    """
    session_id: str
    created_at: datetime
    config: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def new(cls, *, config: Dict[str, Any] | None = None) -> "SessionContext":
        return cls(
            session_id=uuid4().hex,
            created_at=datetime.now(timezone.utc),
            config=dict(config or {}),
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, scope: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "session_id": self.session_id,
            "scope": scope,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, scope: str, message: str) -> None:
        if scope not in self.warnings:
            self.warnings[scope] = []
        self.warnings[scope].append(message)
        self.log(scope=scope, level="WARNING", message=message)
