# src/rootbuild/core/tasks/types.py
"""
Tipos canônicos de tasks do rootbuild.

Componentes principais:
    - Task       → unidade nomeada, sem argumentos, ligada a uma função simples
    - TaskStatus → estados finais (SUCCESS, UP_TO_DATE, FAILED)
    - TaskResult → resultado imutável de uma invocação

Uma task não herda de nenhuma classe base de framework: é apenas um nome
associado a um callable `() -> bool`. O retorno indica se houve trabalho
(`True`) ou se o estado já era o desejado (`False` → UP_TO_DATE).

Invariantes:
    - Enums possuem valores textuais canônicos
    - TaskResult é imutável e serializável
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional


class TaskStatus(str, Enum):
    """
    Estados finais possíveis de uma invocação de task.

    Estados definidos:
        - SUCCESS: a task executou e produziu efeito
        - UP_TO_DATE: a task executou sem nada a fazer (ex.: clean sem saída)
        - FAILED: a task levantou exceção
    """
    SUCCESS = "success"
    UP_TO_DATE = "up_to_date"
    FAILED = "failed"


@dataclass(frozen=True)
class Task:
    name: str
    action: Callable[[], Optional[bool]]
    group: str = "other"
    description: str = ""


@dataclass(frozen=True)
class TaskResult:
    """Resultado imutável da invocação de uma task."""

    task: str
    status: TaskStatus
    summary: str
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task": self.task,
            "status": self.status.value,
            "summary": self.summary,
            "payload": dict(self.payload),
        }
