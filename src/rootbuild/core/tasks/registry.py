# src/rootbuild/core/tasks/registry.py
"""
Registro de tasks invocáveis pelo engine.

Este módulo define o `TaskRegistry`, responsável por associar nomes a
funções simples e validar a unicidade desses nomes.

Decisões arquiteturais:
    - Tasks são funções ligadas a um nome, não subclasses de uma task base
    - Nomes duplicados são tratados como falha fatal de configuração
    - A ordem de registro é mantida separadamente da estrutura de armazenamento

Invariantes:
    - Cada nome registrado é único
    - `list()` reflete exatamente a ordem de registro

Limites explícitos:
    - Não executa tasks (responsabilidade do engine)
    - Não resolve dependências entre tasks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .types import Task


class DuplicateTaskNameError(ValueError):
    """
    Exceção levantada ao registrar duas tasks com o mesmo nome.

    Invariantes:
        - O estado do registry não é alterado após a falha
    """


class UnknownTaskError(KeyError):
    """Exceção levantada ao buscar uma task não registrada."""

    def __init__(self, name: str, available: List[str]):
        super().__init__(name)
        self.name = name
        self.available = list(available)

    def __str__(self) -> str:
        return f"Task '{self.name}' not found. Available: {self.available}"


@dataclass
class TaskRegistry:
    """Registro canônico de tasks, indexado por nome."""

    _tasks: Dict[str, Task] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def register(self, task: Task) -> Task:
        name = getattr(task, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ValueError("task.name must be a non-empty string")
        if not callable(getattr(task, "action", None)):
            raise ValueError(f"task '{name}' must have a callable action")

        if name in self._tasks:
            raise DuplicateTaskNameError(f"Duplicate task name: {name}")

        self._tasks[name] = task
        self._order.append(name)
        return task

    def has(self, name: str) -> bool:
        return name in self._tasks

    def get(self, name: str) -> Task:
        if name not in self._tasks:
            raise UnknownTaskError(name, self._order)
        return self._tasks[name]

    def list(self) -> List[Task]:
        return [self._tasks[n] for n in self._order]

    def __len__(self) -> int:
        return len(self._order)
