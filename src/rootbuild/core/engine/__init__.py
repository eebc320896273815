"""
Engine do rootbuild.

Componentes principais:
    - planner → ordenação topológica determinística da fase de avaliação
    - engine  → sessão: configure, avaliação de projetos e invocação de tasks

Invariantes:
    - Projetos só são avaliados após suas dependências de avaliação
    - Cada task é executada no máximo uma vez por chamada de `run_tasks`
"""

from .engine import BuildEngine, BuildModel, ProjectModel, SessionResult
from .planner import CycleDetectedError, UnknownProjectError, plan_evaluation

__all__ = [
    "BuildEngine",
    "BuildModel",
    "CycleDetectedError",
    "ProjectModel",
    "SessionResult",
    "UnknownProjectError",
    "plan_evaluation",
]
