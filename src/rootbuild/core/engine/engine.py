# src/rootbuild/core/engine/engine.py
"""
Engine mínimo que hospeda o descriptor raiz.

O engine executa, em uma sessão:
    1. `configure()` do descriptor (uma única vez)
    2. aplicação das declarações ao modelo global do build (`BuildModel`)
    3. planejamento e avaliação dos projetos respeitando EvaluationDependency
    4. invocação de tasks por nome (`run_tasks`)

Falhas de configuração interrompem a sessão (`ConfigurationError`).
Falhas de task são convertidas em `BuildErrorPayload` e refletidas em
`TaskResult`; com fail-fast ativo nenhuma task posterior é executada.

Limites explícitos:
    - Não compila nem empacota projetos: "avaliar" um projeto significa
      aplicar repositórios e diretório de saída ao seu modelo
    - Não executa tasks em paralelo
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from rootbuild.core.descriptor import BuildDescriptor, DescriptorSettings
from rootbuild.core.errors import (
    BuildErrorPayload,
    configuration_error,
    deletion_error,
    engine_execution_error,
    task_not_found,
)
from rootbuild.core.exceptions import ConfigurationError, DeletionError
from rootbuild.core.project.graph import ProjectGraph
from rootbuild.core.repositories import RepositoryList
from rootbuild.core.session.context import SessionContext
from rootbuild.core.tasks.registry import UnknownTaskError
from rootbuild.core.tasks.types import TaskResult, TaskStatus

from .planner import CycleDetectedError, UnknownProjectError, plan_evaluation

SCOPE = "engine"


@dataclass
class ProjectModel:
    """Estado de um projeto após a avaliação."""

    path: str
    repositories: RepositoryList = ()
    build_dir: Optional[Path] = None
    evaluated: bool = False


@dataclass
class BuildModel:
    """
    Modelo global do build mantido pelo engine.

    `build_dir` segue last-write-wins: um segundo descriptor que declare
    outro valor sobrescreve o anterior e um warning é registrado.
    """

    repositories: RepositoryList = ()
    build_dir: Optional[Path] = None
    projects: Dict[str, ProjectModel] = field(default_factory=dict)
    evaluation_order: List[str] = field(default_factory=list)

    def set_build_dir(self, path: Path, *, ctx: Optional[SessionContext] = None) -> None:
        if self.build_dir is not None and self.build_dir != path and ctx is not None:
            ctx.add_warning(
                scope=SCOPE,
                message=f"build_dir sobrescrito: {self.build_dir} -> {path}",
            )
        self.build_dir = path


@dataclass(frozen=True)
class SessionResult:
    """Resultado agregado das tasks invocadas em uma sessão."""

    tasks: Dict[str, TaskResult] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return all(r.status != TaskStatus.FAILED for r in self.tasks.values())


class BuildEngine:
    """Engine canônico do rootbuild (configure + evaluate + tasks)."""

    def __init__(
        self,
        *,
        descriptor: BuildDescriptor,
        graph: ProjectGraph,
        ctx: Optional[SessionContext] = None,
        fail_fast: bool = True,
    ):
        self.descriptor = descriptor
        self.graph = graph
        self.ctx: SessionContext = ctx if ctx is not None else SessionContext.new(config=descriptor.declarations)
        self.fail_fast = fail_fast
        self.model = BuildModel()

    # ------------------------------------------------------------------
    # Fase de configuração
    # ------------------------------------------------------------------
    def configure(self) -> DescriptorSettings:
        """
        Configura o descriptor e avalia os projetos na ordem planejada.

        Raises:
            ConfigurationError: falha do descriptor ou grafo de avaliação inválido.
        """
        settings = self.descriptor.configure(self.graph, ctx=self.ctx)

        self.model.repositories = settings.repositories
        self.model.set_build_dir(settings.build_dir, ctx=self.ctx)

        edges = list(self.graph.parent_edges()) + settings.evaluation_dependency.edges()
        try:
            order = plan_evaluation([p.path for p in self.graph.projects()], edges)
        except (UnknownProjectError, CycleDetectedError) as e:
            raise ConfigurationError(
                message=str(e),
                details={"edges": [list(e_) for e_ in edges]},
                hint="Revise evaluation_depends_on e a hierarquia de projetos.",
            ) from e

        for path in order:
            self._evaluate(path, settings)
        self.model.evaluation_order = order

        self.ctx.log(scope=SCOPE, level="INFO", message="projects evaluated", order=order)
        return settings

    def _project_build_dir(self, path: str, settings: DescriptorSettings) -> Path:
        project = self.graph.get(path)
        if project.is_root or not settings.build_dir_per_project:
            return settings.build_dir
        return settings.build_dir / project.name

    def _evaluate(self, path: str, settings: DescriptorSettings) -> None:
        self.model.projects[path] = ProjectModel(
            path=path,
            repositories=settings.repositories,
            build_dir=self._project_build_dir(path, settings),
            evaluated=True,
        )
        self.ctx.log(scope=path, level="DEBUG", message="project evaluated")

    # ------------------------------------------------------------------
    # Guardrails: exceção -> BuildErrorPayload
    # ------------------------------------------------------------------
    def _exception_to_error(self, name: str, exc: Exception) -> BuildErrorPayload:
        if isinstance(exc, DeletionError):
            return deletion_error(
                path=str(exc.details.get("path", self.model.build_dir)),
                exc_message=exc.details.get("exc_message"),
            )
        if isinstance(exc, ConfigurationError):
            return configuration_error(message=exc.message, details=dict(exc.details))
        return engine_execution_error(
            task=name,
            exc_type=exc.__class__.__name__,
            exc_message=str(exc),
        )

    # ------------------------------------------------------------------
    # Fase de execução
    # ------------------------------------------------------------------
    def run_task(self, name: str) -> TaskResult:
        try:
            task = self.descriptor.tasks.get(name)
        except UnknownTaskError as e:
            error = task_not_found(task=name, available=e.available)
            self.ctx.log(scope=name, level="ERROR", message=error.message)
            return TaskResult(task=name, status=TaskStatus.FAILED, summary=error.message,
                              payload={"error": error.to_dict()})

        self.ctx.log(scope=name, level="INFO", message="task started")
        try:
            did_work = task.action()
        except Exception as e:
            error = self._exception_to_error(name, e)
            self.ctx.log(scope=name, level="ERROR", message=error.message, error=error.to_dict())
            return TaskResult(task=name, status=TaskStatus.FAILED, summary=error.message,
                              payload={"error": error.to_dict()})

        if did_work is False:
            status, summary = TaskStatus.UP_TO_DATE, "up-to-date"
        else:
            status, summary = TaskStatus.SUCCESS, "done"
        self.ctx.log(scope=name, level="INFO", message=f"task {summary}")
        return TaskResult(task=name, status=status, summary=summary)

    def run_tasks(self, names: Sequence[str]) -> SessionResult:
        """
        Invoca tasks registradas, na ordem recebida.

        A mesma task pedida mais de uma vez executa uma única vez.
        """
        results: Dict[str, TaskResult] = {}
        for name in names:
            if name in results:
                continue
            result = self.run_task(name)
            results[name] = result
            if result.status == TaskStatus.FAILED and self.fail_fast:
                break
        return SessionResult(tasks=results)
