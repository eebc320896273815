# src/rootbuild/core/project/graph.py
"""
Grafo de projetos de um build multi-módulo.

Este módulo modela a estrutura que o engine expõe ao descriptor: o projeto
raiz (`:`) e os sub-projetos incluídos pelo settings do build
(`:app`, `:feature:login`, ...).

Responsabilidades do módulo:
    - Validar e normalizar caminhos de projeto
    - Criar implicitamente projetos intermediários (`:feature` para `:feature:login`)
    - Responder à consulta de existência usada pelo descriptor
    - Expor a relação pai → filho para o planner

Invariantes:
    - O projeto raiz sempre existe e possui caminho `:`
    - Cada caminho aparece exatamente uma vez
    - A ordem de inclusão é preservada

Limites explícitos:
    - Não avalia projetos
    - Não conhece dependências de avaliação (responsabilidade do descriptor)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from rootbuild.core.config.loader import load_file

ROOT_PATH = ":"


class InvalidProjectPathError(ValueError):
    """Caminho de projeto fora do formato `:a:b`."""


def normalize_path(path: str) -> str:
    if not isinstance(path, str) or not path.strip():
        raise InvalidProjectPathError("project path must be a non-empty string")
    path = path.strip()
    if not path.startswith(":"):
        path = ":" + path
    if path == ROOT_PATH:
        return path
    segments = path[1:].split(":")
    if any(not s.strip() for s in segments):
        raise InvalidProjectPathError(f"Invalid project path: {path}")
    return ":" + ":".join(s.strip() for s in segments)


def parent_path(path: str) -> Optional[str]:
    if path == ROOT_PATH:
        return None
    head, _, _ = path.rpartition(":")
    return head or ROOT_PATH


@dataclass(frozen=True)
class Project:
    path: str
    name: str
    directory: Path

    @property
    def is_root(self) -> bool:
        return self.path == ROOT_PATH


@dataclass
class ProjectGraph:
    """
    Grafo de projetos consultado pelo descriptor e ordenado pelo planner.

    O projeto raiz é criado na construção; sub-projetos são adicionados via
    `include`, seguindo a convenção de diretórios `:a:b` → `<root_dir>/a/b`.
    """

    root_dir: Path
    root_name: str = "root"

    _projects: Dict[str, Project] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.root_dir = Path(self.root_dir)
        self._add(Project(path=ROOT_PATH, name=self.root_name, directory=self.root_dir))

    def _add(self, project: Project) -> None:
        self._projects[project.path] = project
        self._order.append(project.path)

    def include(self, path: str) -> Project:
        path = normalize_path(path)
        if path in self._projects:
            return self._projects[path]

        parent = parent_path(path)
        if parent is not None and parent not in self._projects:
            self.include(parent)

        segments = path[1:].split(":")
        project = Project(
            path=path,
            name=segments[-1],
            directory=self.root_dir.joinpath(*segments),
        )
        self._add(project)
        return project

    def has(self, path: str) -> bool:
        try:
            return normalize_path(path) in self._projects
        except InvalidProjectPathError:
            return False

    def get(self, path: str) -> Project:
        return self._projects[normalize_path(path)]

    @property
    def root(self) -> Project:
        return self._projects[ROOT_PATH]

    def projects(self) -> List[Project]:
        return [self._projects[p] for p in self._order]

    def subprojects(self) -> List[Project]:
        return [p for p in self.projects() if not p.is_root]

    def parent_edges(self) -> List[tuple]:
        """Arestas `(filho, pai)`: o pai é avaliado antes do filho."""
        return [(p.path, parent_path(p.path)) for p in self.subprojects()]

    # -----------------------------
    # Settings
    # -----------------------------
    @classmethod
    def from_settings(cls, settings: Dict[str, Any], *, root_dir: Union[str, Path]) -> "ProjectGraph":
        root_name = settings.get("root_name") or Path(root_dir).name or "root"
        graph = cls(root_dir=Path(root_dir), root_name=str(root_name))
        includes: Iterable[str] = settings.get("include") or []
        if isinstance(includes, str):
            includes = [includes]
        if not isinstance(includes, list):
            raise ValueError(f"settings.include must be a list of project paths, got {type(includes).__name__}")
        for path in includes:
            graph.include(path)
        return graph

    @classmethod
    def load(cls, settings_path: Union[str, Path], *, root_dir: Optional[Union[str, Path]] = None) -> "ProjectGraph":
        settings_path = Path(settings_path)
        settings = load_file(settings_path)
        return cls.from_settings(settings, root_dir=root_dir or settings_path.resolve().parent)
