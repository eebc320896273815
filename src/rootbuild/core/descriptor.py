# src/rootbuild/core/descriptor.py
"""
Build Orchestration Descriptor do rootbuild.

Este módulo define o `BuildDescriptor`, a unidade de configuração do
projeto raiz de um build multi-módulo. O descriptor é lido uma vez por
sessão pelo engine e expõe:

    - RepositoryList: locais ordenados de lookup de dependências,
      aplicados a todos os projetos do build
    - BuildOutputPath: diretório de saída compartilhado, resolvido a partir
      da localização do próprio descriptor
    - EvaluationDependency: todos os sub-projetos aguardam a avaliação de um
      projeto nomeado (por convenção o módulo principal, `:app`)
    - a task `clean`, que remove BuildOutputPath de forma idempotente

Ciclo de vida:
    UNCONFIGURED → CONFIGURED, uma única transição por sessão.
    `clean()` só está disponível no estado CONFIGURED.

Decisões arquiteturais:
    - `configure()` é tudo-ou-nada: calcula e valida todas as declarações
      antes de aplicar qualquer uma; a task só é registrada após o commit
    - BuildOutputPath é um valor explícito entregue ao engine, nunca estado
      global mutável
    - A dependência de avaliação é expressa como arestas explícitas para o
      planner, nunca como ordem incidental de declaração

Limites explícitos:
    - Não compila, não resolve dependências, não empacota artefatos
    - Não garante acesso exclusivo a BuildOutputPath durante o `clean`
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from rootbuild.core.config.errors import ConfigError
from rootbuild.core.config.hashing import compute_config_hash
from rootbuild.core.config.loader import BUILTIN_DESCRIPTOR, load_descriptor
from rootbuild.core.config.merge import deep_merge
from rootbuild.core.exceptions import ConfigurationError
from rootbuild.core.project.graph import ProjectGraph, normalize_path, parent_path
from rootbuild.core.repositories import RepositoryList, duplicates, resolve_repositories
from rootbuild.core.session.context import SessionContext
from rootbuild.core.tasks.clean import delete_tree
from rootbuild.core.tasks.registry import TaskRegistry
from rootbuild.core.tasks.types import Task

SCOPE = "descriptor"
CLEAN_TASK = "clean"


class DescriptorState(str, Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"


@dataclass(frozen=True)
class EvaluationDependency:
    """
    Relação dirigida `{dependentes → projeto alvo}`.

    `dependents` contém todos os sub-projetos exceto o alvo e seus
    ancestrais (que são avaliados antes do alvo de qualquer forma).
    """

    dependents: Tuple[str, ...]
    target: str

    def edges(self) -> List[Tuple[str, str]]:
        return [(d, self.target) for d in self.dependents]


@dataclass(frozen=True)
class DescriptorSettings:
    """Declarações aplicadas por `configure()`, imutáveis durante a sessão."""

    repositories: RepositoryList
    build_dir: Path
    evaluation_dependency: EvaluationDependency
    build_dir_per_project: bool
    config_hash: str


class BuildDescriptor:
    """
    Descriptor do projeto raiz.

    Args:
        location: diretório onde o descriptor reside; caminhos relativos
            declarados (ex.: `../build`) são resolvidos a partir dele.
        declarations: declarações resolvidas; quando omitidas, usa
            `BUILTIN_DESCRIPTOR`.
        tasks: registry onde a task `clean` é registrada; um registry novo
            é criado quando omitido.
    """

    def __init__(
        self,
        location: Union[str, Path],
        declarations: Optional[Dict[str, Any]] = None,
        *,
        tasks: Optional[TaskRegistry] = None,
    ):
        self.location = Path(location)
        self.declarations: Dict[str, Any] = (
            deep_merge(BUILTIN_DESCRIPTOR, {}) if declarations is None else dict(declarations)
        )
        self.tasks: TaskRegistry = tasks if tasks is not None else TaskRegistry()
        self.state = DescriptorState.UNCONFIGURED
        self._settings: Optional[DescriptorSettings] = None

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        *,
        local_path: Optional[Union[str, Path]] = None,
        tasks: Optional[TaskRegistry] = None,
    ) -> "BuildDescriptor":
        """
        Cria um descriptor a partir de um arquivo YAML/JSON.

        A localização do descriptor é o diretório que contém o arquivo.

        Raises:
            ConfigurationError: Se o arquivo não puder ser carregado ou mesclado.
        """
        path = Path(path)
        try:
            declarations = load_descriptor(descriptor_path=path, local_path=local_path)
        except ConfigError as e:
            raise ConfigurationError(
                message=str(e),
                details={"descriptor": str(path), "error": e.__class__.__name__},
                hint="Corrija o arquivo de descriptor (YAML/JSON com raiz dict).",
            ) from e
        return cls(path.resolve().parent, declarations, tasks=tasks)

    # -----------------------------
    # Estado
    # -----------------------------
    @property
    def is_configured(self) -> bool:
        return self.state is DescriptorState.CONFIGURED

    @property
    def settings(self) -> DescriptorSettings:
        if self._settings is None:
            raise ConfigurationError(
                message="Descriptor ainda não configurado",
                details={"state": self.state.value},
                hint="Execute configure() antes de acessar as declarações.",
            )
        return self._settings

    @property
    def repositories(self) -> RepositoryList:
        return self.settings.repositories

    @property
    def build_dir(self) -> Path:
        return self.settings.build_dir

    @property
    def evaluation_dependency(self) -> EvaluationDependency:
        return self.settings.evaluation_dependency

    # -----------------------------
    # Resolução (sem efeitos)
    # -----------------------------
    def _section(self, name: str) -> Dict[str, Any]:
        section = self.declarations.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(
                message=f"{name} deve ser um mapeamento",
                details={"section": name, "received": type(section).__name__},
            )
        return section

    def _resolve_repositories(self, ctx: Optional[SessionContext]) -> RepositoryList:
        allprojects = self._section("allprojects")
        entries = allprojects.get("repositories") or []
        if not isinstance(entries, list):
            raise ConfigurationError(
                message="allprojects.repositories deve ser uma lista",
                details={"received": type(entries).__name__},
            )
        try:
            repos = resolve_repositories(entries)
        except ValueError as e:
            raise ConfigurationError(
                message=str(e),
                details={"repositories": list(map(str, entries))},
                hint="Use 'google', 'mavenCentral' ou {name, url}.",
            ) from e

        if ctx is not None:
            for dup in duplicates(repos):
                ctx.add_warning(scope=SCOPE, message=f"Repositório duplicado: {dup.name}")
        return repos

    def _resolve_build_dir(self) -> Path:
        raw = self.declarations.get("build_dir")
        if not isinstance(raw, (str, Path)) or not str(raw).strip():
            raise ConfigurationError(
                message="build_dir deve ser um caminho não vazio",
                details={"build_dir": raw},
            )
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = self.location / path
        try:
            return path.resolve()
        except (OSError, RuntimeError) as e:
            raise ConfigurationError(
                message=f"Não foi possível resolver build_dir: {raw}",
                details={"build_dir": str(raw), "location": str(self.location), "exc_message": str(e)},
            ) from e

    def _resolve_evaluation_dependency(self, graph: ProjectGraph) -> EvaluationDependency:
        subprojects = self._section("subprojects")
        raw_target = subprojects.get("evaluation_depends_on")
        try:
            target = normalize_path(raw_target)
        except ValueError as e:
            raise ConfigurationError(
                message=f"evaluation_depends_on inválido: {raw_target!r}",
                details={"evaluation_depends_on": raw_target},
            ) from e

        if not graph.has(target):
            raise ConfigurationError(
                message=f"Projeto '{target}' não existe no grafo do build",
                details={
                    "evaluation_depends_on": target,
                    "projects": [p.path for p in graph.projects()],
                },
                hint="Inclua o projeto no settings do build ou ajuste evaluation_depends_on.",
            )

        ancestors = set()
        p = parent_path(target)
        while p is not None:
            ancestors.add(p)
            p = parent_path(p)

        dependents = tuple(
            sp.path for sp in graph.subprojects()
            if sp.path != target and sp.path not in ancestors
        )
        return EvaluationDependency(dependents=dependents, target=target)

    # -----------------------------
    # Operações
    # -----------------------------
    def configure(self, graph: ProjectGraph, *, ctx: Optional[SessionContext] = None) -> DescriptorSettings:
        """
        Aplica as declarações do descriptor uma única vez.

        Ordem: resolve repositórios, dependência de avaliação, build_dir e o
        hash das declarações; cria build_dir; faz o commit do estado; registra `clean`.

        Raises:
            ConfigurationError: build_dir não resolvível/criável, projeto alvo
                ausente do grafo, declarações inválidas ou descriptor já
                configurado. Nenhuma task é registrada nesses casos.
        """
        if self.is_configured:
            raise ConfigurationError(
                message="Descriptor já configurado nesta sessão",
                details={"location": str(self.location)},
            )

        repositories = self._resolve_repositories(ctx)
        dependency = self._resolve_evaluation_dependency(graph)
        build_dir = self._resolve_build_dir()
        per_project = bool(self._section("subprojects").get("build_dir_per_project", True))
        config_hash = compute_config_hash(_jsonable(self.declarations))

        if self.tasks.has(CLEAN_TASK):
            raise ConfigurationError(
                message=f"Task '{CLEAN_TASK}' já registrada por outro descriptor",
                details={"task": CLEAN_TASK},
            )

        try:
            build_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(
                message=f"Não foi possível criar build_dir: {build_dir}",
                details={"build_dir": str(build_dir), "exc_type": e.__class__.__name__, "exc_message": str(e)},
                hint="Verifique permissões do diretório pai ou ajuste build_dir.",
            ) from e

        settings = DescriptorSettings(
            repositories=repositories,
            build_dir=build_dir,
            evaluation_dependency=dependency,
            build_dir_per_project=per_project,
            config_hash=config_hash,
        )

        self._settings = settings
        self.state = DescriptorState.CONFIGURED
        self.tasks.register(
            Task(
                name=CLEAN_TASK,
                action=self.clean,
                group="build",
                description="Deletes the build directory.",
            )
        )

        if ctx is not None:
            ctx.log(
                scope=SCOPE,
                level="INFO",
                message="descriptor configured",
                repositories=[r.name for r in repositories],
                build_dir=str(build_dir),
                evaluation_depends_on=dependency.target,
                config_hash=settings.config_hash,
            )
        return settings

    def clean(self) -> bool:
        """
        Remove recursivamente BuildOutputPath.

        Returns:
            bool: True se algo foi removido, False se já estava ausente.

        Raises:
            ConfigurationError: Se o descriptor não estiver configurado.
            DeletionError: Se o caminho existe mas não pôde ser removido.
        """
        if not self.is_configured:
            raise ConfigurationError(
                message="clean indisponível: descriptor não configurado",
                details={"state": self.state.value},
                hint="Execute configure() antes de invocar clean.",
            )
        return delete_tree(self.build_dir)


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    # datas do YAML, Path e demais escalares entram no hash como texto
    return str(value)
