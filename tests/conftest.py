# tests/conftest.py
"""
Fixtures compartilhados para testes do rootbuild.

Este módulo define fixtures reutilizáveis que fornecem:
- um layout de repositório temporário (`<repo>/android` como localização do descriptor)
- um grafo de projetos semelhante a um app multi-módulo
- descriptors em YAML (declaração padrão e override local)
- contexto de sessão controlado (SessionContext)

Decisões arquiteturais:
    - Todo acesso ao filesystem ocorre sob `tmp_path`
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa tasks
    - Todas as fixtures são seguras para execução em paralelo
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Layout do repositório
# =====================================================

@pytest.fixture
def repo_dir(tmp_path):
    """Raiz de um repositório temporário (`<tmp>/repo`)."""
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def android_dir(repo_dir):
    """
    Diretório onde o descriptor raiz reside (`<repo>/android`).

    Com a declaração padrão `build_dir: ../build`, o diretório de saída
    esperado é `<repo>/build`.
    """
    d = repo_dir / "android"
    d.mkdir()
    return d


@pytest.fixture
def app_graph(android_dir):
    """
    Grafo com o módulo principal `:app` e dois plugins.

    Returns:
        ProjectGraph: raiz + `:app`, `:plugin_a`, `:plugin_b`.
    """
    from rootbuild.core.project.graph import ProjectGraph

    graph = ProjectGraph(root_dir=android_dir, root_name="android")
    for path in (":plugin_b", ":app", ":plugin_a"):
        graph.include(path)
    return graph


@pytest.fixture
def graph_without_app(android_dir):
    from rootbuild.core.project.graph import ProjectGraph

    graph = ProjectGraph(root_dir=android_dir, root_name="android")
    graph.include(":plugin_a")
    return graph


# =====================================================
# Descriptor em arquivo
# =====================================================

@pytest.fixture
def descriptor_yaml() -> str:
    """Conteúdo típico de um `build.yaml` de projeto raiz."""
    return """
allprojects:
  repositories:
    - google
    - mavenCentral
build_dir: ../build
subprojects:
  evaluation_depends_on: ":app"
  build_dir_per_project: true
""".lstrip()


@pytest.fixture
def local_override_yaml() -> str:
    """Override local que acrescenta um repositório interno e muda o build_dir."""
    return """
allprojects:
  repositories:
    - google
    - name: internal
      url: https://artifacts.example.com/maven/
build_dir: ../out
""".lstrip()


# =====================================================
# Sessão
# =====================================================

@pytest.fixture
def session_ctx():
    """SessionContext com identidade fixa e sem declarações."""
    from rootbuild.core.session.context import SessionContext

    return SessionContext(
        session_id="session_test_001",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        config={},
    )


@pytest.fixture
def populate():
    """
    Factory que cria uma árvore aninhada de arquivos sob um diretório.

    Returns:
        Callable[[Path], List[Path]]: cria e retorna os arquivos criados.
    """
    def _populate(root):
        files = [
            root / "app" / "intermediates" / "classes.jar",
            root / "app" / "outputs" / "apk" / "debug" / "app-debug.apk",
            root / "plugin_a" / "tmp" / "stamp",
            root / "reports" / "lint.html",
        ]
        for f in files:
            f.parent.mkdir(parents=True, exist_ok=True)
            f.write_text("x", encoding="utf-8")
        return files

    return _populate
