# tests/core/engine/test_engine_session.py
"""
Testes de uma sessão completa do BuildEngine.

Os testes asseguram que:
- o engine configura o descriptor e avalia projetos na ordem planejada
- repositórios são aplicados a todos os projetos, raiz incluída
- cada sub-projeto recebe `<build_dir>/<nome>` como diretório de saída
- tasks são invocadas por nome, com status explícito
- falhas de task viram payloads serializáveis e respeitam fail-fast
- build_dir segue last-write-wins com warning
"""

import pytest

from rootbuild.core.descriptor import BuildDescriptor
from rootbuild.core.engine.engine import BuildEngine, BuildModel
from rootbuild.core.exceptions import ConfigurationError
from rootbuild.core.tasks.types import Task, TaskStatus


@pytest.fixture
def engine(android_dir, app_graph, session_ctx):
    return BuildEngine(descriptor=BuildDescriptor(android_dir), graph=app_graph, ctx=session_ctx)


def test_configure_evaluates_root_then_app_first(engine):
    engine.configure()
    assert engine.model.evaluation_order == [":", ":app", ":plugin_a", ":plugin_b"]


def test_repositories_applied_to_all_projects(engine):
    settings = engine.configure()

    assert set(engine.model.projects) == {":", ":app", ":plugin_a", ":plugin_b"}
    for project in engine.model.projects.values():
        assert project.evaluated
        assert project.repositories == settings.repositories


def test_per_project_build_dirs(engine, repo_dir):
    engine.configure()
    build = (repo_dir / "build").resolve()

    assert engine.model.build_dir == build
    assert engine.model.projects[":"].build_dir == build
    assert engine.model.projects[":app"].build_dir == build / "app"


def test_shared_build_dir_when_per_project_disabled(android_dir, app_graph, repo_dir):
    declarations = {
        "allprojects": {"repositories": ["google", "mavenCentral"]},
        "build_dir": "../build",
        "subprojects": {"evaluation_depends_on": ":app", "build_dir_per_project": False},
    }
    engine = BuildEngine(descriptor=BuildDescriptor(android_dir, declarations), graph=app_graph)
    engine.configure()
    assert engine.model.projects[":plugin_a"].build_dir == (repo_dir / "build").resolve()


def test_configure_fails_when_target_missing(android_dir, graph_without_app):
    engine = BuildEngine(descriptor=BuildDescriptor(android_dir), graph=graph_without_app)
    with pytest.raises(ConfigurationError):
        engine.configure()
    assert engine.model.projects == {}
    assert engine.run_task("clean").status == TaskStatus.FAILED


def test_clean_success_then_up_to_date(engine, populate):
    settings = engine.configure()
    populate(settings.build_dir)

    result = engine.run_tasks(["clean"])
    assert result.ok
    assert result.tasks["clean"].status == TaskStatus.SUCCESS

    again = engine.run_tasks(["clean"])
    assert again.tasks["clean"].status == TaskStatus.UP_TO_DATE
    assert not settings.build_dir.exists()


def test_unknown_task_fails_with_payload(engine):
    engine.configure()
    result = engine.run_tasks(["assemble"])

    assert not result.ok
    error = result.tasks["assemble"].payload["error"]
    assert error["type"] == "TASK_NOT_FOUND"
    assert error["details"]["available"] == ["clean"]


def test_deletion_failure_becomes_payload(engine, populate, monkeypatch):
    settings = engine.configure()
    populate(settings.build_dir)

    def _busy(path, *args, **kwargs):
        raise OSError(16, "Device or resource busy", str(path))

    monkeypatch.setattr("rootbuild.core.tasks.clean.shutil.rmtree", _busy)

    result = engine.run_tasks(["clean"])
    error = result.tasks["clean"].payload["error"]
    assert result.tasks["clean"].status == TaskStatus.FAILED
    assert error["type"] == "DELETION_ERROR"
    assert error["details"]["path"] == str(settings.build_dir)


def test_fail_fast_stops_after_first_failure(engine):
    engine.configure()
    calls = []
    engine.descriptor.tasks.register(Task(name="boom", action=lambda: 1 / 0))
    engine.descriptor.tasks.register(Task(name="after", action=lambda: calls.append("after")))

    result = engine.run_tasks(["boom", "after"])

    assert result.tasks["boom"].status == TaskStatus.FAILED
    assert result.tasks["boom"].payload["error"]["details"]["exc_type"] == "ZeroDivisionError"
    assert "after" not in result.tasks
    assert calls == []


def test_keep_going_runs_remaining_tasks(android_dir, app_graph):
    engine = BuildEngine(descriptor=BuildDescriptor(android_dir), graph=app_graph, fail_fast=False)
    engine.configure()
    engine.descriptor.tasks.register(Task(name="boom", action=lambda: 1 / 0))

    result = engine.run_tasks(["boom", "clean", "clean"])

    assert list(result.tasks) == ["boom", "clean"]
    assert result.tasks["clean"].status == TaskStatus.SUCCESS


def test_build_dir_last_write_wins(tmp_path, session_ctx):
    model = BuildModel()
    model.set_build_dir(tmp_path / "a", ctx=session_ctx)
    model.set_build_dir(tmp_path / "b", ctx=session_ctx)

    assert model.build_dir == tmp_path / "b"
    assert len(session_ctx.warnings["engine"]) == 1
