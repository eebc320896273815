# tests/core/engine/test_planner_invalid_graph.py
"""
Testes de grafos de avaliação inválidos no planner.

Os testes asseguram que:
- arestas para projetos inexistentes são rejeitadas
- ciclos (inclusive auto-arestas) são identificados
- caminhos duplicados são rejeitados

Invariantes:
    - O planner nunca retorna um plano parcial em caso de erro
"""

import pytest

from rootbuild.core.engine.planner import CycleDetectedError, UnknownProjectError, plan_evaluation


def test_cycle_detected():
    with pytest.raises(CycleDetectedError):
        plan_evaluation([":a", ":b", ":c"], [(":a", ":c"), (":b", ":a"), (":c", ":b")])


def test_self_edge_is_a_cycle():
    with pytest.raises(CycleDetectedError):
        plan_evaluation([":app"], [(":app", ":app")])


def test_unknown_project():
    with pytest.raises(UnknownProjectError):
        plan_evaluation([":plugin"], [(":plugin", ":app")])


def test_duplicate_project_path():
    with pytest.raises(ValueError):
        plan_evaluation([":app", ":app"], [])
