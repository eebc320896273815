# tests/core/config/test_merge.py
"""
Testes da política de deep-merge.

Os testes asseguram que:
- dicts são mesclados recursivamente
- listas (ex.: repositórios) são sobrescritas, nunca concatenadas
- conflitos de tipo são rejeitados
- nenhum input é mutado
"""

import pytest

from rootbuild.core.config.errors import ConfigTypeConflictError
from rootbuild.core.config.merge import deep_merge


def test_nested_dicts_merge():
    base = {"subprojects": {"evaluation_depends_on": ":app", "build_dir_per_project": True}}
    override = {"subprojects": {"build_dir_per_project": False}}

    assert deep_merge(base, override) == {
        "subprojects": {"evaluation_depends_on": ":app", "build_dir_per_project": False}
    }


def test_lists_are_replaced():
    base = {"allprojects": {"repositories": ["google", "mavenCentral"]}}
    override = {"allprojects": {"repositories": ["mavenCentral"]}}

    assert deep_merge(base, override)["allprojects"]["repositories"] == ["mavenCentral"]


def test_type_conflict():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"subprojects": {"evaluation_depends_on": ":app"}}, {"subprojects": [":app"]})


def test_inputs_not_mutated():
    base = {"allprojects": {"repositories": ["google"]}}
    override = {"allprojects": {"repositories": ["mavenCentral"]}, "build_dir": "../out"}

    deep_merge(base, override)

    assert base == {"allprojects": {"repositories": ["google"]}}
    assert override["build_dir"] == "../out"
