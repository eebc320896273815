# tests/core/tasks/test_delete_tree.py
"""
Testes do primitivo de deleção `delete_tree`.

Os testes asseguram que:
- caminho ausente retorna False sem erro
- diretórios aninhados, arquivos soltos e links simbólicos são removidos
- o alvo de um link simbólico nunca é seguido
- falhas do filesystem viram DeletionError com detalhes estruturados
"""

import os

import pytest

from rootbuild.core.exceptions import DeletionError
from rootbuild.core.tasks.clean import delete_tree


def test_absent_path_returns_false(tmp_path):
    assert delete_tree(tmp_path / "missing") is False


def test_removes_nested_directories(tmp_path, populate):
    root = tmp_path / "build"
    populate(root)

    assert delete_tree(root) is True
    assert not root.exists()
    assert list(tmp_path.iterdir()) == []


def test_removes_plain_file(tmp_path):
    f = tmp_path / "build"
    f.write_text("stale", encoding="utf-8")

    assert delete_tree(f) is True
    assert not f.exists()


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlink_removed_without_following(tmp_path):
    target = tmp_path / "keep"
    target.mkdir()
    (target / "important.txt").write_text("data", encoding="utf-8")
    link = tmp_path / "build"
    link.symlink_to(target, target_is_directory=True)

    assert delete_tree(link) is True
    assert not link.is_symlink()
    assert (target / "important.txt").exists()


def test_os_error_is_wrapped(tmp_path, monkeypatch):
    root = tmp_path / "build"
    root.mkdir()

    def _denied(path, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr("rootbuild.core.tasks.clean.shutil.rmtree", _denied)

    with pytest.raises(DeletionError) as excinfo:
        delete_tree(root)

    assert excinfo.value.details["path"] == str(root)
    assert isinstance(excinfo.value.__cause__, PermissionError)
