# tests/core/config/test_loader.py
"""
Testes do carregador de descriptor (load_descriptor / load_file).

Os testes asseguram que:
- sem arquivo, as declarações embutidas são retornadas
- o arquivo de descriptor é obrigatório quando informado
- o arquivo local é opcional e tem precedência
- formatos não suportados e raízes que não são dict são rejeitados
"""

import json

import pytest

try:
    from rootbuild.core.config.loader import BUILTIN_DESCRIPTOR, load_descriptor, load_file
    from rootbuild.core.config.errors import (
        DescriptorNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_descriptor = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """Falha imediatamente quando o loader ou suas exceções não podem ser importados."""
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader. Implement:\n"
            "- src/rootbuild/core/config/loader.py (load_descriptor, load_file)\n"
            "- src/rootbuild/core/config/errors.py\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_builtin_declarations_without_file():
    _require_imports()
    cfg = load_descriptor()
    assert cfg == BUILTIN_DESCRIPTOR
    assert cfg is not BUILTIN_DESCRIPTOR
    assert cfg["allprojects"]["repositories"] == ["google", "mavenCentral"]
    assert cfg["build_dir"] == "../build"
    assert cfg["subprojects"]["evaluation_depends_on"] == ":app"


def test_missing_descriptor_file(tmp_path):
    _require_imports()
    with pytest.raises(DescriptorNotFoundError):
        load_descriptor(descriptor_path=tmp_path / "build.yaml")


def test_local_override_precedence(tmp_path, descriptor_yaml, local_override_yaml):
    _require_imports()
    (tmp_path / "build.yaml").write_text(descriptor_yaml, encoding="utf-8")
    (tmp_path / "build.local.yaml").write_text(local_override_yaml, encoding="utf-8")

    cfg = load_descriptor(
        descriptor_path=tmp_path / "build.yaml",
        local_path=tmp_path / "build.local.yaml",
    )

    assert cfg["build_dir"] == "../out"
    assert cfg["allprojects"]["repositories"][1]["name"] == "internal"
    assert cfg["subprojects"]["evaluation_depends_on"] == ":app"


def test_absent_local_file_is_ignored(tmp_path, descriptor_yaml):
    _require_imports()
    (tmp_path / "build.yaml").write_text(descriptor_yaml, encoding="utf-8")
    cfg = load_descriptor(descriptor_path=tmp_path / "build.yaml", local_path=tmp_path / "nope.yaml")
    assert cfg["build_dir"] == "../build"


def test_json_descriptor(tmp_path):
    _require_imports()
    p = tmp_path / "build.json"
    p.write_text(json.dumps({"subprojects": {"evaluation_depends_on": ":mobile"}}), encoding="utf-8")

    cfg = load_descriptor(descriptor_path=p)
    assert cfg["subprojects"]["evaluation_depends_on"] == ":mobile"
    assert cfg["subprojects"]["build_dir_per_project"] is True


def test_unsupported_format(tmp_path):
    _require_imports()
    p = tmp_path / "build.gradle.kts"
    p.write_text("allprojects {}", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_file(p)


def test_invalid_root_type(tmp_path):
    _require_imports()
    p = tmp_path / "build.yaml"
    p.write_text("- google\n- mavenCentral\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_file(p)


def test_empty_file_is_empty_dict(tmp_path):
    _require_imports()
    p = tmp_path / "build.yaml"
    p.write_text("", encoding="utf-8")
    assert load_file(p) == {}
