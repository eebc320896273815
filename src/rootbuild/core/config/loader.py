# src/rootbuild/core/config/loader.py
"""
Loader canônico do arquivo de descriptor do rootbuild.

Este módulo é responsável por carregar, validar estruturalmente e resolver
as declarações efetivas de um descriptor de build raiz.

As declarações são resolvidas a partir de:
    - declarações embutidas (`BUILTIN_DESCRIPTOR`, sempre presentes)
    - um arquivo de descriptor (YAML ou JSON)
    - um arquivo local de overrides (opcional)

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Erros estruturais são tratados como falhas fatais
    - A mesma entrada sempre produz as mesmas declarações finais

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam as declarações embutidas

Limites explícitos:
    - Não resolve caminhos nem valida o grafo de projetos
    - Não aplica as declarações (responsabilidade do descriptor)
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    DescriptorNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


# Declarações estáticas do descriptor raiz.
BUILTIN_DESCRIPTOR: Dict[str, Any] = {
    "allprojects": {
        "repositories": ["google", "mavenCentral"],
    },
    "build_dir": "../build",
    "subprojects": {
        "evaluation_depends_on": ":app",
        "build_dir_per_project": True,
    },
}


def load_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Arquivos vazios são interpretados como dicionários vazios.

    Args:
        path (Union[str, Path]): Caminho para o arquivo.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo carregado como dicionário.

    Raises:
        DescriptorNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    path = Path(path)
    if not path.is_file():
        raise DescriptorNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_descriptor(
    *,
    descriptor_path: Optional[Union[str, Path]] = None,
    local_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve as declarações efetivas do descriptor.

    Política de resolução:
        - `BUILTIN_DESCRIPTOR` é sempre a base
        - O arquivo de descriptor, quando informado, é obrigatório
        - O arquivo local é opcional; ausente no disco é ignorado
        - Precedência: local > arquivo > embutido (via `deep_merge`)

    Args:
        descriptor_path: Caminho opcional do arquivo de descriptor.
        local_path: Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Declarações finais resolvidas.

    Raises:
        DescriptorNotFoundError: Se o arquivo de descriptor não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    effective = deep_merge(BUILTIN_DESCRIPTOR, {})

    if descriptor_path is not None:
        effective = deep_merge(effective, load_file(descriptor_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, load_file(local_file))

    return effective
