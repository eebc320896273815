# src/rootbuild/core/config/__init__.py

"""
Camada de configuração do rootbuild.

Este pacote carrega, mescla e identifica (hash) as declarações do
descriptor de build raiz.

Responsabilidades do pacote:
    - Carregamento de arquivos YAML/JSON (descriptor, overrides, settings)
    - Resolução das declarações finais via deep-merge determinístico
    - Geração de hash canônico para inspeção da sessão

Limites explícitos:
    - Não aplica declarações ao modelo do build
    - Não interage com Engine ou tasks diretamente
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DescriptorNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import BUILTIN_DESCRIPTOR, load_descriptor, load_file
from .merge import deep_merge

__all__ = [
    "BUILTIN_DESCRIPTOR",
    "ConfigError",
    "ConfigTypeConflictError",
    "DescriptorNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_descriptor",
    "load_file",
]
