# src/rootbuild/__init__.py
"""
rootbuild — descriptor de build raiz para builds multi-módulo.

Este pacote implementa a camada de orquestração de configuração de um
build: o descriptor do projeto raiz declara repositórios de dependências,
realoca o diretório de saída compartilhado, impõe que todos os
sub-projetos aguardem a avaliação de um projeto nomeado e registra a task
idempotente `clean`.

Arquitetura em alto nível:
    - core.config      → carregamento, merge e hashing do arquivo de descriptor
    - core.descriptor  → BuildDescriptor (configure / clean)
    - core.project     → grafo de projetos (raiz + sub-projetos)
    - core.engine      → planejamento da avaliação e invocação de tasks
    - core.tasks       → registro de tasks e primitivo de deleção
    - core.session     → contexto da sessão e eventos estruturados
    - cli              → superfície de invocação de tasks (`rootbuild clean`)

Limites explícitos:
    - Não compila, não resolve dependências transitivas, não empacota artefatos
"""

from .core.descriptor import BuildDescriptor, DescriptorSettings, DescriptorState, EvaluationDependency
from .core.exceptions import ConfigurationError, DeletionError

__all__ = [
    "BuildDescriptor",
    "ConfigurationError",
    "DeletionError",
    "DescriptorSettings",
    "DescriptorState",
    "EvaluationDependency",
]
