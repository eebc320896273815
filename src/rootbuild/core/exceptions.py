"""
rootbuild — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do rootbuild.

Objetivo:
- Permitir que o descriptor, as tasks e o engine levantem exceções semânticas
- Facilitar o mapeamento determinístico para BuildErrorPayload
- Evitar OSError/RuntimeError genéricos nas fronteiras públicas

Regras:
- Existem apenas dois tipos de falha de domínio: configuração e deleção
- Exceções carregam apenas dados estruturados (serializáveis) em `details`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RootBuildException(Exception):
    """Base class para exceções internas do rootbuild.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class ConfigurationError(RootBuildException):
    """Falha irrecuperável ao configurar o descriptor (sessão inteira falha)."""


@dataclass(frozen=True)
class DeletionError(RootBuildException):
    """O diretório de saída existe mas não pôde ser removido."""
