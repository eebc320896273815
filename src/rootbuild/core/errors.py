"""
rootbuild — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros reportados pelo rootbuild.
Erros reportados ao usuário (CLI, resultados de task) são artefatos do
contrato operacional do sistema, devendo ser:

- explícitos
- serializáveis
- acionáveis

Nenhum retry automático é aplicado a partir destes payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BuildErrorPayload:
    """
    Payload canônico de erro do rootbuild.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
DELETION_ERROR = "DELETION_ERROR"
TASK_NOT_FOUND = "TASK_NOT_FOUND"
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def configuration_error(
    *,
    message: str = "Configuração inválida do build descriptor",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise o descriptor e o settings do build antes de reexecutar a sessão.",
) -> BuildErrorPayload:
    return BuildErrorPayload(
        type=CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint=hint,
    )


def deletion_error(
    *,
    path: str,
    exc_message: Optional[str] = None,
    hint: str = "Feche arquivos abertos ou ajuste permissões do diretório e execute `clean` novamente.",
) -> BuildErrorPayload:
    return BuildErrorPayload(
        type=DELETION_ERROR,
        message="Falha ao remover o diretório de saída do build",
        details={
            "path": path,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def task_not_found(
    *,
    task: str,
    available: Optional[list] = None,
    hint: str = "Use `rootbuild --list-tasks` para ver as tasks registradas.",
) -> BuildErrorPayload:
    return BuildErrorPayload(
        type=TASK_NOT_FOUND,
        message=f"Task '{task}' não encontrada",
        details={
            "task": task,
            "available": list(available or []),
        },
        hint=hint,
    )


def engine_execution_error(
    *,
    task: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique a saída da sessão para diagnosticar a falha. Nenhum retry é aplicado automaticamente.",
) -> BuildErrorPayload:
    return BuildErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message="Falha inesperada durante a execução da task",
        details={
            "task": task,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )
