# src/rootbuild/core/tasks/clean.py
"""
Primitivo de deleção usado pela task `clean`.

`delete_tree` remove recursivamente um caminho e tudo abaixo dele.

Decisões arquiteturais:
    - Caminho ausente é sucesso (no-op), não erro
    - Links simbólicos são removidos sem seguir o alvo
    - Qualquer falha do filesystem vira `DeletionError`

Invariantes:
    - Reexecutar após uma deleção parcial converge para o caminho ausente

Limites explícitos:
    - Não garante acesso exclusivo ao caminho (responsabilidade do engine)
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Union

from rootbuild.core.exceptions import DeletionError


def delete_tree(path: Union[str, Path]) -> bool:
    """
    Remove `path` recursivamente.

    Returns:
        bool: True se algo foi removido, False se o caminho já não existia.

    Raises:
        DeletionError: Se o caminho existe mas não pôde ser removido.
    """
    path = Path(path)

    if not path.exists() and not path.is_symlink():
        return False

    try:
        if path.is_symlink() or not path.is_dir():
            path.unlink()
        else:
            shutil.rmtree(path)
    except FileNotFoundError:
        # removido concorrentemente: o estado final já é o desejado
        return False
    except OSError as e:
        raise DeletionError(
            message=f"Não foi possível remover {path}",
            details={
                "path": str(path),
                "exc_type": e.__class__.__name__,
                "exc_message": str(e),
            },
            hint="Feche arquivos abertos ou ajuste permissões e execute `clean` novamente.",
        ) from e

    return True
