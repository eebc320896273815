"""
Modelo de projetos do build (raiz + sub-projetos).
"""

from .graph import (
    ROOT_PATH,
    InvalidProjectPathError,
    Project,
    ProjectGraph,
    normalize_path,
    parent_path,
)

__all__ = [
    "ROOT_PATH",
    "InvalidProjectPathError",
    "Project",
    "ProjectGraph",
    "normalize_path",
    "parent_path",
]
