"""
Tasks do rootbuild: tipos, registro e primitivo de deleção.
"""

from .clean import delete_tree
from .registry import DuplicateTaskNameError, TaskRegistry, UnknownTaskError
from .types import Task, TaskResult, TaskStatus

__all__ = [
    "DuplicateTaskNameError",
    "Task",
    "TaskRegistry",
    "TaskResult",
    "TaskStatus",
    "UnknownTaskError",
    "delete_tree",
]
