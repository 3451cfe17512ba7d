"""
Tasks de build do Atlas Build.

Cada módulo define uma task idempotente (ou a composição explícita de
sub-tasks idempotentes). `default_registry()` registra todas elas no início
do processo, para que pipelines sejam descritos apenas por identificadores.
"""

from __future__ import annotations

from atlas_build.core.pipeline.registry import TaskRegistry

from .archive import archive
from .clean import clean
from .install import install
from .metadata import metadata
from .native import native
from .standalone import standalone

BUILTIN_TASKS = {
    "clean": clean,
    "metadata": metadata,
    "archive": archive,
    "standalone": standalone,
    "install": install,
    "native": native,
}


def default_registry() -> TaskRegistry:
    registry = TaskRegistry()
    for task_id, task in BUILTIN_TASKS.items():
        registry.register(task_id, task)
    return registry


__all__ = ["BUILTIN_TASKS", "default_registry"]
