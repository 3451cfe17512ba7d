"""
Registro e resolução de Tasks do pipeline.

Este módulo define o `TaskRegistry`, o mapa explícito de identificador de
task para função, populado uma vez no início do processo
(`atlas_build.tasks.default_registry`).

A resolução acontece no momento da invocação, não na construção do
pipeline: a lista de tasks é puro dado (arquivo de config, argumento de CLI)
e o chamador não precisa de referências executáveis.

Responsabilidades do módulo:
    - Validar unicidade e formato dos identificadores
    - Preservar a ordem de registro
    - Resolver um identificador para sua função (`UnknownTask` se ausente)

Invariantes:
    - Cada task registrada possui um identificador único e não vazio
    - `ids()` reflete exatamente a ordem de registro
    - `resolve` não tem efeitos colaterais

Limites explícitos:
    - Não executa tasks (ver `core.engine.runner`)
    - Não infere dependências entre tasks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from atlas_build.core.exceptions import UnknownTask

from .task import Task


class DuplicateTaskIdError(ValueError):
    """
    Exceção levantada ao registrar duas tasks com o mesmo identificador.

    A duplicidade é tratada como erro fatal de montagem do registry e é
    detectada no momento do registro, antes de qualquer execução.
    """


@dataclass
class TaskRegistry:
    """
    Registro canônico de tasks por identificador estável.

    Decisões arquiteturais:
        - Registro explícito em vez de lookup reflexivo por nome
        - A ordem de inserção é preservada separadamente
        - A estrutura interna não é exposta diretamente
    """

    _tasks: Dict[str, Task] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def register(self, task_id: str, task: Task) -> None:
        if not isinstance(task_id, str) or not task_id.strip():
            raise ValueError("task id must be a non-empty string")
        if not callable(task):
            raise TypeError(f"task '{task_id}' must be callable")
        if task_id in self._tasks:
            raise DuplicateTaskIdError(f"Duplicate task id: {task_id}")

        self._tasks[task_id] = task
        self._order.append(task_id)

    def resolve(self, task_id: str) -> Task:
        try:
            return self._tasks[task_id]
        except (KeyError, TypeError):
            raise UnknownTask(
                message=f"Unknown task: {task_id!r}",
                details={"task": task_id, "available": list(self._order)},
                hint="Use `atlas-build tasks` para listar as tasks registradas",
            ) from None

    def ids(self) -> List[str]:
        return list(self._order)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks
