"""
Runner do pipeline do Atlas Build.

Executa uma lista ordenada de identificadores de task, encadeando as Options:
cada task recebe exatamente o valor retornado pela anterior (ou as Options
iniciais, para a primeira).

Política de execução:
- Estritamente sequencial, da esquerda para a direita
- Resolução tardia: cada identificador é resolvido quando é alcançado, então
  tasks anteriores a um identificador desconhecido já terão executado
- Fail-fast: a primeira falha aborta o pipeline, sem rollback
- Lista vazia (ou ausente) é um no-op válido e devolve as Options intactas
- Lista malformada (ex.: `tasks: 5`) é `InvalidTaskList`, antes de qualquer task
- Escrita ou remoção de chave fora de `<task>.*` e de `SHARED_KEYS` vira warning
  da task (`ctx.warnings`), não erro

Erros:
- `BuildException` sobe com `details["task"]` apontando a task de origem
- Qualquer outra exceção é encapsulada em `DelegatedActionFailure`
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, List, Mapping, Optional

from atlas_build.core.exceptions import (
    BuildException,
    DelegatedActionFailure,
    InvalidTaskList,
    InvalidTaskResult,
)
from atlas_build.core.pipeline.context import BuildContext
from atlas_build.core.pipeline.options import SHARED_KEYS, Options
from atlas_build.core.pipeline.registry import TaskRegistry

PIPELINE_ID = "pipeline"


def _invalid_list(received: Any) -> InvalidTaskList:
    return InvalidTaskList(
        message="Pipeline task list must be a list of task ids",
        details={"task": PIPELINE_ID, "received": repr(received)},
        hint="Use `tasks: [clean, archive]` ou passe os ids como argumentos",
    )


def _task_list(options: Options, task_ids: Optional[Iterable[str]]) -> List[str]:
    if task_ids is None:
        task_ids = options.get("tasks")
        if task_ids is None:
            return []
    if isinstance(task_ids, str):
        task_ids = [task_ids]
    if isinstance(task_ids, Mapping) or not isinstance(task_ids, Iterable):
        raise _invalid_list(task_ids)

    ids = list(task_ids)
    for task_id in ids:
        if not isinstance(task_id, str) or not task_id.strip():
            raise _invalid_list(task_id)
    return ids


def _foreign_keys(task_id: str, before: Mapping[str, Any], after: Mapping[str, Any]) -> List[str]:
    """Chaves escritas ou removidas fora de `<task_id>.*` e de `SHARED_KEYS`."""
    touched = {k for k in after if k not in before or before[k] != after[k]}
    touched |= set(before) - set(after)
    prefix = f"{task_id}."
    return sorted(k for k in touched if k not in SHARED_KEYS and not k.startswith(prefix))


def _with_task(exc: BuildException, task_id: str) -> BuildException:
    if exc.details.get("task") == task_id:
        return exc
    return replace(exc, details={**exc.details, "task": task_id})


def run_tasks(
    ctx: BuildContext,
    options: Options,
    task_ids: Optional[Iterable[str]] = None,
    *,
    registry: TaskRegistry,
) -> Options:
    """
    Executa as tasks em ordem, encadeando as Options.

    Args:
        ctx: Contexto da invocação (config, toolkit, eventos).
        options: Options iniciais.
        task_ids: Identificadores em ordem; `None` lê `options["tasks"]`.
        registry: Registro usado para resolver cada identificador.

    Returns:
        Options retornadas pela última task (ou `options` se a lista for vazia).

    Raises:
        InvalidTaskList: `task_ids` ou `options["tasks"]` não é lista de ids.
        UnknownTask: Identificador sem task registrada.
        InvalidTaskResult: Task retornou algo que não é mapeamento.
        DelegatedActionFailure / ToolchainUnavailable: falha na task.
    """
    try:
        ids = _task_list(options, task_ids)
    except InvalidTaskList as e:
        ctx.log(task_id=PIPELINE_ID, level="error", message="invalid task list", error_message=str(e))
        raise

    if not ids:
        ctx.log(task_id=PIPELINE_ID, level="info", message="empty pipeline")
        return options

    ctx.log(task_id=PIPELINE_ID, level="info", message="pipeline started", tasks=ids, config_hash=ctx.meta.get("config_hash"))

    current: Any = options
    for task_id in ids:
        try:
            task = registry.resolve(task_id)
            ctx.log(task_id=task_id, level="info", message="task started")
            result = task(ctx, current)
            if not isinstance(result, Mapping):
                raise InvalidTaskResult(
                    message=f"Task {task_id!r} must return options",
                    details={"task": task_id, "received": type(result).__name__},
                    hint="Ajuste a task para devolver as Options recebidas",
                )
        except BuildException as e:
            err = _with_task(e, task_id)
            ctx.log(
                task_id=task_id,
                level="error",
                message="task failed",
                error_type=err.__class__.__name__,
                error_message=str(err),
            )
            if err is e:
                raise
            raise err from e
        except Exception as e:
            ctx.log(
                task_id=task_id,
                level="error",
                message="task failed",
                error_type=e.__class__.__name__,
                error_message=str(e) or "error",
            )
            raise DelegatedActionFailure(
                message=str(e) or f"Task {task_id!r} failed",
                details={"task": task_id, "exception_class": e.__class__.__name__},
            ) from e

        foreign = _foreign_keys(task_id, current, result)
        if foreign:
            ctx.add_warning(task_id=task_id, message=f"options changed outside task namespace: {foreign}")
        ctx.log(task_id=task_id, level="info", message="task finished")
        current = result

    ctx.log(task_id=PIPELINE_ID, level="info", message="pipeline finished")
    return current
