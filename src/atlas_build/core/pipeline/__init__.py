"""
# Pipeline Core: Atlas Build

Este pacote define os contratos que compõem um pipeline de build.

Um pipeline é uma **lista ordenada de identificadores de task**, executada
sequencialmente com um mapeamento de Options encadeado entre as tasks.

## Componentes

- **options**: `Options` e utilitários de chave namespaced
- **context**: `BuildContext` (config, toolkit, ambiente, eventos)
- **task**: `Task` (Protocol), `compose`, `artifact_exists`
- **registry**: `TaskRegistry`, resolução dinâmica por identificador

## Invariantes

- Cada task possui um identificador único
- Tasks se comunicam apenas via Options (e efeitos no filesystem)
- A existência do artefato é o único sinal de memoização
"""

from .context import BuildContext
from .options import (
    Options,
    SHARED_KEYS,
    get_option,
    make_options,
    option_key,
    parse_option_pairs,
    set_option,
)
from .registry import DuplicateTaskIdError, TaskRegistry
from .task import Task, artifact_exists, compose

__all__ = [
    "BuildContext",
    "Options",
    "SHARED_KEYS",
    "get_option",
    "make_options",
    "option_key",
    "parse_option_pairs",
    "set_option",
    "DuplicateTaskIdError",
    "TaskRegistry",
    "Task",
    "artifact_exists",
    "compose",
]
