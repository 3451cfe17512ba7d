"""
Contrato canônico de Task do Atlas Build.

Uma Task é a menor unidade de trabalho de build: recebe o contexto e as
Options correntes e devolve as Options (possivelmente atualizadas), para que
tasks possam ser encadeadas de forma uniforme.

Padrão de task idempotente:
    1. derivar o caminho do artefato esperado (config e/ou Options)
    2. se o artefato já existe, pular
    3. senão, executar a ação delegada ao toolkit
    4. devolver as Options (a presença do artefato É o registro de sucesso)

Tasks compostas são sub-cadeias explícitas e ordenadas de tasks menores
(`compose`), cada uma com sua própria verificação de existência: reexecutar
uma composta após conclusão parcial refaz apenas o sufixo ausente.

Limites explícitos:
    - Não define retry
    - Não resolve identificadores (ver `registry.py`)
    - Não usa hash nem timestamp: apenas existência
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Union, runtime_checkable

from .context import BuildContext
from .options import Options


@runtime_checkable
class Task(Protocol):
    """
    Contrato de uma Task: `(ctx, options) -> options`.

    Funções simples satisfazem o protocolo. Devem ser seguras para
    reexecução dado o mesmo estado de Options e filesystem.
    """

    def __call__(self, ctx: BuildContext, options: Options) -> Options:
        ...


def artifact_exists(path: Union[str, Path]) -> bool:
    """Marcador de artefato: a única memoização é `path` existir."""
    return Path(path).exists()


def compose(*subtasks: Task) -> Task:
    """
    Monta uma task composta como sub-cadeia ordenada.

    Cada sub-task recebe as Options retornadas pela anterior. Falhas se
    propagam imediatamente; sub-tasks já concluídas mantêm seus artefatos.
    """
    chain = tuple(subtasks)

    def composite(ctx: BuildContext, options: Options) -> Options:
        current = options
        for sub in chain:
            current = sub(ctx, current)
        return current

    composite.subtasks = chain  # type: ignore[attr-defined]
    return composite
