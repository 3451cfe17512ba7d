"""
Atlas Build: Canonical Exceptions (v1)

Este módulo define as exceções tipadas internas do Atlas Build.

Objetivo:
- Permitir que tasks, toolkit e runner levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para BuildErrorPayload
- Evitar ValueError/RuntimeError genéricos em falhas de build

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Nenhuma exceção é recuperada automaticamente: todas sobem até o chamador.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, eq=False)
class BuildException(Exception):
    """Base class para exceções internas do Atlas Build.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - `details["task"]` identifica a task de origem quando conhecida
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    @property
    def task_id(self) -> Optional[str]:
        return self.details.get("task")


# ---------------------------------------------------------------------------
# Resolução de tasks
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class UnknownTask(BuildException):
    """Identificador de task sem função registrada."""


@dataclass(frozen=True, eq=False)
class InvalidTaskResult(BuildException):
    """Task retornou algo que não é um mapeamento de opções."""


@dataclass(frozen=True, eq=False)
class InvalidTaskList(BuildException):
    """Lista de tasks do pipeline que não é lista de identificadores."""


# ---------------------------------------------------------------------------
# Ações delegadas / toolchain
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class DelegatedActionFailure(BuildException):
    """Chamada ao toolkit falhou (compilação, I/O, processo com exit != 0)."""


@dataclass(frozen=True, eq=False)
class ToolchainUnavailable(BuildException):
    """Toolchain nativa ausente, incompleta ou sem home configurado."""
