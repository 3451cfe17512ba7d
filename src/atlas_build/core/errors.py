"""
Atlas Build: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros reportados pelo Atlas Build
ao operador (CLI) e a quem mais consumir o resultado de um pipeline.

Erros devem ser:

- explícitos
- serializáveis
- acionáveis

Nenhuma decisão implícita é permitida: o payload apenas descreve a falha,
não tenta corrigi-la.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from atlas_build.core.config.errors import ConfigError
from atlas_build.core.exceptions import (
    BuildException,
    DelegatedActionFailure,
    InvalidTaskList,
    InvalidTaskResult,
    ToolchainUnavailable,
    UnknownTask,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BuildErrorPayload:
    """
    Payload canônico de erro do Atlas Build.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico (inclui `task`)
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

UNKNOWN_TASK = "UNKNOWN_TASK"
INVALID_TASK_RESULT = "INVALID_TASK_RESULT"
INVALID_TASK_LIST = "INVALID_TASK_LIST"
DELEGATED_ACTION_FAILURE = "DELEGATED_ACTION_FAILURE"
TOOLCHAIN_UNAVAILABLE = "TOOLCHAIN_UNAVAILABLE"
CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
BUILD_ERROR = "BUILD_ERROR"

_CODES = {
    UnknownTask: UNKNOWN_TASK,
    InvalidTaskResult: INVALID_TASK_RESULT,
    InvalidTaskList: INVALID_TASK_LIST,
    DelegatedActionFailure: DELEGATED_ACTION_FAILURE,
    ToolchainUnavailable: TOOLCHAIN_UNAVAILABLE,
}


def exception_to_payload(exc: Exception) -> BuildErrorPayload:
    """Converte exceções em BuildErrorPayload (serializável, acionável).

    Regras:
    - BuildException: código estável por classe, details/hint preservados.
    - ConfigError: CONFIGURATION_ERROR com a classe concreta em details.
    - Outras exceções: BUILD_ERROR sem expor stack trace.
    """
    if isinstance(exc, BuildException):
        code = BUILD_ERROR
        for cls, candidate in _CODES.items():
            if isinstance(exc, cls):
                code = candidate
                break
        return BuildErrorPayload(
            type=code,
            message=str(exc) or "Erro de build",
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    if isinstance(exc, ConfigError):
        return BuildErrorPayload(
            type=CONFIGURATION_ERROR,
            message=str(exc) or "Configuração inválida",
            details={"exception_class": exc.__class__.__name__},
            hint="Revise build.defaults.yaml / build.local.yaml",
        )

    return BuildErrorPayload(
        type=BUILD_ERROR,
        message=str(exc) or "Erro inesperado durante o build",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o log de eventos da execução",
    )
