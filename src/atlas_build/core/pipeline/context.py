"""
Contexto de execução compartilhado do pipeline de build.

Este módulo define o `BuildContext`, passado por referência a todas as tasks
de uma invocação. Ele reúne o que as tasks precisam além das Options:

    - a configuração de build imutável (`BuildConfig`)
    - o toolkit externo que executa as ações delegadas
    - o ambiente (variáveis) usado para localizar a toolchain nativa
    - o log estruturado de eventos e os warnings por task

Princípios fundamentais:
    - Isolamento por execução (cada invocação possui seu próprio contexto)
    - Nenhum estado global: configuração e toolkit são injetados
    - Estrutura simples e testável (o toolkit pode ser um stub)

Invariantes:
    - Logs sempre incluem `run_id` e `task_id`
    - Warnings são agrupados por `task_id`
    - `config` não é alterada durante a execução

Limites explícitos:
    - Não executa tasks
    - Não decide se uma task deve pular (isso é o marcador de artefato)
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from atlas_build.core.config.build import BuildConfig


@dataclass
class BuildContext:
    """
    Contexto de uma invocação de build.

    Campos canônicos:
    - config: BuildConfig imutável
    - toolkit: colaborador externo (ver `atlas_build.toolkit`)
    - env: variáveis de ambiente consultadas (default: `os.environ`)
    - run_id / created_at: identidade da execução
    - meta: metadados livres (ex.: hash da config, origem da invocação)
    """

    config: BuildConfig
    toolkit: Any
    env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def getenv(self, name: str) -> Optional[str]:
        value = self.env.get(name)
        return value if value else None

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, task_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "task_id": task_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, task_id: str, message: str) -> None:
        if task_id not in self.warnings:
            self.warnings[task_id] = []
        self.warnings[task_id].append(message)
