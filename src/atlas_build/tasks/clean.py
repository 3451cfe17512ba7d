"""Task canônica: clean.

Apaga o diretório de saída inteiro (`target_dir`). É a única task que não
pula por existência de artefato: remover todos os marcadores de uma vez é
justamente o seu propósito.
"""

from __future__ import annotations

from atlas_build.core.pipeline.context import BuildContext
from atlas_build.core.pipeline.options import Options

TASK_ID = "clean"


def clean(ctx: BuildContext, options: Options) -> Options:
    """Apaga `target_dir` inteiro, sem verificar marcadores."""
    target = ctx.config.target_dir
    ctx.toolkit.delete(target)
    ctx.log(task_id=TASK_ID, level="info", message="target deleted", path=str(target))
    return options
