"""Task canônica: standalone.

Gera o arquivo autocontido (`standalone_file`): bytecode compilado, recursos,
metadados e dependências, executável via `__main__.py` que inicia
`main_module`.

Composição: `[metadata.write_metadata, compile_sources, package_standalone]`.
Cada passo verifica o próprio marcador, então uma reexecução após falha
parcial refaz apenas o que falta.
"""

from __future__ import annotations

from atlas_build.core.pipeline.context import BuildContext
from atlas_build.core.pipeline.options import Options
from atlas_build.core.pipeline.task import artifact_exists, compose

from .metadata import write_metadata

TASK_ID = "standalone"


def compile_sources(ctx: BuildContext, options: Options) -> Options:
    """Compila os fontes para o staging, a menos que já haja bytecode lá."""
    cfg = ctx.config
    if ctx.toolkit.has_compiled(cfg.class_dir):
        ctx.log(task_id=TASK_ID, level="debug", message="compiled sources exist, skipping", path=str(cfg.class_dir))
        return options

    count = ctx.toolkit.compile_sources(cfg.source_dirs, cfg.class_dir)
    ctx.log(task_id=TASK_ID, level="info", message="sources compiled", modules=count)
    return options


def package_standalone(ctx: BuildContext, options: Options) -> Options:
    cfg = ctx.config
    if artifact_exists(cfg.standalone_file):
        ctx.log(task_id=TASK_ID, level="debug", message="artifact exists, skipping", path=str(cfg.standalone_file))
        return options

    ctx.toolkit.copy_dir(cfg.resource_dirs, cfg.class_dir)
    ctx.toolkit.standalone_archive(
        cfg.class_dir,
        cfg.standalone_file,
        main_module=cfg.main_module,
        dependency_dirs=cfg.dependency_dirs,
    )
    ctx.log(task_id=TASK_ID, level="info", message="standalone archive written", path=str(cfg.standalone_file))
    return options


standalone = compose(write_metadata, compile_sources, package_standalone)
