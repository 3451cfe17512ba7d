"""Task canônica: metadata.

Gera o arquivo de metadados do pacote (`PKG-INFO`) dentro do diretório de
staging, em `META-INF/<group>/<artifact>/`. A presença desse arquivo é o
marcador da task.

Opções:
- `metadata.output_path`: se definida, copia o arquivo gerado para esse
  caminho (também apenas quando o destino ainda não existe).
"""

from __future__ import annotations

from pathlib import Path

from atlas_build.core.pipeline.context import BuildContext
from atlas_build.core.pipeline.options import Options, get_option
from atlas_build.core.pipeline.task import artifact_exists, compose

TASK_ID = "metadata"


def metadata_path(ctx: BuildContext) -> Path:
    cfg = ctx.config
    return Path(ctx.toolkit.metadata_path(cfg.class_dir, cfg.group, cfg.artifact))


def write_metadata(ctx: BuildContext, options: Options) -> Options:
    """Gera o `PKG-INFO` no staging, a menos que ele já exista."""
    path = metadata_path(ctx)
    if artifact_exists(path):
        ctx.log(task_id=TASK_ID, level="debug", message="artifact exists, skipping", path=str(path))
        return options

    cfg = ctx.config
    ctx.toolkit.write_metadata(
        path,
        group=cfg.group,
        artifact=cfg.artifact,
        version=cfg.version,
        main_module=cfg.main_module,
        scm=dict(cfg.scm),
        source_dirs=cfg.source_dirs,
        resource_dirs=cfg.resource_dirs,
    )
    ctx.log(task_id=TASK_ID, level="info", message="metadata written", path=str(path))
    return options


def copy_to_output_path(ctx: BuildContext, options: Options) -> Options:
    output_path = get_option(options, TASK_ID, "output_path")
    if not output_path:
        return options

    target = Path(str(output_path)).expanduser()
    if not target.is_absolute():
        target = ctx.config.project_root / target
    if artifact_exists(target):
        ctx.log(task_id=TASK_ID, level="debug", message="artifact exists, skipping", path=str(target))
        return options

    ctx.toolkit.copy_file(metadata_path(ctx), target)
    ctx.log(task_id=TASK_ID, level="info", message="metadata copied", path=str(target))
    return options


metadata = compose(write_metadata, copy_to_output_path)
