"""Task canônica: archive.

Gera o arquivo leve (`archive_file`, ZIP) com fontes, recursos e metadados,
sem bytecode compilado nem dependências.

Composição: `[metadata.write_metadata, package_archive]`.
"""

from __future__ import annotations

from atlas_build.core.pipeline.context import BuildContext
from atlas_build.core.pipeline.options import Options
from atlas_build.core.pipeline.task import artifact_exists, compose

from .metadata import write_metadata

TASK_ID = "archive"


def package_archive(ctx: BuildContext, options: Options) -> Options:
    cfg = ctx.config
    if artifact_exists(cfg.archive_file):
        ctx.log(task_id=TASK_ID, level="debug", message="artifact exists, skipping", path=str(cfg.archive_file))
        return options

    ctx.toolkit.copy_dir([*cfg.source_dirs, *cfg.resource_dirs], cfg.class_dir)
    ctx.toolkit.archive(cfg.class_dir, cfg.archive_file)
    ctx.log(task_id=TASK_ID, level="info", message="archive written", path=str(cfg.archive_file))
    return options


archive = compose(write_metadata, package_archive)
