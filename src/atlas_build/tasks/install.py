"""Task canônica: install.

Instala o arquivo leve (ver `archive`) no repositório local, em
`<repo>/<group como diretórios>/<artifact>/<version>/`. O arquivo instalado
é o marcador.

Composição: `[archive, install_archive]`.
"""

from __future__ import annotations

from pathlib import Path

from atlas_build.core.pipeline.context import BuildContext
from atlas_build.core.pipeline.options import Options
from atlas_build.core.pipeline.task import artifact_exists, compose

from .archive import archive
from .metadata import metadata_path

TASK_ID = "install"


def installed_path(ctx: BuildContext) -> Path:
    cfg = ctx.config
    return Path(ctx.toolkit.installed_path(cfg.local_repository, cfg.group, cfg.artifact, cfg.version))


def install_archive(ctx: BuildContext, options: Options) -> Options:
    target = installed_path(ctx)
    if artifact_exists(target):
        ctx.log(task_id=TASK_ID, level="debug", message="artifact exists, skipping", path=str(target))
        return options

    cfg = ctx.config
    ctx.toolkit.install(
        cfg.archive_file,
        metadata_path(ctx),
        repository=cfg.local_repository,
        group=cfg.group,
        artifact=cfg.artifact,
        version=cfg.version,
    )
    ctx.log(task_id=TASK_ID, level="info", message="archive installed", path=str(target))
    return options


install = compose(archive, install_archive)
