"""Task canônica: native.

Gera o binário nativo (`native_file`) a partir do arquivo autocontido,
usando a toolchain externa localizada pela variável de ambiente configurada
(`toolchain.home_env`, padrão `GRAALVM_HOME`).

Composição: `[standalone, ensure_toolchain, build_native]`.

Pré-condição de toolchain (verificada antes de qualquer compilação nativa):
- home ausente ou inexistente → `ToolchainUnavailable`
- compilador ausente em `<home>/bin` → instala o componente via instalador
  (também por verificação de existência)
- compilador ainda ausente após a instalação → `ToolchainUnavailable`
"""

from __future__ import annotations

from pathlib import Path

from atlas_build.core.exceptions import ToolchainUnavailable
from atlas_build.core.pipeline.context import BuildContext
from atlas_build.core.pipeline.options import Options
from atlas_build.core.pipeline.task import artifact_exists, compose

from .standalone import standalone

TASK_ID = "native"


def toolchain_home(ctx: BuildContext) -> Path:
    env_var = ctx.config.toolchain.home_env
    home = ctx.getenv(env_var)
    if home is None:
        raise ToolchainUnavailable(
            message=f"Environment variable {env_var} is not set",
            details={"task": TASK_ID, "env": env_var},
            hint=f"Exporte {env_var} apontando para a instalação da toolchain",
        )
    path = Path(home)
    if not path.is_dir():
        raise ToolchainUnavailable(
            message=f"Toolchain home does not exist: {path}",
            details={"task": TASK_ID, "env": env_var, "home": str(path)},
            hint=f"Corrija {env_var}",
        )
    return path


def toolchain_bin(ctx: BuildContext, name: str) -> Path:
    return toolchain_home(ctx) / "bin" / ctx.config.cmd(name)


def ensure_toolchain(ctx: BuildContext, options: Options) -> Options:
    tc = ctx.config.toolchain
    compiler = toolchain_bin(ctx, tc.compiler)
    if artifact_exists(compiler):
        ctx.log(task_id=TASK_ID, level="debug", message="toolchain present", path=str(compiler))
        return options

    installer = toolchain_bin(ctx, tc.installer)
    if not artifact_exists(installer):
        raise ToolchainUnavailable(
            message=f"Toolchain installer not found: {installer}",
            details={"task": TASK_ID, "installer": str(installer)},
            hint="Instale a toolchain completa ou ajuste toolchain.installer",
        )

    ctx.log(task_id=TASK_ID, level="info", message="installing toolchain component", component=tc.component)
    ctx.toolkit.process([str(installer), "install", tc.component])

    if not artifact_exists(compiler):
        raise ToolchainUnavailable(
            message=f"Toolchain compiler still missing after install: {compiler}",
            details={"task": TASK_ID, "compiler": str(compiler), "component": tc.component},
        )
    return options


def build_native(ctx: BuildContext, options: Options) -> Options:
    cfg = ctx.config
    if artifact_exists(cfg.native_file):
        ctx.log(task_id=TASK_ID, level="debug", message="artifact exists, skipping", path=str(cfg.native_file))
        return options

    compiler = toolchain_bin(ctx, cfg.toolchain.compiler)
    ctx.toolkit.process(
        [
            str(compiler),
            "-jar",
            str(cfg.standalone_file),
            f"-H:Name={cfg.native_file}",
            *cfg.toolchain.native_args,
        ]
    )
    ctx.log(task_id=TASK_ID, level="info", message="native binary written", path=str(cfg.native_file))
    return options


native = compose(standalone, ensure_toolchain, build_native)
