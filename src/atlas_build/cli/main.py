"""
Entrypoint de linha de comando do Atlas Build (`atlas-build`).

Falhas de build e de configuração saem como payload JSON em stderr (exit 1);
argumentos inválidos saem como erro de uso do click (exit 2).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import rich_click as click
import yaml

from atlas_build import __version__
from atlas_build.core.config import BuildConfig, ConfigError, compute_config_hash, load_project_config
from atlas_build.core.engine import run_tasks
from atlas_build.core.errors import exception_to_payload
from atlas_build.core.exceptions import BuildException
from atlas_build.core.pipeline import BuildContext, make_options, parse_option_pairs
from atlas_build.tasks import default_registry
from atlas_build.toolkit import LocalToolkit

click.rich_click.USE_MARKDOWN = True


def create_context(
    project_root: Path,
    *,
    config_path: Optional[Path] = None,
    local_config_path: Optional[Path] = None,
    toolkit: Any = None,
) -> BuildContext:
    """Resolve a config, monta o BuildConfig uma única vez e cria o contexto."""
    toolkit = toolkit if toolkit is not None else LocalToolkit(project_root)
    raw = load_project_config(
        project_root,
        defaults_path=config_path,
        local_path=local_config_path,
    )
    config = BuildConfig.from_dict(raw, project_root=project_root, count_revs=toolkit.git_count_revs)
    return BuildContext(config=config, toolkit=toolkit, meta={"config_hash": compute_config_hash(raw)})


def _load_options_file(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise click.BadParameter(f"invalid YAML: {e}", param_hint="--options-file") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise click.BadParameter("options file root must be a mapping", param_hint="--options-file")
    return data


def _emit_events(ctx: BuildContext) -> None:
    for event in ctx.events:
        extra = {
            k: v
            for k, v in event.items()
            if k not in {"run_id", "task_id", "level", "message", "timestamp"}
        }
        suffix = f" {json.dumps(extra, default=str)}" if extra else ""
        click.echo(f"[{event['level']}] {event['task_id']}: {event['message']}{suffix}", err=True)
    for task_id, messages in ctx.warnings.items():
        for message in messages:
            click.echo(f"[warning] {task_id}: {message}", err=True)


def _fail(exc: Exception) -> None:
    payload = exception_to_payload(exc)
    click.echo(json.dumps({"error": payload.to_dict()}, ensure_ascii=False, default=str), err=True)
    raise SystemExit(1)


@click.group()
@click.version_option(version=__version__, prog_name="atlas-build")
def atlas_build() -> None:
    """Idempotent build tasks, chained into a pipeline at invocation time."""


@atlas_build.command("run")
@click.argument("task_ids", nargs=-1)
@click.option(
    "-o",
    "--option",
    "option_pairs",
    multiple=True,
    help="Task option as key=value (e.g. metadata.output_path=pkg-info). Can be repeated.",
)
@click.option(
    "--options-file",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    default=None,
    help="YAML/JSON file with initial options (may contain `tasks`).",
)
@click.option(
    "--project-root",
    type=click.Path(path_type=Path, file_okay=False),
    default=Path("."),
    show_default=True,
    help="Project root; relative config paths resolve against it.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Defaults file (default: packaged build.defaults.yaml).",
)
@click.option(
    "--local-config",
    "local_config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Override file (default: <project-root>/build.local.yaml).",
)
@click.option("-v", "--verbose", is_flag=True, help="Print the run event log to stderr.")
def run_command(
    task_ids: tuple[str, ...],
    option_pairs: tuple[str, ...],
    options_file: Optional[Path],
    project_root: Path,
    config_path: Optional[Path],
    local_config_path: Optional[Path],
    verbose: bool,
) -> None:
    """Run TASK_IDS in order; without arguments the `tasks` option is used."""
    try:
        values = _load_options_file(options_file)
        values.update(parse_option_pairs(option_pairs))
        options = make_options(values)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--option") from e

    try:
        ctx = create_context(
            project_root,
            config_path=config_path,
            local_config_path=local_config_path,
        )
    except ConfigError as e:
        _fail(e)
        return

    try:
        run_tasks(ctx, options, list(task_ids) or None, registry=default_registry())
    except BuildException as e:
        if verbose:
            _emit_events(ctx)
        _fail(e)
        return

    if verbose:
        _emit_events(ctx)
    click.echo(f"{ctx.config.lib} {ctx.config.version}: ok")


@atlas_build.command("tasks")
def tasks_command() -> None:
    """List registered task ids."""
    for task_id in default_registry().ids():
        click.echo(task_id)


def main() -> None:
    atlas_build()


if __name__ == "__main__":
    main()
