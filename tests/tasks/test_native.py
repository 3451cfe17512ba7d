"""
native: pré-condição de toolchain (home via variável de ambiente, instalação
idempotente do compilador) e linha de comando fixa da compilação nativa.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from atlas_build.core.engine.runner import run_tasks
from atlas_build.core.exceptions import ToolchainUnavailable
from atlas_build.core.pipeline.options import make_options
from atlas_build.tasks import default_registry, native
from atlas_build.tasks.native import ensure_toolchain


def _home(tmp_path: Path, *, compiler=True, installer=True) -> Path:
    home = tmp_path / "graal"
    (home / "bin").mkdir(parents=True)
    if compiler:
        (home / "bin" / "native-image").write_text("", encoding="utf-8")
    if installer:
        (home / "bin" / "gu").write_text("", encoding="utf-8")
    return home


def test_missing_env_raises_toolchain_unavailable(ctx, toolkit):
    with pytest.raises(ToolchainUnavailable) as exc_info:
        native(ctx, make_options())
    assert exc_info.value.details["env"] == "GRAALVM_HOME"
    assert toolkit.calls["process"] == 0


def test_missing_home_dir_raises(make_ctx, toolkit, tmp_path):
    c = make_ctx(toolkit, env={"GRAALVM_HOME": str(tmp_path / "nope")})
    with pytest.raises(ToolchainUnavailable):
        ensure_toolchain(c, make_options())


def test_installs_compiler_when_absent(make_ctx, toolkit, tmp_path):
    home = _home(tmp_path, compiler=False)
    c = make_ctx(toolkit, env={"GRAALVM_HOME": str(home)})

    def on_process(args):
        if args[1:] == ["install", "native-image"]:
            (home / "bin" / "native-image").write_text("", encoding="utf-8")

    toolkit.on_process = on_process
    ensure_toolchain(c, make_options())
    ensure_toolchain(c, make_options())

    assert toolkit.commands == [[str(home / "bin" / "gu"), "install", "native-image"]]


def test_compiler_still_missing_after_install(make_ctx, toolkit, tmp_path):
    home = _home(tmp_path, compiler=False)
    c = make_ctx(toolkit, env={"GRAALVM_HOME": str(home)})

    with pytest.raises(ToolchainUnavailable) as exc_info:
        ensure_toolchain(c, make_options())
    assert toolkit.calls["process"] == 1
    assert "compiler" in exc_info.value.details


def test_missing_installer_raises(make_ctx, toolkit, tmp_path):
    home = _home(tmp_path, compiler=False, installer=False)
    c = make_ctx(toolkit, env={"GRAALVM_HOME": str(home)})
    with pytest.raises(ToolchainUnavailable):
        ensure_toolchain(c, make_options())
    assert toolkit.calls["process"] == 0


def test_native_command_line(make_ctx, toolkit, tmp_path):
    home = _home(tmp_path)
    c = make_ctx(toolkit, env={"GRAALVM_HOME": str(home)})
    cfg = c.config

    native(c, make_options())

    assert toolkit.commands[-1][:4] == [
        str(home / "bin" / "native-image"),
        "-jar",
        str(cfg.standalone_file),
        f"-H:Name={cfg.native_file}",
    ]
    assert toolkit.commands[-1][4:] == list(cfg.toolchain.native_args)


def test_toolchain_error_surfaces_through_runner(ctx):
    with pytest.raises(ToolchainUnavailable) as exc_info:
        run_tasks(ctx, make_options(), ["native"], registry=default_registry())
    assert exc_info.value.task_id == "native"
