"""
Idempotência por inspeção: invocar a mesma task duas vezes, com o
filesystem inalterado, executa a ação delegada uma única vez.
"""

from __future__ import annotations

import pytest

from atlas_build.core.pipeline.options import make_options
from atlas_build.tasks import archive, install, metadata, native, standalone


def _graal_env(tmp_path):
    home = tmp_path / "graal"
    (home / "bin").mkdir(parents=True)
    (home / "bin" / "native-image").write_text("", encoding="utf-8")
    return {"GRAALVM_HOME": str(home)}


@pytest.mark.parametrize(
    "task, action",
    [
        (metadata, "write_metadata"),
        (archive, "archive"),
        (standalone, "standalone_archive"),
        (standalone, "compile_sources"),
        (install, "install"),
    ],
)
def test_task_twice_performs_action_once(ctx, toolkit, task, action):
    opts = make_options()
    assert task(ctx, opts) is opts
    assert task(ctx, opts) is opts
    assert toolkit.calls[action] == 1


def test_metadata_written_once_across_tasks(ctx, toolkit):
    opts = make_options()
    metadata(ctx, opts)
    archive(ctx, opts)
    standalone(ctx, opts)
    assert toolkit.calls["write_metadata"] == 1


def test_native_twice_builds_once(make_ctx, toolkit, tmp_path):
    c = make_ctx(toolkit, env=_graal_env(tmp_path))

    def on_process(args):
        c.config.native_file.write_text("bin", encoding="utf-8")

    toolkit.on_process = on_process
    native(c, make_options())
    native(c, make_options())

    assert toolkit.calls["process"] == 1
    assert toolkit.calls["standalone_archive"] == 1
    assert c.config.native_file.exists()


def test_tasks_return_options_unchanged(ctx):
    opts = make_options({"metadata.output_path": None, "tasks": ["archive"]})
    out = archive(ctx, opts)
    assert dict(out) == dict(opts)
