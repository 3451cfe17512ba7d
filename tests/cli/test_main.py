"""
Testes da CLI `atlas-build` via `click.testing.CliRunner`.

Executam pipelines reais (LocalToolkit) sobre o projeto mínimo do conftest.
"""

from __future__ import annotations

import json

from click.testing import CliRunner

from atlas_build.cli.main import atlas_build


def _write_local_config(project_root, tmp_path):
    path = project_root / "build.local.yaml"
    path.write_text(
        "lib: org.example/demo\n"
        "version: 1.2.3\n"
        "main_module: demo.main\n"
        f"local_repository: {tmp_path / 'repo'}\n",
        encoding="utf-8",
    )
    return path


def test_tasks_lists_builtin_ids():
    result = CliRunner().invoke(atlas_build, ["tasks"])
    assert result.exit_code == 0
    assert result.output.split() == ["clean", "metadata", "archive", "standalone", "install", "native"]


def test_version_option():
    result = CliRunner().invoke(atlas_build, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_run_archive_and_install(project_root, tmp_path):
    _write_local_config(project_root, tmp_path)

    result = CliRunner().invoke(
        atlas_build,
        ["run", "clean", "install", "--project-root", str(project_root)],
    )

    assert result.exit_code == 0, result.output
    assert "org.example/demo 1.2.3: ok" in result.output
    assert (project_root / "target" / "atlas-app.zip").exists()
    assert (tmp_path / "repo" / "org" / "example" / "demo" / "1.2.3" / "demo-1.2.3.zip").exists()


def test_run_uses_tasks_option_and_output_path(project_root, tmp_path):
    _write_local_config(project_root, tmp_path)
    opts = tmp_path / "opts.yaml"
    opts.write_text("tasks: [metadata]\n", encoding="utf-8")

    result = CliRunner().invoke(
        atlas_build,
        [
            "run",
            "--options-file", str(opts),
            "-o", "metadata.output_path=out/PKG-INFO",
            "--project-root", str(project_root),
        ],
    )

    assert result.exit_code == 0, result.output
    assert (project_root / "out" / "PKG-INFO").exists()


def test_run_unknown_task_exits_with_payload(project_root, tmp_path):
    _write_local_config(project_root, tmp_path)

    result = CliRunner().invoke(
        atlas_build,
        ["run", "metadata", "deploy", "archive", "--project-root", str(project_root)],
    )

    assert result.exit_code == 1
    assert "UNKNOWN_TASK" in result.output
    assert (project_root / "target" / "classes" / "META-INF" / "org.example" / "demo" / "PKG-INFO").exists()
    assert not (project_root / "target" / "atlas-app.zip").exists()


def test_run_native_without_toolchain(project_root, tmp_path, monkeypatch):
    _write_local_config(project_root, tmp_path)
    monkeypatch.delenv("GRAALVM_HOME", raising=False)

    result = CliRunner().invoke(
        atlas_build,
        ["run", "native", "--project-root", str(project_root), "-v"],
    )

    assert result.exit_code == 1
    assert "TOOLCHAIN_UNAVAILABLE" in result.output
    assert "[info] pipeline: pipeline started" in result.output


def test_invalid_option_pair_is_usage_error(project_root):
    result = CliRunner().invoke(
        atlas_build,
        ["run", "clean", "-o", "no-equals-sign", "--project-root", str(project_root)],
    )
    assert result.exit_code == 2


def test_error_payload_is_json(project_root, tmp_path):
    _write_local_config(project_root, tmp_path)
    result = CliRunner().invoke(atlas_build, ["run", "deploy", "--project-root", str(project_root)])
    line = [l for l in result.output.splitlines() if l.startswith("{")][-1]
    payload = json.loads(line)["error"]
    assert payload["details"]["task"] == "deploy"


def test_run_malformed_tasks_option_exits_with_payload(project_root, tmp_path):
    _write_local_config(project_root, tmp_path)

    result = CliRunner().invoke(
        atlas_build,
        ["run", "-o", "tasks=5", "--project-root", str(project_root)],
    )

    assert result.exit_code == 1
    assert "INVALID_TASK_LIST" in result.output


def test_options_file_with_invalid_yaml_is_usage_error(project_root, tmp_path):
    opts = tmp_path / "opts.yaml"
    opts.write_text("tasks: [metadata\n", encoding="utf-8")

    result = CliRunner().invoke(
        atlas_build,
        ["run", "--options-file", str(opts), "--project-root", str(project_root)],
    )

    assert result.exit_code == 2
    assert "--options-file" in result.output


def test_option_value_with_invalid_yaml_is_usage_error(project_root):
    result = CliRunner().invoke(
        atlas_build,
        ["run", "clean", "-o", "metadata.output_path=[oops", "--project-root", str(project_root)],
    )
    assert result.exit_code == 2
