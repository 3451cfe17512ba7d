# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Build.

Este módulo define fixtures reutilizáveis que fornecem:
- um projeto mínimo em disco (fontes + recursos) sob `tmp_path`
- configuração resolvida e `BuildConfig` determinísticas
- um toolkit stub com contadores de chamada (`RecordingToolkit`)
- um `BuildContext` controlado

O toolkit stub reproduz apenas as pós-condições observáveis do toolkit
real: cada ação cria o arquivo que seria o marcador do artefato. Assim os
testes de tasks verificam a idempotência pela contagem de chamadas, sem
compilar nem empacotar nada.

Invariantes:
    - Nenhuma fixture executa processos externos
    - Todo I/O acontece sob `tmp_path`
    - `run_id` e `created_at` são fixos
"""

from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

import pytest


# =====================================================
# Config loader fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de defaults semelhante ao `build.defaults.yaml` empacotado.

    Usado por:
        - Testes do loader de config
        - Testes de deep-merge (defaults + local)
    """
    return """\
lib: org.example/demo
version: null
version_template: "0.1.{revs}-SNAPSHOT"
source_dirs:
  - src/
toolchain:
  home_env: GRAALVM_HOME
  native_args:
    - "--no-fallback"
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """
    YAML de override local semelhante a um `build.local.yaml` de projeto.

    Sobrescreve apenas a versão e a variável de ambiente da toolchain.
    """
    return """\
version: "2.0.0"
toolchain:
  home_env: NATIVE_HOME
"""


# =====================================================
# Projeto + BuildConfig
# =====================================================

@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    Projeto mínimo em disco.

    Layout:
        src/demo/__init__.py
        src/demo/main.py
        resources/demo/config.yaml
    """
    root = tmp_path / "project"
    pkg = root / "src" / "demo"
    pkg.mkdir(parents=True)
    (pkg / "__init__.py").write_text("", encoding="utf-8")
    (pkg / "main.py").write_text("print('demo')\n", encoding="utf-8")
    res = root / "resources" / "demo"
    res.mkdir(parents=True)
    (res / "config.yaml").write_text("greeting: hello\n", encoding="utf-8")
    return root


@pytest.fixture
def raw_config(tmp_path: Path) -> dict:
    """Configuração resolvida (dict) completa e determinística."""
    from atlas_build.core.config.loader import load_config

    cfg = load_config()
    cfg.update(
        {
            "lib": "org.example/demo",
            "version": "1.2.3",
            "main_module": "demo.main",
            "archive_file": "demo.zip",
            "standalone_file": "demo-standalone.pyz",
            "native_name": "demo",
            "local_repository": str(tmp_path / "repo"),
        }
    )
    return cfg


@pytest.fixture
def build_config(raw_config, project_root):
    from atlas_build.core.config.build import BuildConfig

    return BuildConfig.from_dict(raw_config, project_root=project_root, windows=False)


@pytest.fixture
def RecordingToolkit():
    """
    Fixture factory que fornece a *classe* de um toolkit stub.

    Cada ação incrementa `calls[<ação>]` e produz o arquivo marcador
    correspondente. `fail_on` recebe nomes de ações que devem levantar
    `DelegatedActionFailure`; `on_process` permite simular efeitos de
    processos externos (ex.: instalar o compilador nativo).
    """
    from atlas_build.core.exceptions import DelegatedActionFailure
    import shutil

    class _RecordingToolkit:
        def __init__(self, fail_on=(), on_process=None):
            self.calls = Counter()
            self.commands = []
            self.fail_on = set(fail_on)
            self.on_process = on_process

        def _record(self, action):
            self.calls[action] += 1
            if action in self.fail_on:
                raise DelegatedActionFailure(
                    message=f"{action} failed",
                    details={"action": action},
                )

        @staticmethod
        def _touch(path):
            path = Path(path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("x", encoding="utf-8")

        def delete(self, path):
            self._record("delete")
            if Path(path).exists():
                shutil.rmtree(path)

        def copy_dir(self, src_dirs, target_dir):
            self._record("copy_dir")
            Path(target_dir).mkdir(parents=True, exist_ok=True)

        def copy_file(self, src, target):
            self._record("copy_file")
            self._touch(target)

        def compile_sources(self, src_dirs, class_dir):
            self._record("compile_sources")
            self._touch(Path(class_dir) / "demo" / "main.pyc")
            return 1

        def has_compiled(self, class_dir):
            return Path(class_dir).is_dir() and any(Path(class_dir).rglob("*.pyc"))

        def metadata_path(self, class_dir, group, artifact):
            return Path(class_dir) / "META-INF" / group / artifact / "PKG-INFO"

        def write_metadata(self, path, **kwargs):
            self._record("write_metadata")
            self._touch(path)

        def archive(self, class_dir, archive_file):
            self._record("archive")
            self._touch(archive_file)

        def standalone_archive(self, class_dir, standalone_file, **kwargs):
            self._record("standalone_archive")
            self._touch(standalone_file)

        def installed_path(self, repository, group, artifact, version):
            return Path(repository).joinpath(*group.split("."), artifact, version) / f"{artifact}-{version}.zip"

        def install(self, archive_file, metadata_file, *, repository, group, artifact, version):
            self._record("install")
            target = self.installed_path(repository, group, artifact, version)
            self._touch(target)
            return target

        def process(self, command_args, *, cwd=None):
            self._record("process")
            self.commands.append([str(a) for a in command_args])
            if self.on_process is not None:
                self.on_process(list(command_args))
            return 0

        def git_count_revs(self):
            return 7

    return _RecordingToolkit


@pytest.fixture
def toolkit(RecordingToolkit):
    return RecordingToolkit()


@pytest.fixture
def make_ctx(build_config):
    """Factory de BuildContext com toolkit e ambiente injetáveis."""
    from atlas_build.core.pipeline.context import BuildContext

    def _make(toolkit, env=None, config=None):
        return BuildContext(
            config=config or build_config,
            toolkit=toolkit,
            env=dict(env or {}),
            run_id="run-test-001",
            created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
            meta={"source": "pytest"},
        )

    return _make


@pytest.fixture
def ctx(make_ctx, toolkit):
    return make_ctx(toolkit)
