"""
Configuração de build materializada (BuildConfig).

Este módulo converte a configuração resolvida (dict, ver `loader.py`) em uma
estrutura imutável, construída uma única vez por invocação e passada por
referência a todas as tasks via `BuildContext`.

A BuildConfig consolida:
    - coordenada da biblioteca (`group/artifact`) e versão
    - diretórios de fontes, recursos e dependências
    - layout do diretório de saída (target, staging, artefatos)
    - informações de SCM gravadas no arquivo de metadados
    - repositório local de instalação
    - toolchain nativa (variável de ambiente, executáveis, argumentos)

Decisões arquiteturais:
    - Caminhos relativos são resolvidos contra `project_root`
    - A versão vem da config ou de `version_template` + contagem de revisões
      do git (`{revs}`); sem git a contagem é 0
    - Nenhum estado de módulo: cada invocação constrói sua própria instância

Limites explícitos:
    - Não verifica a existência de diretórios (isso é papel das tasks)
    - Não executa processos por conta própria (a contagem de revisões é injetada)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .errors import InvalidBuildConfigError


def _require_str(config: Mapping[str, Any], key: str) -> str:
    value = config.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidBuildConfigError(f"Config '{key}' deve ser string não vazia")
    return value.strip()


def _str_list(config: Mapping[str, Any], key: str, *, allow_empty: bool = True) -> Tuple[str, ...]:
    value = config.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, str) and v.strip() for v in value):
        raise InvalidBuildConfigError(f"Config '{key}' deve ser lista de strings")
    if not value and not allow_empty:
        raise InvalidBuildConfigError(f"Config '{key}' não pode ser vazia")
    return tuple(value)


def _resolve(root: Path, value: str) -> Path:
    p = Path(value).expanduser()
    return p if p.is_absolute() else root / p


@dataclass(frozen=True)
class ToolchainConfig:
    """Toolchain de compilação nativa (home via variável de ambiente)."""

    home_env: str
    compiler: str
    installer: str
    component: str
    native_args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BuildConfig:
    """
    Configuração imutável de uma invocação de build.

    Todos os caminhos já são absolutos (ou relativos a `project_root` quando
    este também é relativo). Tasks derivam deles seus marcadores de artefato.
    """

    project_root: Path
    group: str
    artifact: str
    version: str
    main_module: str
    source_dirs: Tuple[Path, ...]
    resource_dirs: Tuple[Path, ...]
    dependency_dirs: Tuple[Path, ...]
    target_dir: Path
    class_dir: Path
    archive_file: Path
    standalone_file: Path
    native_file: Path
    local_repository: Path
    toolchain: ToolchainConfig
    scm: Dict[str, str] = field(default_factory=dict)
    windows: bool = False

    @property
    def lib(self) -> str:
        return f"{self.group}/{self.artifact}"

    def cmd(self, name: str) -> str:
        """Nome de executável da toolchain específico da plataforma."""
        return f"{name}.cmd" if self.windows else name

    @classmethod
    def from_dict(
        cls,
        config: Mapping[str, Any],
        *,
        project_root: Path,
        count_revs: Optional[Callable[[], Optional[int]]] = None,
        windows: Optional[bool] = None,
    ) -> "BuildConfig":
        root = Path(project_root)

        lib = _require_str(config, "lib")
        group, sep, artifact = lib.partition("/")
        if not sep or not group or not artifact or "/" in artifact:
            raise InvalidBuildConfigError(f"Config 'lib' deve ter formato group/artifact: {lib!r}")

        version = resolve_version(config, count_revs=count_revs)

        target_dir = _resolve(root, _require_str(config, "target_dir"))
        class_dir = _resolve(root, _require_str(config, "class_dir"))

        tc = config.get("toolchain") or {}
        if not isinstance(tc, dict):
            raise InvalidBuildConfigError("Config 'toolchain' deve ser um mapa")
        toolchain = ToolchainConfig(
            home_env=_require_str(tc, "home_env"),
            compiler=_require_str(tc, "compiler"),
            installer=_require_str(tc, "installer"),
            component=_require_str(tc, "component"),
            native_args=_str_list(tc, "native_args"),
        )

        scm_raw = config.get("scm") or {}
        if not isinstance(scm_raw, dict):
            raise InvalidBuildConfigError("Config 'scm' deve ser um mapa")
        scm = {str(k): str(v) for k, v in scm_raw.items() if v is not None}
        scm.setdefault("tag", f"v{version}")

        return cls(
            project_root=root,
            group=group,
            artifact=artifact,
            version=version,
            main_module=_require_str(config, "main_module"),
            source_dirs=tuple(_resolve(root, d) for d in _str_list(config, "source_dirs", allow_empty=False)),
            resource_dirs=tuple(_resolve(root, d) for d in _str_list(config, "resource_dirs")),
            dependency_dirs=tuple(_resolve(root, d) for d in _str_list(config, "dependency_dirs")),
            target_dir=target_dir,
            class_dir=class_dir,
            archive_file=target_dir / _require_str(config, "archive_file"),
            standalone_file=target_dir / _require_str(config, "standalone_file"),
            native_file=target_dir / _require_str(config, "native_name"),
            local_repository=_resolve(root, _require_str(config, "local_repository")),
            toolchain=toolchain,
            scm=scm,
            windows=(os.name == "nt") if windows is None else windows,
        )


def resolve_version(
    config: Mapping[str, Any],
    *,
    count_revs: Optional[Callable[[], Optional[int]]] = None,
) -> str:
    """
    Resolve a versão do build.

    - `version` explícita tem precedência
    - senão `version_template` é formatado com `{revs}` (revisões do git;
      0 quando não há repositório ou `count_revs` não é fornecido)
    """
    explicit = config.get("version")
    if explicit is not None:
        if not isinstance(explicit, str) or not explicit.strip():
            raise InvalidBuildConfigError("Config 'version' deve ser string não vazia")
        return explicit.strip()

    template = _require_str(config, "version_template")
    revs = count_revs() if count_revs is not None else None
    try:
        return template.format(revs=revs if revs is not None else 0)
    except (KeyError, IndexError) as e:
        raise InvalidBuildConfigError(f"version_template inválido: {template!r}") from e
