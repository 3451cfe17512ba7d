"""
Toolkit de build local (colaborador externo das tasks).

Este módulo implementa as ações delegadas que as tasks invocam como chamadas
opacas: apagar e copiar diretórios, compilar fontes, escrever o arquivo de
metadados, empacotar arquivos ZIP, instalar no repositório local e executar
processos externos.

Formatos usados (nenhum formato próprio):
- metadados: cabeçalhos Core Metadata (`PKG-INFO`)
- arquivo leve: ZIP do diretório de staging
- arquivo autocontido: aplicação ZIP (shebang + `__main__.py`), como `zipapp`

Invariantes:
- Toda falha de I/O, compilação ou processo sobe como `DelegatedActionFailure`
  com `details["action"]`
- Processos são aguardados de forma síncrona; exit != 0 é falha
- O toolkit não decide se uma ação deve rodar (isso é papel das tasks)
"""

from __future__ import annotations

import os
import py_compile
import shutil
import stat
import subprocess
import zipfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from atlas_build.core.exceptions import DelegatedActionFailure

COMPILED_SUFFIX = ".pyc"
METADATA_FILE = "PKG-INFO"
SHEBANG = b"#!/usr/bin/env python3\n"
# bytecode só entra no staging via `compile_sources`
BYTECODE_IGNORE = shutil.ignore_patterns("__pycache__", "*.pyc")


def _failure(action: str, exc: BaseException, **details: Any) -> DelegatedActionFailure:
    return DelegatedActionFailure(
        message=f"{action} failed: {exc}",
        details={"action": action, "exception_class": exc.__class__.__name__, **details},
    )


def _iter_files(root: Path) -> List[Path]:
    return sorted(p for p in root.rglob("*") if p.is_file())


class LocalToolkit:
    """Implementação stdlib das ações delegadas, relativa a `project_root`."""

    def __init__(self, project_root: Path | str = ".") -> None:
        self.project_root = Path(project_root)

    # ------------------------------------------------------------------
    # Filesystem
    # ------------------------------------------------------------------
    def delete(self, path: Path) -> None:
        path = Path(path)
        try:
            if path.is_dir():
                shutil.rmtree(path)
            elif path.exists():
                path.unlink()
        except OSError as e:
            raise _failure("delete", e, path=str(path)) from e

    def copy_dir(self, src_dirs: Iterable[Path], target_dir: Path) -> None:
        """Copia o conteúdo de cada diretório existente para `target_dir`, sem bytecode."""
        target_dir = Path(target_dir)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            for src in src_dirs:
                src = Path(src)
                if src.is_dir():
                    shutil.copytree(src, target_dir, dirs_exist_ok=True, ignore=BYTECODE_IGNORE)
        except OSError as e:
            raise _failure("copy_dir", e, target=str(target_dir)) from e

    def copy_file(self, src: Path, target: Path) -> None:
        target = Path(target)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, target)
        except OSError as e:
            raise _failure("copy_file", e, src=str(src), target=str(target)) from e

    # ------------------------------------------------------------------
    # Compilação
    # ------------------------------------------------------------------
    def compile_sources(self, src_dirs: Iterable[Path], class_dir: Path) -> int:
        """
        Copia os fontes `.py` para `class_dir` e grava o bytecode ao lado.

        O `.pyc` fica no layout legado (mesmo diretório do fonte), que é o
        layout importável de dentro de um arquivo ZIP.
        """
        class_dir = Path(class_dir)
        count = 0
        for src_dir in src_dirs:
            src_dir = Path(src_dir)
            if not src_dir.is_dir():
                continue
            for src in _iter_files(src_dir):
                if src.suffix != ".py":
                    continue
                dest = class_dir / src.relative_to(src_dir)
                try:
                    dest.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(src, dest)
                    py_compile.compile(
                        str(dest),
                        cfile=str(dest.with_suffix(COMPILED_SUFFIX)),
                        dfile=str(src.relative_to(src_dir)),
                        doraise=True,
                    )
                except py_compile.PyCompileError as e:
                    raise _failure("compile", e, source=str(src)) from e
                except OSError as e:
                    raise _failure("compile", e, source=str(src)) from e
                count += 1
        return count

    def has_compiled(self, class_dir: Path) -> bool:
        class_dir = Path(class_dir)
        if not class_dir.is_dir():
            return False
        return any(p.suffix == COMPILED_SUFFIX for p in class_dir.rglob("*"))

    # ------------------------------------------------------------------
    # Metadados
    # ------------------------------------------------------------------
    def metadata_path(self, class_dir: Path, group: str, artifact: str) -> Path:
        return Path(class_dir) / "META-INF" / group / artifact / METADATA_FILE

    def write_metadata(
        self,
        path: Path,
        *,
        group: str,
        artifact: str,
        version: str,
        main_module: str,
        scm: Dict[str, str],
        source_dirs: Sequence[Path] = (),
        resource_dirs: Sequence[Path] = (),
    ) -> None:
        lines = [
            "Metadata-Version: 2.1",
            f"Name: {artifact}",
            f"Version: {version}",
            f"Summary: {group}/{artifact}",
            f"X-Main-Module: {main_module}",
        ]
        labels = {
            "url": "Source",
            "connection": "SCM-Connection",
            "developer_connection": "SCM-Developer-Connection",
            "tag": "SCM-Tag",
        }
        for key, label in labels.items():
            if scm.get(key):
                lines.append(f"Project-URL: {label}, {scm[key]}")
        for d in source_dirs:
            lines.append(f"X-Source-Dir: {self._rel(d)}")
        for d in resource_dirs:
            lines.append(f"X-Resource-Dir: {self._rel(d)}")

        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as e:
            raise _failure("write_metadata", e, path=str(path)) from e

    def _rel(self, p: Path) -> str:
        try:
            return Path(p).relative_to(self.project_root).as_posix()
        except ValueError:
            return Path(p).as_posix()

    # ------------------------------------------------------------------
    # Empacotamento
    # ------------------------------------------------------------------
    def archive(self, class_dir: Path, archive_file: Path) -> None:
        """Empacota `class_dir` em um ZIP (arquivo leve)."""
        class_dir, archive_file = Path(class_dir), Path(archive_file)
        try:
            archive_file.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(archive_file, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                self._write_tree(zf, class_dir)
        except OSError as e:
            raise _failure("archive", e, archive=str(archive_file)) from e

    def standalone_archive(
        self,
        class_dir: Path,
        standalone_file: Path,
        *,
        main_module: str,
        dependency_dirs: Sequence[Path] = (),
    ) -> None:
        """Empacota staging + dependências em uma aplicação ZIP executável."""
        standalone_file = Path(standalone_file)
        main = (
            "import runpy\n"
            f"runpy.run_module({main_module!r}, run_name='__main__', alter_sys=True)\n"
        )
        try:
            standalone_file.parent.mkdir(parents=True, exist_ok=True)
            with standalone_file.open("wb") as fh:
                fh.write(SHEBANG)
                with zipfile.ZipFile(fh, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                    seen = self._write_tree(zf, Path(class_dir))
                    for dep in dependency_dirs:
                        if Path(dep).is_dir():
                            seen |= self._write_tree(zf, Path(dep), skip=seen)
                    if "__main__.py" not in seen:
                        zf.writestr("__main__.py", main)
            mode = standalone_file.stat().st_mode
            standalone_file.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as e:
            raise _failure("standalone_archive", e, archive=str(standalone_file)) from e

    def _write_tree(self, zf: zipfile.ZipFile, root: Path, skip: Optional[set] = None) -> set:
        written = set()
        if not root.is_dir():
            return written
        for f in _iter_files(root):
            name = f.relative_to(root).as_posix()
            if skip and name in skip:
                continue
            zf.write(f, name)
            written.add(name)
        return written

    # ------------------------------------------------------------------
    # Instalação
    # ------------------------------------------------------------------
    def installed_path(self, repository: Path, group: str, artifact: str, version: str) -> Path:
        base = Path(repository).joinpath(*group.split("."), artifact, version)
        return base / f"{artifact}-{version}.zip"

    def install(
        self,
        archive_file: Path,
        metadata_file: Path,
        *,
        repository: Path,
        group: str,
        artifact: str,
        version: str,
    ) -> Path:
        target = self.installed_path(repository, group, artifact, version)
        self.copy_file(metadata_file, target.with_suffix(".pkg-info"))
        self.copy_file(archive_file, target)
        return target

    # ------------------------------------------------------------------
    # Processos
    # ------------------------------------------------------------------
    def process(self, command_args: Sequence[str], *, cwd: Optional[Path] = None) -> int:
        """Executa um processo e aguarda; exit != 0 vira `DelegatedActionFailure`."""
        args = [str(a) for a in command_args]
        try:
            completed = subprocess.run(args, cwd=str(cwd or self.project_root), check=False)
        except OSError as e:
            raise _failure("process", e, command=args) from e
        if completed.returncode != 0:
            raise DelegatedActionFailure(
                message=f"Process exited with code {completed.returncode}: {args[0]}",
                details={"action": "process", "command": args, "returncode": completed.returncode},
            )
        return completed.returncode

    def git_count_revs(self) -> Optional[int]:
        """Número de revisões em HEAD; `None` fora de um repositório git."""
        try:
            completed = subprocess.run(
                ["git", "rev-list", "HEAD", "--count"],
                cwd=str(self.project_root),
                capture_output=True,
                text=True,
                check=False,
                env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
            )
        except OSError:
            return None
        if completed.returncode != 0:
            return None
        try:
            return int(completed.stdout.strip())
        except ValueError:
            return None
