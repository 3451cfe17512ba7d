# src/atlas_build/core/config/__init__.py

"""
Camada de configuração do Atlas Build.

Este pacote carrega, mescla e materializa a configuração de build.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução da configuração final via deep-merge determinístico
    - Hash canônico para rastreabilidade da execução
    - Materialização imutável em `BuildConfig`

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Overrides são sempre explícitos
    - A mesma entrada sempre produz a mesma configuração final
"""

from .build import BuildConfig, ToolchainConfig, resolve_version
from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidBuildConfigError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import DEFAULTS_PATH, load_config, load_project_config
from .merge import deep_merge

__all__ = [
    "BuildConfig",
    "ToolchainConfig",
    "resolve_version",
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidBuildConfigError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "DEFAULTS_PATH",
    "load_config",
    "load_project_config",
    "deep_merge",
]
