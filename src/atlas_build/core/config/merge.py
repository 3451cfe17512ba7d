"""
Sobreposição de `build.local.yaml` sobre `build.defaults.yaml`.

Regras por tipo de valor:
    - mapa (ex.: `toolchain`, `scm`) → combinado chave a chave
    - lista (ex.: `source_dirs`, `native_args`) → substituída inteira
    - `null` em qualquer lado → o override vence
    - demais escalares → o override vence, desde que o tipo seja o mesmo

Um override que troca um mapa por escalar (ou vice-versa) é erro de
estrutura, reportado com o caminho pontilhado da chave (`toolchain.home_env`).

Invariantes:
    - Nenhum input é mutado
"""

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import ConfigTypeConflictError


def _conflict(path: Tuple[str, ...], base: Any, override: Any) -> ConfigTypeConflictError:
    where = ".".join(path) or "<raiz>"
    return ConfigTypeConflictError(
        f"Override incompatível em '{where}': "
        f"{type(base).__name__} vs {type(override).__name__}"
    )


def _overlay(path: Tuple[str, ...], base: Any, override: Any) -> Any:
    if isinstance(base, dict) and isinstance(override, dict):
        merged = {k: deepcopy(v) for k, v in base.items()}
        for key, value in override.items():
            if key in merged:
                merged[key] = _overlay(path + (str(key),), merged[key], value)
            else:
                merged[key] = deepcopy(value)
        return merged

    if base is None or override is None or isinstance(override, list):
        return deepcopy(override)

    if type(base) is not type(override):
        raise _conflict(path, base, override)
    return deepcopy(override)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Aplica `override` sobre `base` e devolve um novo dicionário.

    Raises:
        ConfigTypeConflictError: Raiz que não é mapa, ou chave cujo tipo
            muda entre defaults e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise _conflict((), base, override)
    return _overlay((), base, override)
