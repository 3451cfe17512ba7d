"""
Options: mapeamento de opções encadeado entre tasks.

As Options fluem pelo pipeline inteiro: cada task recebe o snapshot atual e
devolve um snapshot (novo ou o mesmo) que será entregue à próxima task.

Convenção de chaves:
    - Chaves são namespaced por task: `"<task-id>.<opção>"`
      (ex.: `metadata.output_path`)
    - Um pequeno conjunto de chaves compartilhadas é permitido sem namespace
      (`SHARED_KEYS`, ex.: `tasks`, a lista de tasks do pipeline)

Invariantes:
    - Options são somente leitura (`MappingProxyType`) entre passos
    - `set_option` nunca muta a entrada; devolve um novo mapeamento
    - Uma task só escreve no próprio namespace (a chave é derivada do id)
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

import yaml

Options = Mapping[str, Any]

SHARED_KEYS = frozenset({"tasks"})


def make_options(values: Optional[Mapping[str, Any]] = None) -> Options:
    """Cria um snapshot somente leitura a partir de um mapeamento qualquer."""
    data: Dict[str, Any] = {}
    for key, value in (values or {}).items():
        if not isinstance(key, str) or not key.strip():
            raise ValueError(f"Option key must be a non-empty string: {key!r}")
        data[key] = value
    return MappingProxyType(data)


def option_key(task_id: str, name: str) -> str:
    if not task_id or not name:
        raise ValueError("task_id and option name must be non-empty")
    return f"{task_id}.{name}"


def get_option(options: Options, task_id: str, name: str, default: Any = None) -> Any:
    return options.get(option_key(task_id, name), default)


def set_option(options: Options, task_id: str, name: str, value: Any) -> Options:
    """Retorna um novo snapshot com `<task_id>.<name>` definido."""
    data = dict(options)
    data[option_key(task_id, name)] = value
    return MappingProxyType(data)


def parse_option_pairs(pairs: Iterable[str]) -> Dict[str, Any]:
    """
    Converte pares `chave=valor` (CLI) em dicionário.

    O valor é decodificado como YAML, então `true`, `3` e `[a, b]` viram
    bool, int e lista. Valor vazio vira `None`.
    """
    out: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid option (expected key=value): {pair!r}")
        try:
            out[key] = yaml.safe_load(raw) if raw.strip() else None
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid option value for {key!r}: {e}") from e
    return out
