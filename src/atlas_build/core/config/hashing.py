"""
Impressão digital da configuração efetiva de um build.

O valor vai para `BuildContext.meta["config_hash"]` e para o evento
`pipeline started`, identificando com qual configuração a execução rodou.
Não participa da decisão de executar ou pular uma task.
"""

import hashlib
import json
from typing import Any, Dict


def canonical_config_json(config: Dict[str, Any]) -> str:
    """JSON com chaves ordenadas e sem espaços; `Path` e afins viram `str`."""
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )
    return json.dumps(config, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def compute_config_hash(config: Dict[str, Any]) -> str:
    """SHA-256 hexadecimal de `canonical_config_json(config)`."""
    return hashlib.sha256(canonical_config_json(config).encode("utf-8")).hexdigest()
