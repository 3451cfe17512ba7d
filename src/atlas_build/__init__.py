# src/atlas_build/__init__.py
"""
Atlas Build: orquestrador de tasks de build idempotentes.

Um conjunto nomeado de tasks (clean, metadata, archive, standalone, install,
native) que pode ser composto em um pipeline arbitrário no momento da
invocação.

Princípios centrais:
    - Cada task verifica se o seu artefato já existe e, se sim, não executa
    - O filesystem é o cache de memoização (apenas existência, sem hash)
    - Options são encadeadas de uma task para a próxima
    - Tasks são resolvidas por identificador: o pipeline é puro dado

Arquitetura em alto nível:
    - core.config   → carregamento, merge, hashing e BuildConfig
    - core.pipeline → Options, BuildContext, Task e TaskRegistry
    - core.engine   → runner sequencial
    - toolkit       → ações delegadas (cópia, compilação, ZIP, processos)
    - tasks         → as seis tasks de build
    - cli           → `atlas-build run ...`

Para invalidar todos os artefatos, execute `clean` primeiro.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
