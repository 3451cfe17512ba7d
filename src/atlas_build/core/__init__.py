# src/atlas_build/core/__init__.py
"""
Core do Atlas Build.

Reúne as responsabilidades de orquestração, independentes do toolkit que
efetivamente compila, copia e empacota:

    - config     → carregamento, merge, hashing e BuildConfig
    - pipeline   → Options, BuildContext, contrato de Task e registry
    - engine     → runner sequencial com Options encadeadas
    - exceptions → taxonomia de falhas (UnknownTask, DelegatedActionFailure, ...)
    - errors     → payload serializável de erro para o operador

Princípios fundamentais:
    - A existência do artefato em disco é a única memoização
    - Nenhuma decisão silenciosa: falhas sobem até o chamador
    - Sem estado global: config e toolkit são injetados no contexto
"""
