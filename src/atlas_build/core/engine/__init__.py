"""
Engine do Atlas Build.

Contém o runner que sequencia tasks de um pipeline, encadeando as Options
de uma para a próxima.

Invariantes:
    - Tasks executam estritamente na ordem da lista
    - Uma task posterior observa todos os efeitos das anteriores
    - A primeira falha interrompe o pipeline

Limites explícitos:
    - Não infere dependências (não é planner de DAG)
    - Não executa em paralelo
    - Não faz retry nem rollback
"""

from .runner import PIPELINE_ID, run_tasks

__all__ = ["PIPELINE_ID", "run_tasks"]
