"""
Toolkit externo do Atlas Build.

As tasks tratam estas operações como chamadas opacas com contrato de
pré/pós-condição; o core não depende da implementação concreta e aceita
qualquer objeto com a mesma interface (ex.: stubs em testes).
"""

from .local import COMPILED_SUFFIX, METADATA_FILE, LocalToolkit

__all__ = ["COMPILED_SUFFIX", "METADATA_FILE", "LocalToolkit"]
