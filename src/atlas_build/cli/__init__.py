"""Interface de linha de comando do Atlas Build."""
