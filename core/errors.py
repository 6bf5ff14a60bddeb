"""
Errori del motore di report.
"""


class InvalidInputError(ValueError):
    """Argomento di primo livello con forma sbagliata (es. None al posto di una lista)."""
