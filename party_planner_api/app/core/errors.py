"""
Exception types shared across the persistence and HTTP layers.
"""


class DatabaseUnavailableError(RuntimeError):
    """Raised when a collection is requested but no database is connected."""

    def __init__(self, message: str = "La base de datos no está configurada.") -> None:
        super().__init__(message)
