# mlkit/errors.py
from __future__ import annotations


class MLKitError(Exception):
    """Base de todos los errores del toolkit."""


class LoadFailure(MLKitError):
    """
    La ingesta de un CSV no produjo un Dataset.
    Solo se lanza desde LoadResult.unwrap(); load_csv nunca lanza.
    """
    def __init__(self, reason, message: str = ""):
        self.reason = reason
        self.message = message
        super().__init__(f"{reason.value}: {message}" if message else reason.value)


class InvalidArgument(MLKitError, ValueError):
    pass


class DimensionMismatch(MLKitError, ValueError):
    pass


class ModelNotFitted(MLKitError, RuntimeError):
    pass
