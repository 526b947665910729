"""
Exception types raised by the Vectmo services.

The HTTP layer translates these into status codes; scripts print them.
Unsupported characters are never an error, they are dropped silently.
"""
from __future__ import annotations


class VectmoError(Exception):
    """Base class for every Vectmo failure."""


class ConfigurationError(VectmoError):
    """Missing, empty or unsafe base file name (absolute, nested or `..`)."""


class ModelIOError(VectmoError):
    """Model storage could not be written."""

    def __init__(self, path, cause: Exception | None = None):
        self.path = str(path)
        self.cause = cause
        message = f"cannot write model file {self.path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class EmptyModelError(VectmoError):
    """Prediction was requested but no transition table is trained or loadable."""

    def __init__(self, message: str = "Model not trained yet"):
        super().__init__(message)


class NoContinuationError(VectmoError):
    """Generation produced nothing beyond the seed character."""

    def __init__(self, seed: str = ""):
        self.seed = seed
        super().__init__(f"No continuation found for seed {seed!r}")


class EmptyInputError(VectmoError):
    """An empty seed or an empty training text was supplied."""

    def __init__(self, message: str = "No input provided"):
        super().__init__(message)


class InvalidInputError(VectmoError):
    """Input text cannot be stored (e.g. lone surrogates that have no UTF-8 form)."""
