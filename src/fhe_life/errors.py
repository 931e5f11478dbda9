"""Exception types raised by the encrypted Game of Life engine."""


class FheLifeError(Exception):
    """Base class for all fhe_life errors."""


class MalformedGridError(FheLifeError, ValueError):
    """Initial configuration is empty or not rectangular."""


class InvalidPoolSizeError(FheLifeError, ValueError):
    """Evaluator pool was configured with no evaluators."""


class KeyMismatchError(FheLifeError):
    """Ciphertexts combined by a gate were encrypted under different keys.

    This is fatal: it must never be caught and ignored inside the engine.
    """


class EvaluatorBusyError(FheLifeError, RuntimeError):
    """An evaluator was entered by a second caller while still in use."""
