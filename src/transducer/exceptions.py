"""Custom exceptions raised by the transducer pipeline."""


class TransducerError(RuntimeError):
    """Base error for all pipeline related exceptions."""


class ConfigurationError(TransducerError):
    """Raised when a pipeline document is invalid or cannot be resolved."""


class StageError(TransducerError):
    """Raised when a stage is constructed with invalid arguments."""


class MissingCallback(StageError):
    """Raised when a filter, map or reduce stage has no callback."""


class MissingSeed(StageError):
    """Raised when a reduce stage has no initial accumulator."""


class UnsupportedSeed(StageError):
    """Raised when a reduce seed is not plain, cloneable data."""


class CompositionError(TransducerError):
    """Raised when a stage list cannot be folded into a single step."""


class ReduceNotLast(CompositionError):
    """Raised when a reduce stage is followed by another stage."""


class EmptyPipeline(CompositionError):
    """Raised when composing a pipeline without stages."""


class ExecutionError(TransducerError):
    """Raised when a compiled pipeline cannot be executed."""


class MissingSequence(ExecutionError):
    """Raised when a pipeline is executed without an input sequence."""
