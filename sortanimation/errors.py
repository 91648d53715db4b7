class SortEngineError(Exception):
    """Base class for everything the engine raises."""


class ConfigurationError(SortEngineError, ValueError):
    """A driver request that cannot be honoured in the current state.

    Raised synchronously, before any state has changed.
    """


class InvariantViolation(SortEngineError, AssertionError):
    """The engine broke one of its own guarantees. Always a bug."""
