"""Dispatch domain exceptions."""

from datalayer.core.exceptions import DataLayerException


class DispatchError(DataLayerException):
    """Base exception for dispatch pipeline errors."""

    def __init__(self, message: str = "Dispatch error"):
        """Initialize with message."""
        super().__init__(message)


class InvalidActionError(DispatchError):
    """An action without a usable type identifier was dispatched."""

    def __init__(self, message: str = "Action has no type"):
        """Initialize with message."""
        super().__init__(message)


class ListenerExecutionError(DispatchError):
    """A listener raised while handling an action.

    The original exception is chained as ``__cause__``. The pipeline never
    raises this: it is logged and handed to the optional error reporter.
    """

    def __init__(self, *, action_type: str, phase: str, handler: str, error: Exception):
        """Initialize with the action type, phase and handler that failed."""
        self.action_type = action_type
        self.phase = phase
        self.handler = handler
        self.__cause__ = error
        super().__init__(
            f"{phase} listener {handler} failed for action '{action_type}': "
            f"{type(error).__name__}: {error}"
        )
