"""Shared exceptions module."""


class DataLayerException(Exception):
    """Base exception for every error raised by datalayer."""

    def __init__(self, message: str = "Data layer error"):
        """Create a new DataLayerException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class NotInitializedException(DataLayerException):
    """Raised when process-wide wiring is used before it was initialized."""

    def __init__(self, message: str = "Container has not been initialized"):
        """Create a new NotInitializedException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        super().__init__(message)
