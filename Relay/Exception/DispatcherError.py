"""Dispatcher error base class."""
from typing import Optional


class DispatcherError(Exception):

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


"""Raised when dispatcher options are invalid (empty delimiter, clashing tokens)."""
class DispatcherConfigError(DispatcherError, ValueError):
    def __init__(self, message: str, option: Optional[str] = None):
        super().__init__(message)
        self.option = option
