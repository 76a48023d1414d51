from __future__ import annotations
from typing import Any, Optional


class BootstrapError(Exception):
    """
    Base class for every failure between reading argv and running the server.

    The cli maps each subclass to its own exit code.
    """


class ArgumentError(BootstrapError):
    """
    A problem with the command line tokens.

    index
      Position of the offending token in the argument list, excluding
      the program name. None when the list as a whole is wrong.

    flag
      The flag token involved, if any.
    """

    def __init__(self, message: str, index: Optional[int] = None, flag: Optional[str] = None):
        super().__init__(message)
        self.index = index
        self.flag = flag


class ArgumentCountError(ArgumentError):
    pass


class UnknownFlagError(ArgumentError):
    """
    Raised at the first unrecognized flag.

    record holds whatever was parsed before that point. It is kept for
    diagnostics only and must not be bootstrapped.
    """

    def __init__(self, message: str, index: int, flag: str, record: Any = None):
        super().__init__(message, index=index, flag=flag)
        self.record = record


class ValueTooLongError(ArgumentError):
    def __init__(self, message: str, index: Optional[int], flag: Optional[str], field: str, limit: int):
        super().__init__(message, index=index, flag=flag)
        self.field = field
        self.limit = limit


class ConfigurationError(BootstrapError):
    pass


class BootstrapStepError(BootstrapError):
    """
    A runtime call failed during startup. The runtime exception is chained
    as __cause__.
    """

    def __init__(self, step: str, message: str):
        super().__init__(f"{step}: {message}")
        self.step = step
