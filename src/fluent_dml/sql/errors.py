"""
Exceptions raised by the SQL building layer.

Binding and column-set errors are programmer mistakes and surface before any
statement reaches the executor. Data access errors describe results that
break the contract expected from the executor. Anything the executor itself
raises is propagated untouched.
"""

from typing import Optional


class FluentDmlError(Exception):
    """Base class for every error raised by fluent_dml."""


class ParameterBindingError(FluentDmlError, ValueError):
    """Placeholders and bind values do not line up."""


class ArgumentUnderflowError(ParameterBindingError):
    """Raised when a statement has more placeholders than bind values."""

    def __init__(self, placeholder_index: int, supplied: int):
        self.placeholder_index = placeholder_index
        self.supplied = supplied
        super().__init__(
            f"Placeholder #{placeholder_index + 1} has no bind value "
            f"(received {supplied} parameters)"
        )


class ArgumentOverflowError(ParameterBindingError):
    """Raised when bind values are left over after every placeholder is consumed."""

    def __init__(self, consumed: int, supplied: int):
        self.consumed = consumed
        self.supplied = supplied
        super().__init__(f"Found {consumed} parameters but received {supplied}")


class MissingNamedParameterError(ParameterBindingError):
    """Raised when a ``:name`` placeholder has no matching entry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No value supplied for named parameter ':{name}'")


class EmptyColumnSetError(FluentDmlError, ValueError):
    """Raised when an insert or update is built without any column binding."""


class BuilderConsumedError(FluentDmlError, RuntimeError):
    """Raised when a terminal builder method is invoked a second time."""


class UnsupportedDialectError(FluentDmlError, ValueError):
    """Raised when a dialect name is not registered."""


class DataAccessError(FluentDmlError):
    """The executor returned something that breaks the expected result contract."""


class TooManyRowsError(DataAccessError):
    """Raised when a single-result query produces more than one row."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Incorrect result size: expected {expected}, actual {actual}"
        )


class InvalidGeneratedKeyTypeError(DataAccessError):
    """Raised when a generated key is not numeric."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            "The generated key type is not a number, "
            f"found {type(value).__name__}"
        )


class MissingGeneratedKeyError(DataAccessError):
    """Raised when the driver reports no generated key for an inserted row."""

    def __init__(self, row_index: Optional[int] = None):
        self.row_index = row_index
        if row_index is None:
            message = "The driver did not report a generated key"
        else:
            message = f"The driver did not report a generated key for row {row_index}"
        super().__init__(message)
