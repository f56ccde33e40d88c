"""
System-wide custom error types.

Every error aborts the current parse or evaluate call. The language has no
try construct, so these only ever surface to the Python caller.
"""


class EggError(Exception):
    """
    Base class for all errors raised while parsing or evaluating Egg programs.
    """
    def __init__(self, message: str, expression: str = "", error_details: str = ""):
        """
        Initializes the EggError.

        Args:
            message: A high-level error message.
            expression: The Egg source (or node rendering) being processed when
                        the error occurred.
            error_details: Specific details about the error, if available.
        """
        full_message = f"{message}"
        if expression:
            full_message += f"\nExpression: '{expression}'"
        if error_details:
            full_message += f"\nDetails: {error_details}"
        super().__init__(full_message)
        self.message = message
        self.expression = expression
        self.error_details = error_details


class EggSyntaxError(EggError, ValueError):
    """
    Raised for malformed source text and for misuse of a special form
    (wrong arity, or a non-identifier where a name is required).
    Inherits from ValueError for general compatibility.
    """
    def __init__(
        self,
        message: str,
        expression: str = "",
        error_details: str = "",
        position: int = -1,
        line: int = 0,
        column: int = 0,
    ):
        """
        Initializes the EggSyntaxError.

        Args:
            message: A high-level error message.
            expression: The source text (or node rendering) that caused the error.
            error_details: Specific details, e.g. the unparsed remainder.
            position: 0-based offset into the source, or -1 when not applicable.
            line: 1-based line of the offset (0 when not applicable).
            column: 1-based column of the offset (0 when not applicable).
        """
        if position >= 0:
            location = f"line {line}, column {column}"
            error_details = f"{location}: {error_details}" if error_details else location
        super().__init__(message, expression, error_details)
        self.position = position
        self.line = line
        self.column = column


class EggReferenceError(EggError, NameError):
    """Raised when a name has no binding anywhere in the scope chain."""

    def __init__(self, message: str, name: str = "", expression: str = "", error_details: str = ""):
        super().__init__(message, expression, error_details)
        self.name = name


class EggTypeError(EggError, TypeError):
    """
    Raised when a non-callable value is applied, or a closure is called with
    the wrong number of arguments.
    """


class HostError(EggError):
    """
    Wraps an exception raised inside a host-supplied callable.
    The original exception is chained as __cause__.
    """
