#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the markast library.

This module defines specialized exception classes for the error conditions
that can surface from the Markdown compiler. Malformed Markdown never raises:
it degrades to plain text. Only configuration problems and engine defects are
reported as exceptions.

Exception Hierarchy
-------------------
- MarkastError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for the compiler)

  - ParsingError (engine-level parse failures)
    - EngineInvariantError (zero-progress dispatch loop)

Errors raised by a grammar rule that are not markast errors are wrapped in a
ParsingError whose ``original_error`` holds the underlying exception.

"""

from typing import Any


class MarkastError(Exception):
    """Base exception class for all markast-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MarkastError):
    """Exception raised for invalid input parameters or options.

    This exception covers validation errors such as:
    - Option values of the wrong type
    - Unknown option names
    - Input documents that are not strings

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong class is provided.

    Parameters
    ----------
    component_name : str
        Name of the component that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'. "
                f"Pass a {expected_type.__name__} instance, a mapping of option names, or None."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(MarkastError):
    """Exception raised when the parsing engine itself fails.

    Document content never triggers this error; it signals that the
    compiler could not run to completion.

    Parameters
    ----------
    message : str
        Description of the parsing error
    original_error : Exception, optional
        The original exception that caused this error

    """

    pass


class EngineInvariantError(ParsingError):
    """Exception raised when the dispatch loop stops making progress.

    Every rule match must consume at least one character and the plain text
    rule must match any non-empty remainder. Either condition failing means
    the rule set is defective.

    Parameters
    ----------
    message : str
        Description of the violated invariant
    rule_name : str, optional
        Name of the rule that produced an empty match, if any
    remaining : str, optional
        The unconsumed input at the time of failure

    """

    def __init__(self, message: str, rule_name: str | None = None, remaining: str | None = None):
        """Initialize the invariant error with the offending rule and input."""
        super().__init__(message)
        self.rule_name = rule_name
        self.remaining = remaining


__all__ = [
    "MarkastError",
    "ValidationError",
    "InvalidOptionsError",
    "ParsingError",
    "EngineInvariantError",
]
