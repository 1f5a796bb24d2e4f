"""
Error Reporting
===============

Typed failures raised by grid operations. Every error carries an ErrorCode
so callers can branch on the failure reason without parsing messages.
"""

from enum import Enum


class ErrorCode(Enum):
    """Closed set of grid failure reasons."""
    INVALID_RESOLUTION = "invalid_resolution"
    INVALID_INDEX = "invalid_index"
    MALFORMED_STRING = "malformed_string"
    INCOMPATIBLE_RESOLUTION = "incompatible_resolution"
    NOT_COMPARABLE = "not_comparable"
    DOMAIN_ERROR = "domain_error"


_DESCRIPTIONS = {
    ErrorCode.INVALID_RESOLUTION: "Resolution argument was outside of acceptable range",
    ErrorCode.INVALID_INDEX: "Cell argument was not valid",
    ErrorCode.MALFORMED_STRING: "String argument was not a valid hexadecimal index",
    ErrorCode.INCOMPATIBLE_RESOLUTION: "Cell arguments had incompatible resolutions",
    ErrorCode.NOT_COMPARABLE: "Cells could not be compared across pentagon distortion",
    ErrorCode.DOMAIN_ERROR: "Argument was outside of acceptable range",
}


def describe_error(code: ErrorCode) -> str:
    """Human readable description of an error code."""
    return _DESCRIPTIONS[code]


class HexGridError(ValueError):
    """Base class for grid failures.

    Attributes:
        code: ErrorCode identifying the failure
        message: Description of the specific failure
    """

    code = ErrorCode.DOMAIN_ERROR

    def __init__(self, message: str = ""):
        self.message = message or describe_error(self.code)
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.name}, message={self.message!r})"


class InvalidResolutionError(HexGridError):
    code = ErrorCode.INVALID_RESOLUTION


class InvalidIndexError(HexGridError):
    code = ErrorCode.INVALID_INDEX


class MalformedStringError(HexGridError):
    code = ErrorCode.MALFORMED_STRING


class IncompatibleResolutionError(HexGridError):
    code = ErrorCode.INCOMPATIBLE_RESOLUTION


class NotComparableError(HexGridError):
    code = ErrorCode.NOT_COMPARABLE


class DomainError(HexGridError):
    code = ErrorCode.DOMAIN_ERROR


class PentagonDirectionError(NotComparableError):
    """Raised when stepping into the deleted direction of a pentagon."""
