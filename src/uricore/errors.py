"""Error kinds raised by uricore.
Every failure is a ValueError subclass carrying an ErrorKind and the offending text.
"""

import enum

from typing import Self


class ErrorKind(enum.Enum):
    EMPTY_INPUT = "empty input"
    MISSING_SCHEME = "missing scheme"
    EMPTY_SCHEME = "empty scheme"
    INVALID_SCHEME_CHARACTER = "invalid scheme character"
    MALFORMED_USERINFO = "malformed userinfo"
    UNTERMINATED_IP_LITERAL = "unterminated IP literal"
    INVALID_PORT = "invalid port"
    PORT_OUT_OF_RANGE = "port out of range"
    FRAGMENT_BEFORE_QUERY = "fragment before query"
    DUPLICATE_QUERY_KEY = "duplicate query key"
    NOT_AN_IPV4_ADDRESS = "not an IPv4 address"
    IPV4_OCTET_OUT_OF_RANGE = "IPv4 octet out of range"
    INVALID_HEX_GROUP = "invalid hex group"
    MULTIPLE_ELISIONS = "multiple elisions"
    WRONG_GROUP_COUNT = "wrong group count"
    TOO_MANY_GROUPS = "too many groups"
    WRONG_CATEGORY = "wrong category"
    MISSING_REQUIRED_FIELD = "missing required field"
    FORBIDDEN_FIELD = "forbidden field"
    DELIMITER_IN_COMPONENT = "delimiter in component"


class UriError(ValueError):
    """Base class for everything uricore raises."""

    def __init__(self: Self, kind: ErrorKind, text: str, detail: str | None = None) -> None:
        self.kind: ErrorKind = kind
        self.text: str = text
        message: str = f"{kind.value}: {text!r}"
        if detail is not None:
            message += f" ({detail})"
        super().__init__(message)


class ParseError(UriError):
    """Raised when URI or host text does not match the grammar."""


class BuildError(UriError):
    """Raised when a component map is missing a required field or carries a forbidden one."""


class CategoryError(UriError):
    """Raised when an accessor is used against the wrong UriCategory."""
