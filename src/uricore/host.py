"""uricore.host
The host subcomponent of an authority: a registered name, an IPv4 address, or an IPv6 address.
"""

import abc
import dataclasses
import enum
import logging
import re

from typing import Self

from .errors import ErrorKind, ParseError, UriError
from .grammar import H16, IPV4_SHAPE, IPV6_GROUP_COUNT

logger: logging.Logger = logging.getLogger(__name__)


class HostFormat(enum.Enum):
    REGISTERED_NAME = "registered-name"
    IPV4 = "ipv4"
    IPV6 = "ipv6"


class Host(abc.ABC):
    """A parsed host. Instances are always one of RegisteredName, IPv4Address, or IPv6Address."""

    @property
    @abc.abstractmethod
    def host_format(self: Self) -> HostFormat: ...

    @abc.abstractmethod
    def format(self: Self) -> str:
        """Canonical text of the host, without IP-literal brackets."""

    def serialize(self: Self) -> str:
        """The host as it appears inside an authority."""
        return self.format()

    def __str__(self: Self) -> str:
        return self.format()

    @staticmethod
    def parse(text: str, fmt: HostFormat) -> "Host":
        """Parse `text` as a host of the requested format."""
        try:
            if fmt is HostFormat.IPV4:
                return parse_ipv4(text)
            if fmt is HostFormat.IPV6:
                return parse_ipv6(text)
            return RegisteredName(text)
        except UriError as e:
            logger.debug("rejected %s host %r: %s", fmt.value, text, e.kind.value)
            raise


@dataclasses.dataclass(frozen=True)
class RegisteredName(Host):
    text: str

    @property
    def host_format(self: Self) -> HostFormat:
        return HostFormat.REGISTERED_NAME

    def format(self: Self) -> str:
        return self.text


@dataclasses.dataclass(frozen=True)
class IPv4Address(Host):
    octets: tuple[int, ...]

    @property
    def host_format(self: Self) -> HostFormat:
        return HostFormat.IPV4

    def format(self: Self) -> str:
        return ".".join(str(octet) for octet in self.octets)


@dataclasses.dataclass(frozen=True)
class IPv6Address(Host):
    groups: tuple[int, ...]

    @property
    def host_format(self: Self) -> HostFormat:
        return HostFormat.IPV6

    def serialize(self: Self) -> str:
        return f"[{self.format()}]"

    def format(self: Self) -> str:
        """Shortest form: the first longest run of zero groups becomes "::", everything else is lowercase hex."""
        elided_start, elided_length = _longest_zero_run(self.groups)
        hexed: list[str] = [f"{group:x}" for group in self.groups]
        if elided_length == 0:
            return ":".join(hexed)
        head: str = ":".join(hexed[:elided_start])
        tail: str = ":".join(hexed[elided_start + elided_length :])
        return f"{head}::{tail}"


def _longest_zero_run(groups: tuple[int, ...]) -> tuple[int, int]:
    """Returns (start, length) of the first longest run of zeros, or (-1, 0) if there are none."""
    best_start: int = -1
    best_length: int = 0
    run_start: int = -1
    run_length: int = 0
    for index, group in enumerate(groups):
        if group != 0:
            run_length = 0
            continue
        if run_length == 0:
            run_start = index
        run_length += 1
        # Strictly greater, so ties go to the leftmost run.
        if run_length > best_length:
            best_start, best_length = run_start, run_length
    return best_start, best_length


def parse_ipv4(text: str) -> IPv4Address:
    m: re.Match[str] | None = IPV4_SHAPE.match(text)
    if m is None:
        raise ParseError(ErrorKind.NOT_AN_IPV4_ADDRESS, text)
    octets: tuple[int, ...] = tuple(int(group, base=10) for group in m.groups())
    for group, octet in zip(m.groups(), octets):
        if octet > 255:
            raise ParseError(ErrorKind.IPV4_OCTET_OUT_OF_RANGE, group, f"in {text!r}")
    return IPv4Address(octets)


_ELISION: str = "::"


def _tokenize_ipv6(text: str) -> list[str]:
    """Split IPv6 text into hex groups and elision markers, in order.
    Empty groups are kept so that they can be reported as invalid.
    """
    tokens: list[str] = []
    for index, side in enumerate(text.split(_ELISION)):
        if index > 0:
            tokens.append(_ELISION)
        if len(side) > 0:
            tokens.extend(side.split(":"))
    return tokens


def parse_ipv6(text: str) -> IPv6Address:
    """Parse the text of an IPv6 address (no brackets, no zone, no embedded IPv4)."""
    tokens: list[str] = _tokenize_ipv6(text)

    elisions: int = tokens.count(_ELISION)
    if elisions > 1:
        raise ParseError(ErrorKind.MULTIPLE_ELISIONS, text)

    for token in tokens:
        if token != _ELISION and H16.match(token) is None:
            raise ParseError(ErrorKind.INVALID_HEX_GROUP, token, f"in {text!r}")

    explicit: int = len(tokens) - elisions
    if elisions == 0:
        if explicit != IPV6_GROUP_COUNT:
            raise ParseError(ErrorKind.WRONG_GROUP_COUNT, text, f"{explicit} groups")
    elif explicit >= IPV6_GROUP_COUNT:
        raise ParseError(ErrorKind.TOO_MANY_GROUPS, text, f"{explicit} groups and an elision")

    groups: list[int] = []
    for token in tokens:
        if token == _ELISION:
            groups.extend([0] * (IPV6_GROUP_COUNT - explicit))
        else:
            groups.append(int(token, base=16))
    return IPv6Address(tuple(groups))


def parse_host(text: str) -> Host:
    """Parse host text as written in an authority.
    "[...]" is an IPv6 literal, a dotted quad is IPv4, anything else is a registered name.
    """
    if text.startswith("["):
        if not text.endswith("]"):
            raise ParseError(ErrorKind.UNTERMINATED_IP_LITERAL, text)
        return parse_ipv6(text[1:-1])
    if IPV4_SHAPE.match(text) is not None:
        return parse_ipv4(text)
    return RegisteredName(text)
