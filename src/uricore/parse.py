"""uricore.parse
Left-to-right parser for scheme:[//[user:password@]host[:port]][/]path[?query][#fragment]

Each step is a plain function over the input text and a start offset that returns what it found
and where it stopped, so nothing shares a cursor.
"""

import logging

from .errors import ErrorKind, ParseError, UriError
from .grammar import MAX_PORT, PORT, SCHEME_CHARS
from .host import Host, parse_host, parse_ipv6
from .uri import Authority, HierarchicalPart, OpaquePart, Uri, UriCategory

logger: logging.Logger = logging.getLogger(__name__)


def parse_scheme(text: str) -> tuple[str, int]:
    """Returns the scheme and the offset of the ":" that ends it."""
    for pos, char in enumerate(text):
        if char == ":":
            if pos == 0:
                raise ParseError(ErrorKind.EMPTY_SCHEME, text)
            return text[:pos], pos
        if char not in SCHEME_CHARS:
            raise ParseError(ErrorKind.INVALID_SCHEME_CHARACTER, char, f"at offset {pos} of {text!r}")
    raise ParseError(ErrorKind.MISSING_SCHEME, text)


def parse_query_fragment(text: str, start: int) -> tuple[int, str, str]:
    """Finds the query and fragment at or after `start`.
    Returns (end of content, query, fragment); absent parts are "".
    """
    fragment_pos: int = text.find("#", start)
    query_pos: int = text.find("?", start)
    if fragment_pos != -1 and query_pos != -1 and fragment_pos < query_pos:
        raise ParseError(ErrorKind.FRAGMENT_BEFORE_QUERY, text[fragment_pos:])

    end: int = len(text)
    fragment: str = ""
    if fragment_pos != -1:
        fragment = text[fragment_pos + 1 :]
        end = fragment_pos

    query: str = ""
    if query_pos != -1:
        query = text[query_pos + 1 : end]
        end = query_pos

    return end, query, fragment


def parse_port(text: str) -> int:
    """Port digits to an integer. "" is 0, which means no port."""
    if PORT.match(text) is None:
        raise ParseError(ErrorKind.INVALID_PORT, text)
    if len(text) == 0:
        return 0
    port: int = int(text, base=10)
    if port > MAX_PORT:
        raise ParseError(ErrorKind.PORT_OUT_OF_RANGE, text, f"maximum is {MAX_PORT}")
    return port


def _parse_userinfo(content: str, start: int, end: int) -> tuple[str | None, str | None, int]:
    """user:password@ within content[start:end]. Returns (username, password, offset of host)."""
    at: int = content.find("@", start, end)
    if at == -1:
        return None, None, start
    divider: int = content.find(":", start, at)
    if divider == -1:
        raise ParseError(ErrorKind.MALFORMED_USERINFO, content[start : at + 1], "expected user:password@")
    return content[start:divider], content[divider + 1 : at], at + 1


def _parse_host(content: str, start: int) -> tuple[Host, int]:
    if content.startswith("[", start):
        # IP-literal; nothing inside the brackets ends the host.
        close: int = content.find("]", start)
        if close == -1:
            raise ParseError(ErrorKind.UNTERMINATED_IP_LITERAL, content[start:])
        return parse_ipv6(content[start + 1 : close]), close + 1
    end: int = start
    while end < len(content) and content[end] not in ":/":
        end += 1
    return parse_host(content[start:end]), end


def _parse_port(content: str, start: int) -> tuple[int, int]:
    end: int = content.find("/", start)
    if end == -1:
        end = len(content)
    return parse_port(content[start:end]), end


def parse_hierarchy(content: str) -> HierarchicalPart:
    """Decomposes hierarchical content into authority and path."""
    if not content.startswith("//"):
        if content.startswith("/"):
            return HierarchicalPart(path=content[1:], path_is_rooted=True)
        return HierarchicalPart(path=content, path_is_rooted=False)

    authority_end: int = content.find("/", 2)
    if authority_end == -1:
        authority_end = len(content)

    username, password, pos = _parse_userinfo(content, 2, authority_end)
    host, pos = _parse_host(content, pos)

    port: int = 0
    if content.startswith(":", pos):
        port, pos = _parse_port(content, pos + 1)

    rooted: bool = content.startswith("/", pos)
    path: str = content[pos + 1 :] if rooted else content[pos:]

    return HierarchicalPart(
        path=path,
        path_is_rooted=rooted,
        authority=Authority(host=host, port=port, username=username, password=password),
    )


def parse(text: str, category: UriCategory = UriCategory.HIERARCHICAL) -> Uri:
    """Parse a URI.
    Hierarchical URIs are split into authority and path; non-hierarchical ones keep their content opaque.
    Raises ParseError on any malformed input.
    """
    if not isinstance(category, UriCategory):
        raise TypeError(f"category must be a UriCategory, not {category!r}")
    try:
        if len(text) == 0:
            raise ParseError(ErrorKind.EMPTY_INPUT, text)
        scheme, colon = parse_scheme(text)
        content_end, query, fragment = parse_query_fragment(text, colon + 1)
        content: str = text[colon + 1 : content_end]

        part: HierarchicalPart | OpaquePart
        if category is UriCategory.HIERARCHICAL:
            part = parse_hierarchy(content)
        elif category is UriCategory.NON_HIERARCHICAL:
            part = OpaquePart(content)

        return Uri(scheme=scheme, part=part, query=query, fragment=fragment)
    except UriError as e:
        logger.debug("rejected URI %r: %s", text, e)
        raise
