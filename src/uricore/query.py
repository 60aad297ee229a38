"""uricore.query
Key/value view of a raw query string.
"""

import types

from typing import Mapping

from .errors import ErrorKind, ParseError


def build_query_dict(query: str) -> Mapping[str, str]:
    """Split `query` into "&"-separated stanzas of key[=value].
    A stanza without "=" maps its key to "". Repeated keys are an error, never overwritten.
    """
    result: dict[str, str] = {}
    if len(query) == 0:
        return types.MappingProxyType(result)
    for stanza in query.split("&"):
        key, _, value = stanza.partition("=")
        if key in result:
            raise ParseError(ErrorKind.DUPLICATE_QUERY_KEY, key, f"in {query!r}")
        result[key] = value
    return types.MappingProxyType(result)
