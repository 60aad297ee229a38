"""uricore.build
Construct a Uri from named components instead of text, or from another Uri with some components replaced.
"""

import enum
import logging

from typing import Mapping

from .errors import BuildError, ErrorKind, ParseError, UriError
from .grammar import SCHEME_CHARS
from .host import Host, IPv6Address, RegisteredName, parse_host
from .parse import parse_port
from .uri import Authority, HierarchicalPart, OpaquePart, Uri, UriCategory

logger: logging.Logger = logging.getLogger(__name__)


class ComponentName(enum.Enum):
    SCHEME = "scheme"
    CONTENT = "content"
    USERNAME = "username"
    PASSWORD = "password"
    HOST = "host"
    PORT = "port"
    PATH = "path"
    QUERY = "query"
    FRAGMENT = "fragment"


_HIERARCHICAL_ONLY: tuple[ComponentName, ...] = (
    ComponentName.USERNAME,
    ComponentName.PASSWORD,
    ComponentName.HOST,
    ComponentName.PORT,
    ComponentName.PATH,
)

_NEEDS_HOST: tuple[ComponentName, ...] = (ComponentName.USERNAME, ComponentName.PASSWORD, ComponentName.PORT)

# Characters that would end each component early when serialized.
_DELIMITERS: dict[ComponentName, str] = {
    ComponentName.USERNAME: ":@/?#",
    ComponentName.PASSWORD: "@/?#",
    ComponentName.CONTENT: "?#",
    ComponentName.PATH: "?#",
    ComponentName.QUERY: "#",
}

_REGISTERED_NAME_DELIMITERS: str = ":/?#@"


def _component_name(key: ComponentName | str) -> ComponentName:
    if isinstance(key, ComponentName):
        return key
    try:
        return ComponentName(key)
    except ValueError:
        raise BuildError(ErrorKind.FORBIDDEN_FIELD, key, "not a URI component") from None


def _check_scheme(scheme: str) -> None:
    if len(scheme) == 0:
        raise ParseError(ErrorKind.EMPTY_SCHEME, scheme)
    for pos, char in enumerate(scheme):
        if char not in SCHEME_CHARS:
            raise ParseError(ErrorKind.INVALID_SCHEME_CHARACTER, char, f"at offset {pos} of {scheme!r}")


def _check_delimiters(fields: dict[ComponentName, str]) -> None:
    for name, delimiters in _DELIMITERS.items():
        value: str | None = fields.get(name)
        if value is None or not any(char in value for char in delimiters):
            continue
        kind: ErrorKind = ErrorKind.DELIMITER_IN_COMPONENT
        if name in (ComponentName.USERNAME, ComponentName.PASSWORD):
            kind = ErrorKind.MALFORMED_USERINFO
        raise ParseError(kind, value, f"{name.value} may not contain any of {delimiters!r}")


def _check_path(path: str, path_is_rooted: bool, authority: Authority | None) -> None:
    """Rejects paths that would serialize into text that parses back differently."""
    if authority is None:
        if path.startswith("/"):
            raise ParseError(
                ErrorKind.DELIMITER_IN_COMPONENT, path, "a leading '/' without an authority reads back differently"
            )
        return
    if path_is_rooted or len(path) == 0:
        return
    # "]" ends an IP literal, so an unrooted path can follow one when there is no port.
    if isinstance(authority.host, IPv6Address) and authority.port == 0 and path[0] not in ":/":
        return
    raise BuildError(ErrorKind.FORBIDDEN_FIELD, ComponentName.PATH.value, "a path after an authority must be rooted")


def _build_authority(fields: dict[ComponentName, str]) -> Authority | None:
    username: str | None = fields.get(ComponentName.USERNAME)
    password: str | None = fields.get(ComponentName.PASSWORD)
    if username is not None and password is None:
        raise BuildError(ErrorKind.MISSING_REQUIRED_FIELD, ComponentName.PASSWORD.value, "username is set")
    if password is not None and username is None:
        raise BuildError(ErrorKind.MISSING_REQUIRED_FIELD, ComponentName.USERNAME.value, "password is set")

    host_text: str | None = fields.get(ComponentName.HOST)
    if host_text is None:
        for name in _NEEDS_HOST:
            if name in fields:
                raise BuildError(ErrorKind.MISSING_REQUIRED_FIELD, ComponentName.HOST.value, f"{name.value} is set")
        return None

    host: Host = parse_host(host_text)
    if isinstance(host, RegisteredName):
        # Once userinfo has taken the first "@", a later one is part of the host.
        delimiters: str = _REGISTERED_NAME_DELIMITERS
        if username is not None:
            delimiters = delimiters.replace("@", "")
        if any(char in host_text for char in delimiters):
            raise ParseError(
                ErrorKind.DELIMITER_IN_COMPONENT, host_text, f"host may not contain any of {delimiters!r}"
            )

    return Authority(
        host=host,
        port=parse_port(fields.get(ComponentName.PORT, "")),
        username=username,
        password=password,
    )


def build(
    components: Mapping[ComponentName | str, str | None],
    category: UriCategory = UriCategory.HIERARCHICAL,
    path_is_rooted: bool = False,
) -> Uri:
    """Build a Uri from a component map without going through text.
    Keys are ComponentName members or their string values; None values count as absent.
    Raises BuildError for missing or forbidden components and ParseError for malformed ones.
    """
    if not isinstance(category, UriCategory):
        raise TypeError(f"category must be a UriCategory, not {category!r}")
    try:
        fields: dict[ComponentName, str] = {
            _component_name(key): value for key, value in components.items() if value is not None
        }

        scheme: str | None = fields.get(ComponentName.SCHEME)
        if scheme is None:
            raise BuildError(ErrorKind.MISSING_REQUIRED_FIELD, ComponentName.SCHEME.value)
        _check_scheme(scheme)

        part: HierarchicalPart | OpaquePart
        if category is UriCategory.NON_HIERARCHICAL:
            for name in _HIERARCHICAL_ONLY:
                if name in fields:
                    raise BuildError(ErrorKind.FORBIDDEN_FIELD, name.value, "URI is non-hierarchical")
            content: str | None = fields.get(ComponentName.CONTENT)
            if content is None:
                raise BuildError(ErrorKind.MISSING_REQUIRED_FIELD, ComponentName.CONTENT.value)
            _check_delimiters(fields)
            part = OpaquePart(content)
        else:
            if ComponentName.CONTENT in fields:
                raise BuildError(ErrorKind.FORBIDDEN_FIELD, ComponentName.CONTENT.value, "URI is hierarchical")
            path: str | None = fields.get(ComponentName.PATH)
            if path is None:
                raise BuildError(ErrorKind.MISSING_REQUIRED_FIELD, ComponentName.PATH.value)
            _check_delimiters(fields)
            authority: Authority | None = _build_authority(fields)
            _check_path(path, path_is_rooted, authority)
            part = HierarchicalPart(path=path, path_is_rooted=path_is_rooted, authority=authority)

        return Uri(
            scheme=scheme,
            part=part,
            query=fields.get(ComponentName.QUERY, ""),
            fragment=fields.get(ComponentName.FRAGMENT, ""),
        )
    except UriError as e:
        logger.debug("rejected components %r: %s", components, e)
        raise


def components_of(uri: Uri) -> dict[ComponentName, str]:
    """The component map that build() would turn back into `uri`."""
    fields: dict[ComponentName, str] = {
        ComponentName.SCHEME: uri.scheme,
        ComponentName.QUERY: uri.query,
        ComponentName.FRAGMENT: uri.fragment,
    }
    if isinstance(uri.part, OpaquePart):
        fields[ComponentName.CONTENT] = uri.part.content
        return fields

    fields[ComponentName.PATH] = uri.part.path
    authority: Authority | None = uri.part.authority
    if authority is not None:
        fields[ComponentName.HOST] = authority.host.serialize()
        if authority.port != 0:
            fields[ComponentName.PORT] = str(authority.port)
        if authority.username is not None and authority.password is not None:
            fields[ComponentName.USERNAME] = authority.username
            fields[ComponentName.PASSWORD] = authority.password
    return fields


def with_replacements(base: Uri, overrides: Mapping[ComponentName | str, str | None]) -> Uri:
    """A new Uri equal to `base` except for `overrides`. A None override removes that component.
    Category and path rootedness always come from `base`.
    """
    fields: dict[ComponentName, str] = components_of(base)
    for key, value in overrides.items():
        name: ComponentName = _component_name(key)
        if value is None:
            fields.pop(name, None)
        else:
            fields[name] = value

    path_is_rooted: bool = isinstance(base.part, HierarchicalPart) and base.part.path_is_rooted
    return build(fields, base.category, path_is_rooted)
