"""uricore.uri
The immutable Uri value and its canonical serialization.
"""

import dataclasses
import enum

from typing import Mapping, Self

from .errors import CategoryError, ErrorKind
from .host import Host
from .query import build_query_dict


class UriCategory(enum.Enum):
    HIERARCHICAL = "hierarchical"
    NON_HIERARCHICAL = "non-hierarchical"


@dataclasses.dataclass(frozen=True)
class Authority:
    """[username:password@]host[:port]. A port of 0 means no port was given."""

    host: Host
    port: int = 0
    username: str | None = None
    password: str | None = None

    def serialize(self: Self) -> str:
        result: str = ""
        if self.username is not None:
            result += f"{self.username}:{self.password}@"
        result += self.host.serialize()
        if self.port != 0:
            result += f":{self.port}"
        return result


@dataclasses.dataclass(frozen=True)
class HierarchicalPart:
    path: str
    path_is_rooted: bool = False
    authority: Authority | None = None


@dataclasses.dataclass(frozen=True)
class OpaquePart:
    content: str


@dataclasses.dataclass(frozen=True)
class Uri:
    """A parsed URI. Use uricore.parse or uricore.build rather than instantiating this directly.

    Which accessors are usable depends on the category: content is only for non-hierarchical
    URIs, the authority and path accessors are only for hierarchical ones.
    """

    scheme: str
    part: HierarchicalPart | OpaquePart
    query: str = ""
    fragment: str = ""
    query_dict: Mapping[str, str] = dataclasses.field(init=False, repr=False, compare=False)

    def __post_init__(self: Self) -> None:
        object.__setattr__(self, "query_dict", build_query_dict(self.query))

    @property
    def category(self: Self) -> UriCategory:
        if isinstance(self.part, OpaquePart):
            return UriCategory.NON_HIERARCHICAL
        return UriCategory.HIERARCHICAL

    def _hierarchical(self: Self, accessor: str) -> HierarchicalPart:
        if not isinstance(self.part, HierarchicalPart):
            raise CategoryError(ErrorKind.WRONG_CATEGORY, accessor, f"{self.scheme!r} URI is non-hierarchical")
        return self.part

    @property
    def content(self: Self) -> str:
        if not isinstance(self.part, OpaquePart):
            raise CategoryError(ErrorKind.WRONG_CATEGORY, "content", f"{self.scheme!r} URI is hierarchical")
        return self.part.content

    @property
    def path(self: Self) -> str:
        return self._hierarchical("path").path

    @property
    def path_is_rooted(self: Self) -> bool:
        return self._hierarchical("path_is_rooted").path_is_rooted

    @property
    def has_authority(self: Self) -> bool:
        return self._hierarchical("has_authority").authority is not None

    @property
    def host(self: Self) -> Host | None:
        authority: Authority | None = self._hierarchical("host").authority
        return authority.host if authority is not None else None

    @property
    def port(self: Self) -> int:
        authority: Authority | None = self._hierarchical("port").authority
        return authority.port if authority is not None else 0

    @property
    def username(self: Self) -> str | None:
        authority: Authority | None = self._hierarchical("username").authority
        return authority.username if authority is not None else None

    @property
    def password(self: Self) -> str | None:
        authority: Authority | None = self._hierarchical("password").authority
        return authority.password if authority is not None else None

    @property
    def userinfo(self: Self) -> str | None:
        """username:password"""
        authority: Authority | None = self._hierarchical("userinfo").authority
        if authority is None or authority.username is None:
            return None
        return f"{authority.username}:{authority.password}"

    @property
    def authority(self: Self) -> str | None:
        """userinfo@host:port"""
        authority: Authority | None = self._hierarchical("authority").authority
        if authority is None:
            return None
        return authority.serialize()

    def serialize(self: Self) -> str:
        result: str = f"{self.scheme}:"
        if isinstance(self.part, OpaquePart):
            result += self.part.content
        else:
            if self.part.authority is not None:
                result += f"//{self.part.authority.serialize()}"
            if self.part.path_is_rooted:
                result += "/"
            result += self.part.path
        if len(self.query) > 0:
            result += f"?{self.query}"
        if len(self.fragment) > 0:
            result += f"#{self.fragment}"
        return result

    def __str__(self: Self) -> str:
        return self.serialize()
