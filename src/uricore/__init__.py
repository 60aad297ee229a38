__version__ = "0.1"

import logging

from .build import ComponentName, build, components_of, with_replacements
from .errors import BuildError, CategoryError, ErrorKind, ParseError, UriError
from .host import Host, HostFormat, IPv4Address, IPv6Address, RegisteredName, parse_host
from .parse import parse
from .uri import Authority, HierarchicalPart, OpaquePart, Uri, UriCategory

logging.getLogger(__name__).addHandler(logging.NullHandler())
