"""uricore.grammar
Character classes and patterns for the parts of the URI grammar that uricore checks.
Rules are taken from RFC 3986 and RFC 5234, loosened where uricore is loose.
"""

import re

# ALPHA = %x41-5A / %x61-7A
_ALPHA: str = r"[A-Za-z]"

# DIGIT = %x30-39
_DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: str = rf"(?:{_DIGIT}|[A-Fa-f])"

# scheme = *( ALPHA / DIGIT / "+" / "-" / "." )
# (the leading ALPHA of RFC 3986 is not required here)
SCHEME_CHARS: frozenset[str] = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+-.")

# dec-group = 1*3DIGIT
# (range is checked after matching so that "256" can be reported as out of range)
_DEC_GROUP: str = rf"({_DIGIT}{{1,3}})"

# IPv4address = dec-group "." dec-group "." dec-group "." dec-group
IPV4_SHAPE: re.Pattern[str] = re.compile(rf"\A{_DEC_GROUP}\.{_DEC_GROUP}\.{_DEC_GROUP}\.{_DEC_GROUP}\Z")

# h16 = 1*4HEXDIG
H16: re.Pattern[str] = re.compile(rf"\A{_HEXDIG}{{1,4}}\Z")

# port = *DIGIT
PORT: re.Pattern[str] = re.compile(rf"\A{_DIGIT}*\Z")

MAX_PORT: int = 65535

IPV6_GROUP_COUNT: int = 8
