import logging

import pytest

from uricore import (
    CategoryError,
    ErrorKind,
    IPv4Address,
    IPv6Address,
    ParseError,
    RegisteredName,
    UriCategory,
    parse,
)


def test_parse_full_uri():
    uri = parse("http://www.example.com/test?query#fragment")
    assert uri.category is UriCategory.HIERARCHICAL
    assert uri.scheme == "http"
    assert uri.host == RegisteredName("www.example.com")
    assert uri.path == "test"
    assert uri.path_is_rooted
    assert uri.query == "query"
    assert uri.fragment == "fragment"
    assert uri.port == 0
    assert uri.username is None
    assert uri.password is None


def test_parse_port_and_empty_path():
    uri = parse("http://www.example.com:8080/")
    assert uri.path == ""
    assert uri.path_is_rooted
    assert uri.port == 8080
    assert str(uri) == "http://www.example.com:8080/"


def test_parse_ipv6_literal():
    uri = parse("http://[::1]:8080/")
    assert isinstance(uri.host, IPv6Address)
    assert uri.host.format() == "::1"
    assert uri.port == 8080
    assert str(uri) == "http://[::1]:8080/"


def test_ipv6_literal_is_canonicalized():
    uri = parse("http://[2001:0DB8:0:0:0:0:0:1]/")
    assert str(uri) == "http://[2001:db8::1]/"


def test_parse_ipv4_host():
    uri = parse("http://192.168.0.1/index.html")
    assert uri.host == IPv4Address((192, 168, 0, 1))
    assert uri.path == "index.html"


def test_parse_userinfo():
    uri = parse("ftp://user:pw@files.example.com:21/pub/file.txt")
    assert uri.username == "user"
    assert uri.password == "pw"
    assert uri.userinfo == "user:pw"
    assert uri.authority == "user:pw@files.example.com:21"
    assert uri.host == RegisteredName("files.example.com")
    assert uri.port == 21
    assert uri.path == "pub/file.txt"
    assert str(uri) == "ftp://user:pw@files.example.com:21/pub/file.txt"


def test_empty_password():
    uri = parse("ftp://anonymous:@example.com/")
    assert uri.username == "anonymous"
    assert uri.password == ""


def test_at_sign_in_path_is_not_userinfo():
    uri = parse("http://example.com/people/@someone")
    assert uri.username is None
    assert uri.path == "people/@someone"


def test_urn_has_no_authority():
    uri = parse("urn:ietf:rtc:2141", UriCategory.HIERARCHICAL)
    assert uri.scheme == "urn"
    assert uri.path == "ietf:rtc:2141"
    assert not uri.path_is_rooted
    assert not uri.has_authority
    assert uri.host is None
    assert uri.authority is None
    assert uri.port == 0


def test_rooted_path_without_authority():
    uri = parse("file:/etc/hosts")
    assert not uri.has_authority
    assert uri.path_is_rooted
    assert uri.path == "etc/hosts"
    assert str(uri) == "file:/etc/hosts"


def test_empty_host():
    uri = parse("file:///etc/hosts")
    assert uri.has_authority
    assert uri.host == RegisteredName("")
    assert uri.path == "etc/hosts"
    assert str(uri) == "file:///etc/hosts"


def test_authority_without_path():
    uri = parse("http://example.com?q=1")
    assert uri.has_authority
    assert uri.path == ""
    assert not uri.path_is_rooted
    assert uri.query == "q=1"
    assert str(uri) == "http://example.com?q=1"


def test_empty_content():
    uri = parse("about:")
    assert uri.path == ""
    assert not uri.has_authority
    assert str(uri) == "about:"


def test_empty_port_means_unspecified():
    uri = parse("http://example.com:/x")
    assert uri.port == 0
    assert str(uri) == "http://example.com/x"


@pytest.mark.parametrize(
    "text",
    [
        "http://a/a-rather-long-path/with/several/segments",
        "http:///only-a-path",
        "http://x",
        "mailto:someone@example.com",
        "news:comp.lang.python",
        "tel:+1-816-555-1212",
        "ssh://git:secret@[fe80::1]:22/repo.git?ref=main#L10",
    ],
)
def test_serialize_reproduces_canonical_text(text):
    assert str(parse(text)) == text


@pytest.mark.parametrize(
    "text, kind",
    [
        ("", ErrorKind.EMPTY_INPUT),
        ("a", ErrorKind.MISSING_SCHEME),
        (":foo", ErrorKind.EMPTY_SCHEME),
        ("ht tp://example.com", ErrorKind.INVALID_SCHEME_CHARACTER),
        ("a/b:c", ErrorKind.INVALID_SCHEME_CHARACTER),
        ("a://bc@/", ErrorKind.MALFORMED_USERINFO),
        ("http://[::1", ErrorKind.UNTERMINATED_IP_LITERAL),
        ("http://[::1/x", ErrorKind.UNTERMINATED_IP_LITERAL),
        ("http://example.com:80a/", ErrorKind.INVALID_PORT),
        ("http://example.com:65536/", ErrorKind.PORT_OUT_OF_RANGE),
        ("a:b#frag?query", ErrorKind.FRAGMENT_BEFORE_QUERY),
        ("a:b?x=1&x=2", ErrorKind.DUPLICATE_QUERY_KEY),
        ("http://300.1.1.1/", ErrorKind.IPV4_OCTET_OUT_OF_RANGE),
        ("http://[::::]/", ErrorKind.MULTIPLE_ELISIONS),
        ("http://[2004::FEG1]/", ErrorKind.INVALID_HEX_GROUP),
    ],
)
def test_parse_rejects(text, kind):
    with pytest.raises(ParseError) as excinfo:
        parse(text)
    assert excinfo.value.kind is kind


def test_invalid_scheme_character_names_the_character():
    with pytest.raises(ParseError) as excinfo:
        parse("ht tp://example.com")
    assert excinfo.value.text == " "


def test_maximum_port():
    assert parse("http://example.com:65535/").port == 65535


def test_non_hierarchical_content_is_opaque():
    uri = parse("data:text/plain;charset=utf-8,hello//world?x=1#top", UriCategory.NON_HIERARCHICAL)
    assert uri.category is UriCategory.NON_HIERARCHICAL
    assert uri.content == "text/plain;charset=utf-8,hello//world"
    assert uri.query == "x=1"
    assert uri.query_dict == {"x": "1"}
    assert uri.fragment == "top"
    assert str(uri) == "data:text/plain;charset=utf-8,hello//world?x=1#top"


def test_non_hierarchical_content_skips_authority_rules():
    uri = parse("x://bc@/", UriCategory.NON_HIERARCHICAL)
    assert uri.content == "//bc@/"


@pytest.mark.parametrize(
    "accessor",
    ["path", "path_is_rooted", "has_authority", "host", "port", "username", "password", "userinfo", "authority"],
)
def test_hierarchical_accessors_on_non_hierarchical(accessor):
    uri = parse("urn:isbn:0451450523", UriCategory.NON_HIERARCHICAL)
    with pytest.raises(CategoryError) as excinfo:
        getattr(uri, accessor)
    assert excinfo.value.kind is ErrorKind.WRONG_CATEGORY
    assert excinfo.value.text == accessor


def test_content_on_hierarchical():
    with pytest.raises(CategoryError) as excinfo:
        parse("http://example.com/").content
    assert excinfo.value.kind is ErrorKind.WRONG_CATEGORY


def test_equality_and_hash():
    a = parse("http://example.com/a?b=c")
    b = parse("http://example.com/a?b=c")
    assert a == b
    assert hash(a) == hash(b)
    assert a != parse("http://example.com/a?b=d")
    assert parse("x:y", UriCategory.NON_HIERARCHICAL) != parse("x:y")


def test_uri_is_immutable():
    uri = parse("http://example.com/")
    with pytest.raises(AttributeError):
        uri.scheme = "https"


def test_rejection_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="uricore"):
        with pytest.raises(ParseError):
            parse("a")
    assert "missing scheme" in caplog.text


@pytest.mark.parametrize("category", [None, "non-hierarchical", 1])
def test_parse_rejects_unknown_category(category):
    with pytest.raises(TypeError):
        parse("a:b", category)
