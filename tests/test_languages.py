import pytest

from valigo.languages import (
    LANGUAGES_KEY,
    AcceptLanguageMiddleware,
    get_preferred_languages,
    parse_lang,
    parse_quotient,
    priority_languages,
)


@pytest.mark.parametrize(
    "header, expected",
    [
        ("en-US,en;q=0.9,es;q=0.8,fr;q=0.7", ["en", "es", "fr"]),
        ("en;q=0.9,es;q=0.8,fr;q=0.7,en-US", ["en", "es", "fr"]),
        ("en-US,en;q=0.9,es;q=0.8,fr;q=0.7,en-US", ["en", "es", "fr"]),
        ("", []),
    ],
)
def test_priority_languages(header, expected):
    assert sorted(priority_languages(header)) == sorted(expected)


def test_priority_languages_order():
    assert priority_languages("en-US,en;q=0.9,es;q=0.8,fr;q=0.7") == ["en", "es", "fr"]
    assert priority_languages("fr;q=0.5,de;q=0.9,es") == ["es", "de", "fr"]


@pytest.mark.parametrize(
    "entry, expected",
    [("en;q=0.9", 0.9), ("en;q=0.8", 0.8), ("en;q=0.7", 0.7), ("en", 1.0)],
)
def test_parse_quotient(entry, expected):
    assert parse_quotient(entry.split(";")) == expected


def test_parse_quotient_invalid():
    with pytest.raises(ValueError):
        parse_quotient(["en", "q=abc"])
    with pytest.raises(ValueError):
        parse_quotient(["en", "q"])


def test_parse_lang():
    assert parse_lang("EN") == "en"
    assert parse_lang("en-US") == "en"
    with pytest.raises(ValueError):
        parse_lang("x")


def test_middleware_sets_languages():
    seen = {}

    def app(environ, start_response):
        seen["languages"] = get_preferred_languages(environ)
        return [b"ok"]

    middleware = AcceptLanguageMiddleware(app)
    result = middleware({"HTTP_ACCEPT_LANGUAGE": "en-US,en;q=0.9,ru;q=0.8"}, None)

    assert result == [b"ok"]
    assert seen["languages"] == ["en", "ru"]


def test_middleware_without_header():
    seen = {}

    def app(environ, start_response):
        seen["languages"] = get_preferred_languages(environ)
        seen["has_key"] = LANGUAGES_KEY in environ
        return [b"plain"]

    result = AcceptLanguageMiddleware(app)({}, None)
    assert result == [b"plain"]
    assert seen == {"languages": None, "has_key": True}


def test_get_preferred_languages():
    assert get_preferred_languages({}) is None
    assert get_preferred_languages(None) is None
    ctx = {LANGUAGES_KEY: ["en-US", "en", "ru"]}
    assert get_preferred_languages(ctx) == ["en-US", "en", "ru"]
    assert get_preferred_languages({LANGUAGES_KEY: "en"}) is None