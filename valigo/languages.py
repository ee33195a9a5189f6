"""Accept-Language parsing and a WSGI middleware that stores the result."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

LANGUAGES_KEY = "valigo.accept_language"


def parse_lang(lang: str) -> str:
    """Return the two-letter language of an Accept-Language entry."""
    if len(lang) == 2:
        return lang.lower()
    if len(lang) < 2:
        raise ValueError(f"invalid language tag {lang!r}")
    return lang[:2]


def parse_quotient(parts: list[str]) -> float:
    """Return the ``q`` weight of an entry split on ``;``; 1 when absent."""
    if len(parts) <= 1:
        return 1.0
    pieces = parts[1].split("=")
    if len(pieces) < 2:
        raise ValueError(f"invalid quality value {parts[1]!r}")
    try:
        return float(pieces[1])
    except ValueError as exc:
        raise ValueError(f"invalid quality value {parts[1]!r}") from exc


def priority_languages(accept_language: str) -> list[str]:
    """Return the languages of an Accept-Language header, most preferred first."""
    weighted = []
    for entry in accept_language.split(","):
        if not entry.strip():
            continue
        parts = entry.split(";")
        weighted.append((parse_lang(parts[0]), parse_quotient(parts)))
    weighted.sort(key=lambda item: item[1], reverse=True)
    return list(dict.fromkeys(name for name, _ in weighted))


def get_preferred_languages(ctx: Any) -> list[str] | None:
    """Return the languages stored in ``ctx`` by the middleware, if any."""
    if not isinstance(ctx, Mapping):
        return None
    languages = ctx.get(LANGUAGES_KEY)
    return languages if isinstance(languages, list) else None


class AcceptLanguageMiddleware:
    """WSGI middleware putting the preferred languages into the environ."""

    def __init__(self, app: Callable[[dict, Callable], Iterable[bytes]]):
        self.app = app

    def __call__(self, environ: dict, start_response: Callable) -> Iterable[bytes]:
        header = environ.get("HTTP_ACCEPT_LANGUAGE", "")
        languages = priority_languages(header) if header else None
        return self.app({**environ, LANGUAGES_KEY: languages}, start_response)