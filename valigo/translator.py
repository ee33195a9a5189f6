"""Message translation with printf-style formatting."""

from __future__ import annotations

import json
import math
import re
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from valigo.languages import get_preferred_languages
from valigo.locales import locales_from_dir

_BUNDLED_ROOT = Path(__file__).parent / "data"

_VERB = re.compile(r"%([-+# 0]*)(\d*)(?:\.(\d*))?([a-zA-Z%]|$)")


def _go_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _value(arg: Any) -> str:
    if arg is None:
        return "<nil>"
    if isinstance(arg, bool):
        return "true" if arg else "false"
    if isinstance(arg, float):
        return _go_float(arg)
    if isinstance(arg, str):
        return arg
    if isinstance(arg, (list, tuple)):
        return "[" + " ".join(_value(item) for item in arg) + "]"
    if isinstance(arg, Mapping):
        items = sorted(arg.items(), key=lambda kv: str(kv[0]))
        return "map[" + " ".join(f"{_value(k)}:{_value(v)}" for k, v in items) + "]"
    return str(arg)


def _go_type(arg: Any) -> str:
    if isinstance(arg, bool):
        return "bool"
    if isinstance(arg, int):
        return "int"
    if isinstance(arg, float):
        return "float64"
    if isinstance(arg, str):
        return "string"
    if isinstance(arg, (list, tuple)):
        kinds = {_go_type(item) for item in arg}
        return "[]" + (kinds.pop() if len(kinds) == 1 else "interface {}")
    if isinstance(arg, Mapping):
        return "map[string]interface {}"
    return type(arg).__name__


def _bad(verb: str, arg: Any) -> str:
    if arg is None:
        return f"%!{verb}(<nil>)"
    return f"%!{verb}({_go_type(arg)}={_value(arg)})"


def _format_arg(verb: str, arg: Any, prec: str | None) -> str:
    if verb == "v":
        return _value(arg)
    if isinstance(arg, (list, tuple)) and verb in "sdfegqxX":
        return "[" + " ".join(_format_arg(verb, item, prec) for item in arg) + "]"
    if verb == "s":
        if isinstance(arg, (bool, int, float)) or arg is None:
            return _bad(verb, arg)
        text = arg.decode() if isinstance(arg, bytes) else str(arg)
        return text[: int(prec)] if prec else text
    if verb == "d":
        if isinstance(arg, int) and not isinstance(arg, bool):
            return str(arg)
        return _bad(verb, arg)
    if verb in "feEgG":
        if not isinstance(arg, float):
            return _bad(verb, arg)
        if verb in "gG" and prec is None:
            return _go_float(arg)
        digits = 6 if prec is None else int(prec or 0)
        return format(arg, f".{digits}{verb}")
    if verb == "t":
        return ("true" if arg else "false") if isinstance(arg, bool) else _bad(verb, arg)
    if verb == "q":
        if isinstance(arg, str):
            return json.dumps(arg, ensure_ascii=False)
        return _bad(verb, arg)
    if verb in "xX":
        if isinstance(arg, int) and not isinstance(arg, bool):
            return format(arg, verb)
        if isinstance(arg, str):
            return format(int.from_bytes(arg.encode(), "big"), verb) if arg else ""
        return _bad(verb, arg)
    return _bad(verb, arg)


def _pad(text: str, flags: str, width: str) -> str:
    if not width:
        return text
    size = int(width)
    if "-" in flags:
        return text.ljust(size)
    return text.rjust(size, "0" if "0" in flags else " ")


def sprintf(format: str, *args: Any) -> str:
    """Format like printf, marking missing, mistyped and surplus arguments."""
    out: list[str] = []
    pos = 0
    used = 0
    for match in _VERB.finditer(format):
        out.append(format[pos : match.start()])
        pos = match.end()
        flags, width, prec, verb = match.groups()
        if verb == "%":
            out.append("%")
            continue
        if not verb:
            out.append("%!(NOVERB)")
            continue
        if used >= len(args):
            out.append(f"%!{verb}(MISSING)")
            continue
        arg = args[used]
        used += 1
        out.append(_pad(_format_arg(verb, arg, prec), flags, width))
    out.append(format[pos:])
    extra = args[used:]
    if extra:
        rendered = ", ".join(
            "<nil>" if arg is None else f"{_go_type(arg)}={_value(arg)}" for arg in extra
        )
        out.append(f"%!(EXTRA {rendered})")
    return "".join(out)


def _bundled_locales() -> dict[str, dict[str, str]]:
    if not (_BUNDLED_ROOT / "locales").is_dir():
        return {}
    return locales_from_dir(_BUNDLED_ROOT)


class InMemStorage:
    """Translations held in memory, keyed by language then by message key.

    Without ``data`` the catalogues shipped with the package are loaded.
    """

    def __init__(self, data: dict[str, dict[str, str]] | None = None):
        self.translations = data if data is not None else _bundled_locales()

    def add(self, lang: str, data: Mapping[str, str] | None) -> None:
        """Add or replace translations for ``lang``."""
        if data is None:
            return
        self.translations.setdefault(lang, {}).update(data)

    def merge(self, locales: Mapping[str, Mapping[str, str]]) -> None:
        """Add translations for several languages at once."""
        for lang, data in locales.items():
            self.add(lang, data)

    def get(self, prefer: Iterable[str] | None, format: str, *args: Any) -> str:
        """Translate ``format`` into the first preferred language that has it."""
        translated = format
        for lang in prefer or ():
            found = self.translations.get(lang, {}).get(format)
            if found is not None:
                translated = found
                break
        return sprintf(translated, *args)


class Translator:
    """Translates messages into the languages a context prefers."""

    def __init__(
        self,
        storage: Any = None,
        preferred_languages: Callable[[Any], list[str] | None] | None = None,
        default_lang: str = "en",
    ):
        self.storage = storage if storage is not None else InMemStorage()
        self.preferred_languages = preferred_languages or get_preferred_languages
        self.default_lang = default_lang if len(default_lang) > 1 else "en"

    def languages(self, ctx: Any) -> list[str]:
        """Preferred languages of ``ctx``, ending with the default language."""
        preferred = list(self.preferred_languages(ctx) or [])
        if self.default_lang not in preferred:
            preferred.append(self.default_lang)
        return preferred

    def t(self, ctx: Any, format: str, *args: Any) -> str:
        """Return the translated, formatted message."""
        return self.storage.get(self.languages(ctx), format, *args)

    def error_t(self, ctx: Any, format: str, *args: Any) -> ValueError:
        """Return an error carrying the translated message."""
        return ValueError(self.t(ctx, format, *args))