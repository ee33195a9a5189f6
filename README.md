# valigo

Building blocks for validation rules on Python objects whose error messages
are looked up in translation tables and rendered in the caller's preferred
language.

Each broken rule yields a `valigo.errors.ValidationError` carrying a
`message`, the `location` of the offending field and the rejected `value`.
`str(error)` gives the message alone when there is neither location nor
value, and `"message (location: value)"` otherwise.

## Installation

```
pip install valigo
```

## What is in the package

| Module | Contents |
| --- | --- |
| `valigo.errors` | `ValidationError` |
| `valigo.fields` | `Field`, `FieldRef`, `resolve_field`, `Helper`, `FieldFnMaker`, `FieldConfigurator`, `FieldCustomHelper` |
| `valigo.numbers` | `NumberBundle`, `NumberConfigurator` |
| `valigo.uuids` | `UUIDBundle`, `UUIDConfigurator`, `UUIDSliceConfigurator` |
| `valigo.slices` | `SliceFieldConfigurator` |
| `valigo.translator` | `Translator`, `InMemStorage`, `sprintf` |
| `valigo.locales` | `locales_from_dir`, `flatten` |
| `valigo.languages` | `AcceptLanguageMiddleware`, `priority_languages`, `get_preferred_languages`, `parse_lang`, `parse_quotient` |
| `valigo.zero` | `zero` |

## Fields

Fields are named by a dotted path into the annotations of a model class:

```python
from dataclasses import dataclass
from valigo.fields import resolve_field

@dataclass
class Inner:
    port: int = 0

@dataclass
class Config:
    inner: Inner | None = None

field = resolve_field(Config, "inner.port")
```

A `Field` knows its `owner`, `path`, `annotation`, `base_type` (the
annotation without `None`) and whether it is `optional`. `field.get(obj)`
reads the value (returning `None` if an enclosing object is `None`),
`field.set(obj, value)` writes it, and `field.ref(obj)` gives a `FieldRef`
bound to one object. Unknown paths raise `LookupError`.

## Defining rules

Rules are collected through an *append function*: every configurator hands
each validation function it builds to that function, and you decide where to
keep it. A validation function is called as `fn(ctx, helper, ref)` with a
`FieldRef` to the field of the object being checked and returns a list of
`ValidationError`.

Errors are made by a `Helper`, an abstract class with one method,
`error_t(ctx, field, value, locale_key, *args)`:

```python
from dataclasses import dataclass, field
import uuid

from valigo.errors import ValidationError
from valigo.fields import Helper
from valigo.numbers import NumberBundle
from valigo.uuids import UUIDBundle
from valigo.translator import Translator


class TranslatingHelper(Helper):
    def __init__(self, translator):
        self.translator = translator

    def error_t(self, ctx, field, value, locale_key, *args):
        return ValidationError(
            message=self.translator.t(ctx, locale_key, *args),
            location=field.path,
            value=value,
        )


@dataclass
class Server:
    port: int = 0
    id: uuid.UUID = field(default_factory=lambda: uuid.UUID(int=0))


helper = TranslatingHelper(Translator())
rules = []


def collect(field, fn):
    rules.append((field, fn))


NumberBundle(Server, helper, collect).number("port").min(1).max(65535)
UUIDBundle(Server, helper, collect).uuid("id").required()


def validate(ctx, obj):
    errors = []
    for field, fn in rules:
        errors.extend(fn(ctx, helper, field.ref(obj)))
    return errors


for error in validate({}, Server()):
    print(error)
```

### Numbers

`NumberBundle(model_cls, helper, append_fn).number(path)` accepts fields
annotated `int` or `float` (optionally with `None`) and raises `TypeError`
for others. The `NumberConfigurator` offers `min`, `max`, `required`,
`any_of`, `any_of_interval` (strictly between the bounds), `custom` and
`when`. Limits must match the field's type (an `int` is accepted for a
`float` field), otherwise `TypeError` is raised at configuration time. A
field holding `None` fails every rule except custom ones, which receive
`None`.

### UUIDs

`UUIDBundle(...).uuid(path)` accepts `uuid.UUID` fields. `UUIDConfigurator`
offers `required` (anything but the nil UUID), `any_of`, `custom` and `when`.

### Lists

`SliceFieldConfigurator(field, helper, append_fn)` works on a field
annotated as a `list`; here `append_fn` takes only the validation function.
It offers `required` (non-empty), `min_len`, `max_len`, `custom` and `when`.
`custom` receives the list itself, so it may change items in place. An
optional list field holding `None` fails the rules; a non-optional one
holding `None` counts as empty. `UUIDSliceConfigurator` adds `any_of`,
reporting each UUID of the list that is not allowed.

### Conditions and custom rules

`when(fn)` on number and UUID configurators returns a new configurator whose
rules run only when `fn(ctx, value)` is true; on list configurators it
applies to the rules added afterwards. `custom(fn)` calls
`fn(ctx, custom_helper, value)`, where `custom_helper` is a
`FieldCustomHelper` whose `error_t(ctx, value, locale_key, *args)` builds an
error for that field.

The lower-level `FieldFnMaker` and `FieldConfigurator` in `valigo.fields`
let you build rules for other kinds of values the same way.

## Translations

Message keys such as `validation:num:Cannot be less than %v` are resolved by
an `InMemStorage` of per-language tables. `storage.get(prefer, key, *args)`
uses the first language in `prefer` that has the key, falling back to the key
itself, and formats the result with `sprintf`, a printf-style formatter that
marks missing, mistyped and surplus arguments (for example
`%!(EXTRA string=John)`).

```python
from valigo.translator import InMemStorage, Translator

storage = InMemStorage({})
storage.add("en", {"hello": "Hello, %s!"})
storage.merge({"fr": {"hello": "Bonjour, %s !"}})

translator = Translator(storage=storage, default_lang="en")
translator.t({}, "hello", "John")        # "Hello, John!"
```

`Translator(storage, preferred_languages, default_lang)` asks
`preferred_languages(ctx)` for the caller's languages and always tries
`default_lang` last. `t` returns the message; `error_t` returns it wrapped in
a `ValueError`. `InMemStorage()` with no data loads catalogues from a
`data/locales` directory inside the package when one is present and starts
empty otherwise.

Catalogues can be loaded with `valigo.locales.locales_from_dir(root)`, which
reads `root/locales/<lang>/data.yaml`, skips language directories without
that file and joins nested YAML keys with `:`. It raises `ValueError` for a
catalogue that is not a YAML mapping.

## Accept-Language

`priority_languages("en-US,en;q=0.9,es;q=0.8")` returns the two-letter
languages of the header, most preferred first and without repeats
(`["en", "es"]`). Wrap a WSGI application in
`AcceptLanguageMiddleware(app)` to store that list in the environ; pass the
environ as `ctx` and `get_preferred_languages(ctx)` — the translator's
default — returns it.

## Filling empty objects

`valigo.zero.zero(obj)` fills a dataclass instance in place: optional fields
holding `None` get a zero value of their type, nested dataclasses are filled
recursively and every `dict` field becomes an empty dict. Fields starting
with an underscore are left alone. Classes and non-dataclass values raise
`TypeError`.

## What the package does not do

There is no validator object that keeps rules per model class and applies
them to instances, no builder that selects fields and chains conditions on a
whole object, and no rules for plain string fields or lists of strings
(trimming, lengths, regular expressions, e-mail addresses). Collecting the
validation functions and running them over an object is left to the caller,
as in the example above.