"""Allocation of empty values for the fields of dataclass instances."""

from __future__ import annotations

import dataclasses
import typing
import uuid
from typing import Any

from valigo.fields import resolve_field

_SIMPLE = (int, float, str, bool, bytes, complex)
_CONTAINERS = (list, dict, set, tuple, frozenset)


def _is_dict(annotation: Any) -> bool:
    return annotation is dict or typing.get_origin(annotation) is dict


def _new(annotation: Any, allocating: frozenset) -> Any:
    """Return a zero value of ``annotation``, or ``None`` if none can be made."""
    origin = typing.get_origin(annotation) or annotation
    if annotation in _SIMPLE:
        return annotation()
    if origin in _CONTAINERS:
        return origin()
    if annotation is uuid.UUID:
        return uuid.UUID(int=0)
    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        if annotation in allocating:
            return None
        nested = allocating | {annotation}
        kwargs = {}
        for f in dataclasses.fields(annotation):
            if not f.init:
                continue
            if f.default is not dataclasses.MISSING:
                continue
            if f.default_factory is not dataclasses.MISSING:
                continue
            field = resolve_field(annotation, f.name)
            kwargs[f.name] = None if field.optional else _new(field.base_type, nested)
        instance = annotation(**kwargs)
        _fill(instance, nested, set())
        return instance
    if isinstance(annotation, type):
        try:
            return annotation()
        except TypeError:
            return None
    return None


def _assign(obj: Any, name: str, value: Any) -> None:
    try:
        setattr(obj, name, value)
    except dataclasses.FrozenInstanceError as exc:
        raise TypeError(f"{type(obj).__name__} is frozen and can't be set") from exc


def _fill(obj: Any, allocating: frozenset, visited: set) -> None:
    if id(obj) in visited:
        return
    visited.add(id(obj))
    cls = type(obj)
    for f in dataclasses.fields(obj):
        if f.name.startswith("_"):
            continue
        field = resolve_field(cls, f.name)
        value = getattr(obj, f.name)
        if value is None and field.optional:
            value = _new(field.base_type, allocating)
            if value is not None:
                _assign(obj, f.name, value)
        if _is_dict(field.base_type):
            _assign(obj, f.name, {})
        elif dataclasses.is_dataclass(value) and not isinstance(value, type):
            _fill(value, allocating | {type(value)}, visited)


def zero(obj: Any) -> None:
    """Fill the empty fields of a dataclass instance in place.

    Optional fields holding ``None`` get a zero value of their type, nested
    dataclasses are filled recursively and every ``dict`` field is replaced by
    an empty dict. Fields whose names start with an underscore are left alone.
    Raises ``TypeError`` if ``obj`` is not a settable dataclass instance.
    """
    if isinstance(obj, type):
        raise TypeError(f"input is not addressable: {obj!r} is a class, not an instance")
    if not dataclasses.is_dataclass(obj):
        raise TypeError(f"zero only works with dataclass instances, not {type(obj).__name__}")
    _fill(obj, frozenset({type(obj)}), set())