"""Field lookup on model classes and the building blocks of field validators."""

from __future__ import annotations

import types
import typing
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List

from valigo.errors import FieldValidationFn, ValidationError


def _strip_optional(annotation: Any) -> tuple[Any, bool]:
    """Return the annotation without ``None`` and whether ``None`` was allowed."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        all_args = typing.get_args(annotation)
        args = [arg for arg in all_args if arg is not type(None)]
        if len(args) != len(all_args):
            base = args[0] if len(args) == 1 else typing.Union[tuple(args)]
            return base, True
    return annotation, False


def _hints(cls: Any) -> dict[str, Any]:
    """Collect the class annotations along the MRO, base classes first."""
    hints: dict[str, Any] = {}
    for klass in reversed(getattr(cls, "__mro__", (cls,))):
        hints.update(vars(klass).get("__annotations__", {}))
    return hints


@dataclass(frozen=True)
class Field:
    """A field of a model class, addressed by a dotted path from the root model."""

    owner: type
    path: str
    annotation: Any

    @property
    def name(self) -> str:
        return self.path.rsplit(".", 1)[-1]

    @property
    def optional(self) -> bool:
        """Whether the field may hold ``None``."""
        return _strip_optional(self.annotation)[1]

    @property
    def base_type(self) -> Any:
        """The field's annotation with ``None`` removed."""
        return _strip_optional(self.annotation)[0]

    @property
    def _parts(self) -> list[str]:
        return self.path.split(".")

    def get(self, obj: Any) -> Any:
        """Read the field from ``obj``; ``None`` if an enclosing object is missing."""
        target = obj
        *parents, last = self._parts
        for part in parents:
            target = getattr(target, part)
            if target is None:
                return None
        return getattr(target, last)

    def set(self, obj: Any, value: Any) -> None:
        """Write ``value`` into the field of ``obj``."""
        target = obj
        *parents, last = self._parts
        for part in parents:
            target = getattr(target, part)
            if target is None:
                raise LookupError(f"cannot set {self.path!r}: {part!r} is None")
        setattr(target, last, value)

    def ref(self, obj: Any) -> FieldRef:
        """Bind the field to an object."""
        return FieldRef(obj, self)


@dataclass(frozen=True)
class FieldRef:
    """A field bound to one object, readable and writable in place."""

    obj: Any
    field: Field

    def get(self) -> Any:
        return self.field.get(self.obj)

    def set(self, value: Any) -> None:
        self.field.set(self.obj, value)


def resolve_field(model_cls: type, path: str | Field) -> Field:
    """Find the field named by a dotted ``path`` in ``model_cls``."""
    if isinstance(path, Field):
        if path.owner is not model_cls:
            raise LookupError(
                f"field {path.path!r} belongs to {path.owner.__name__}, "
                f"not {getattr(model_cls, '__name__', model_cls)!r}"
            )
        return path
    if not isinstance(model_cls, type):
        raise TypeError(f"model must be a class, not {type(model_cls).__name__}")
    current: Any = model_cls
    annotation: Any = None
    for part in path.split("."):
        if not isinstance(current, type):
            raise LookupError(f"field {path!r}: {part!r} is not inside a structure")
        hints = _hints(current)
        if part not in hints:
            raise LookupError(f"field {path!r} not found in {model_cls.__name__}")
        annotation = hints[part]
        current, _ = _strip_optional(annotation)
    return Field(model_cls, path, annotation)


class Helper(ABC):
    """Builds translated validation errors for fields."""

    @abstractmethod
    def error_t(
        self, ctx: Any, field: Field, value: Any, locale_key: str, *args: Any
    ) -> ValidationError:
        """Return an error for ``field`` with the message named by ``locale_key``."""


def _raw(ref: Any) -> Any:
    return ref.get() if isinstance(ref, FieldRef) else ref


class FieldFnMaker:
    """Turns checks on a field's value into field validation functions.

    ``get_value`` reads the value to check from what a validator receives and
    raises ``LookupError`` when no value can be read.
    """

    def __init__(self, get_value: Callable[[Any], Any], field: Field, helper: Helper):
        self.get_value = get_value
        self.field = field
        self.helper = helper

    def make(
        self, check: Callable[[Any], bool], format: str, *args: Any
    ) -> FieldValidationFn:
        """Build a validator that reports ``format`` when ``check`` fails."""

        def validate(ctx: Any, helper: Helper, ref: Any) -> List[ValidationError]:
            try:
                value = self.get_value(ref)
            except LookupError:
                return [self.helper.error_t(ctx, self.field, _raw(ref), format, *args)]
            if check(value):
                return []
            return [helper.error_t(ctx, self.field, value, format, *args)]

        return validate

    def custom_make(
        self, fn: Callable[[Any, Helper, Any], Iterable[ValidationError] | None]
    ) -> FieldValidationFn:
        """Build a validator that hands the read value to ``fn``."""

        def validate(ctx: Any, helper: Helper, ref: Any) -> List[ValidationError]:
            try:
                value = self.get_value(ref)
            except LookupError:
                return [
                    self.helper.error_t(ctx, self.field, _raw(ref), "failed to read value")
                ]
            return list(fn(ctx, helper, value) or [])

        return validate


class FieldConfigurator:
    """Registers validators for one field through an append function."""

    def __init__(self, maker: FieldFnMaker, append_fn: Callable[[FieldValidationFn], None]):
        self.maker = maker
        self.append_fn = append_fn

    def append(self, check: Callable[[Any], bool], format: str, *args: Any) -> None:
        self.append_fn(self.maker.make(check, format, *args))

    def custom_append(self, fn: FieldValidationFn) -> None:
        self.append_fn(fn)

    def with_when(self, when_fn: Callable[[Any, Any], bool]) -> FieldConfigurator:
        """Return a configurator whose validators only run when ``when_fn`` holds."""
        append = self.append_fn

        def guarded_append(fn: FieldValidationFn) -> None:
            def guarded(ctx: Any, helper: Helper, value: Any) -> List[ValidationError]:
                if not when_fn(ctx, value):
                    return []
                return fn(ctx, helper, value)

            append(guarded)

        return FieldConfigurator(self.maker, guarded_append)


class FieldCustomHelper:
    """Error factory bound to one field, handed to custom field validators."""

    def __init__(self, field: Field, helper: Helper):
        self.field = field
        self.helper = helper

    def error_t(self, ctx: Any, value: Any, locale_key: str, *args: Any) -> ValidationError:
        return self.helper.error_t(ctx, self.field, value, locale_key, *args)