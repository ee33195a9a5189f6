"""Validation rules for UUID fields and lists of UUIDs."""

from __future__ import annotations

import uuid
from typing import Any, Callable, Iterable, List

from valigo.errors import ValidationError
from valigo.fields import (
    Field,
    FieldConfigurator,
    FieldCustomHelper,
    FieldFnMaker,
    FieldRef,
    Helper,
    resolve_field,
)
from valigo.slices import SliceFieldConfigurator

REQUIRED_LOCALE_KEY = "validation:uuid:Should be fulfilled"
ANY_OF_LOCALE_KEY = "validation:uuid:Only %s values is allowed"

NIL = uuid.UUID(int=0)


def _uuid_getter(field: Field) -> Callable[[Any], uuid.UUID]:
    def get_value(ref: Any) -> uuid.UUID:
        value = ref.get() if isinstance(ref, FieldRef) else ref
        if not isinstance(value, uuid.UUID):
            raise LookupError(f"field {field.path!r} does not hold a UUID")
        return value

    return get_value


class UUIDConfigurator:
    """Adds rules for one UUID field; every method returns a configurator."""

    def __init__(self, field: Field, helper: Helper, configurator: FieldConfigurator):
        self.field = field
        self.helper = helper
        self._configurator = configurator

    def _current(self, ref: Any) -> uuid.UUID | None:
        try:
            return self._configurator.maker.get_value(ref)
        except LookupError:
            return None

    def required(self) -> UUIDConfigurator:
        """Require a UUID other than the nil UUID."""
        self._configurator.append(lambda value: value != NIL, REQUIRED_LOCALE_KEY)
        return self

    def any_of(self, *args: uuid.UUID) -> UUIDConfigurator:
        allowed = list(args)
        self._configurator.append(lambda value: value in allowed, ANY_OF_LOCALE_KEY)
        return self

    def custom(
        self,
        fn: Callable[[Any, FieldCustomHelper, uuid.UUID], Iterable[ValidationError] | None],
    ) -> UUIDConfigurator:
        """Add a validator that receives the field's current value."""
        custom_helper = FieldCustomHelper(self.field, self.helper)

        def run(ctx: Any, _helper: Helper, value: uuid.UUID) -> List[ValidationError]:
            return list(fn(ctx, custom_helper, value) or [])

        self._configurator.custom_append(self._configurator.maker.custom_make(run))
        return self

    def when(
        self, when_fn: Callable[[Any, uuid.UUID | None], bool] | None
    ) -> UUIDConfigurator:
        """Return a configurator whose rules only run when ``when_fn`` holds."""
        if when_fn is None:
            return self
        guarded = self._configurator.with_when(
            lambda ctx, ref: when_fn(ctx, self._current(ref))
        )
        return UUIDConfigurator(self.field, self.helper, guarded)


class UUIDBundle:
    """Creates UUID configurators for the fields of a model class."""

    def __init__(
        self,
        model_cls: type,
        helper: Helper,
        append_fn: Callable[[Field, Any], None],
    ):
        self.model_cls = model_cls
        self.helper = helper
        self.append_fn = append_fn

    def uuid(self, field: str | Field) -> UUIDConfigurator:
        """Start rules for the UUID field named by ``field``."""
        resolved = resolve_field(self.model_cls, field)
        if resolved.base_type is not uuid.UUID:
            raise TypeError(f"field {resolved.path!r} is not a UUID field")
        maker = FieldFnMaker(_uuid_getter(resolved), resolved, self.helper)
        configurator = FieldConfigurator(maker, lambda fn: self.append_fn(resolved, fn))
        return UUIDConfigurator(resolved, self.helper, configurator)


class UUIDSliceConfigurator(SliceFieldConfigurator):
    """List rules plus rules applied to every UUID of the list."""

    def any_of(self, *args: uuid.UUID) -> UUIDSliceConfigurator:
        """Report every UUID of the list that is not among ``args``."""
        allowed = list(args)

        def check(ctx: Any, helper: FieldCustomHelper, values: list) -> List[ValidationError]:
            return [
                helper.error_t(
                    ctx, None if value is None else str(value), ANY_OF_LOCALE_KEY, allowed
                )
                for value in values
                if value not in allowed
            ]

        self.custom(check)
        return self