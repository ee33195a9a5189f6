"""Validation rules for list fields."""

from __future__ import annotations

import typing
from typing import Any, Callable, Iterable, List

from valigo.errors import FieldValidationFn, ValidationError
from valigo.fields import (
    Field,
    FieldConfigurator,
    FieldCustomHelper,
    FieldFnMaker,
    FieldRef,
    Helper,
)


def _list_getter(field: Field) -> Callable[[Any], list]:
    base = field.base_type
    if not (base is list or typing.get_origin(base) is list):
        raise TypeError(f"field {field.path!r} is not a list")
    optional = field.optional

    def get_value(ref: Any) -> list:
        values = ref.get() if isinstance(ref, FieldRef) else ref
        if values is None:
            if optional:
                raise LookupError(f"field {field.path!r} holds no list")
            return []
        return values

    return get_value


class SliceFieldConfigurator:
    """Adds rules for a list field; every method returns the configurator."""

    def __init__(
        self,
        field: Field,
        helper: Helper,
        append_fn: Callable[[FieldValidationFn], None],
    ):
        self.field = field
        self.helper = helper
        self._get_values = _list_getter(field)
        self._configurator = FieldConfigurator(
            FieldFnMaker(self._get_values, field, helper), append_fn
        )

    def _values_or_none(self, ref: Any) -> list | None:
        try:
            return self._get_values(ref)
        except LookupError:
            return None

    def max_len(self, max_len: int) -> SliceFieldConfigurator:
        self._configurator.append(lambda values: len(values) <= max_len, "max len error")
        return self

    def min_len(self, min_len: int) -> SliceFieldConfigurator:
        self._configurator.append(lambda values: len(values) >= min_len, "min len error")
        return self

    def required(self) -> SliceFieldConfigurator:
        self._configurator.append(lambda values: len(values) > 0, "required error")
        return self

    def custom(
        self,
        fn: Callable[[Any, FieldCustomHelper, list], Iterable[ValidationError] | None],
    ) -> SliceFieldConfigurator:
        """Add a validator that receives the list itself, so it may change items."""
        custom_helper = FieldCustomHelper(self.field, self.helper)

        def run(ctx: Any, _helper: Helper, values: list) -> List[ValidationError]:
            return list(fn(ctx, custom_helper, values) or [])

        self._configurator.custom_append(self._configurator.maker.custom_make(run))
        return self

    def when(self, when_fn: Callable[[Any, list | None], bool] | None) -> SliceFieldConfigurator:
        """Make rules added from now on run only when ``when_fn`` holds."""
        if when_fn is None:
            return self
        self._configurator = self._configurator.with_when(
            lambda ctx, ref: when_fn(ctx, self._values_or_none(ref))
        )
        return self