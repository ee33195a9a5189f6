"""Validation rules for numeric fields."""

from __future__ import annotations

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

MIN_LOCALE_KEY = "validation:num:Cannot be less than %v"
MAX_LOCALE_KEY = "validation:num:Cannot be greater than %v"
REQUIRED_LOCALE_KEY = "validation:num:Should be fulfilled"
ANY_OF_LOCALE_KEY = "validation:num:Only %v values is allowed"
ANY_OF_INTERVAL_LOCALE_KEY = "validation:num:Only interval[%v - %v] is allowed"

_NUMBER_KINDS = (int, float)


def _is_kind(value: Any, kind: type) -> bool:
    """Whether ``value`` fits a field of ``kind``; ints are accepted for floats."""
    if isinstance(value, bool):
        return False
    if kind is float:
        return isinstance(value, (int, float))
    return isinstance(value, kind)


def _number_getter(field: Field, kind: type) -> Callable[[Any], Any]:
    def get_value(ref: Any) -> Any:
        value = ref.get() if isinstance(ref, FieldRef) else ref
        if value is None:
            raise LookupError(f"field {field.path!r} holds no number")
        if not _is_kind(value, kind):
            raise LookupError(f"field {field.path!r} does not hold a {kind.__name__}")
        return value

    return get_value


class NumberConfigurator:
    """Adds rules for one numeric field; every method returns a configurator.

    A field annotated as optional that holds ``None`` fails every rule except
    custom ones, which receive ``None``.
    """

    def __init__(
        self,
        field: Field,
        helper: Helper,
        configurator: FieldConfigurator,
        kind: type,
    ):
        self.field = field
        self.helper = helper
        self.kind = kind
        self._configurator = configurator

    def _check_type(self, value: Any, what: str) -> None:
        if not _is_kind(value, self.kind):
            raise TypeError(
                f"field {self.field.path!r} holds {self.kind.__name__}, "
                f"but {what} is {type(value).__name__}"
            )

    def _current(self, ref: Any) -> Any:
        try:
            return self._configurator.maker.get_value(ref)
        except LookupError:
            return None

    def max(self, max_num: Any) -> NumberConfigurator:
        """Require the value to be at most ``max_num``."""
        self._check_type(max_num, "max_num")
        self._configurator.append(lambda value: value <= max_num, MAX_LOCALE_KEY, max_num)
        return self

    def min(self, min_num: Any) -> NumberConfigurator:
        """Require the value to be at least ``min_num``."""
        self._check_type(min_num, "min_num")
        self._configurator.append(lambda value: value >= min_num, MIN_LOCALE_KEY, min_num)
        return self

    def required(self) -> NumberConfigurator:
        """Require a value to be present."""
        self._configurator.append(lambda value: True, REQUIRED_LOCALE_KEY)
        return self

    def any_of(self, *args: Any) -> NumberConfigurator:
        """Require the value to be one of ``args``."""
        for value in args:
            self._check_type(value, f"allowed value {value!r}")
        allowed = list(args)
        self._configurator.append(lambda value: value in allowed, ANY_OF_LOCALE_KEY, allowed)
        return self

    def any_of_interval(self, begin: Any, end: Any) -> NumberConfigurator:
        """Require the value to lie strictly between ``begin`` and ``end``."""
        self._check_type(begin, "begin")
        self._check_type(end, "end")
        self._configurator.append(
            lambda value: begin < value < end, ANY_OF_INTERVAL_LOCALE_KEY, begin, end
        )
        return self

    def custom(
        self,
        fn: Callable[[Any, FieldCustomHelper, Any], Iterable[ValidationError] | None],
    ) -> NumberConfigurator:
        """Add a validator that receives the field's current value or ``None``."""
        custom_helper = FieldCustomHelper(self.field, self.helper)

        def run(ctx: Any, _helper: Helper, ref: Any) -> List[ValidationError]:
            return list(fn(ctx, custom_helper, self._current(ref)) or [])

        self._configurator.custom_append(run)
        return self

    def when(self, when_fn: Callable[[Any, Any], bool] | None) -> NumberConfigurator:
        """Return a configurator whose rules only run when ``when_fn`` holds."""
        if when_fn is None:
            return self
        guarded = self._configurator.with_when(
            lambda ctx, ref: when_fn(ctx, self._current(ref))
        )
        return NumberConfigurator(self.field, self.helper, guarded, self.kind)


class NumberBundle:
    """Creates number configurators for the fields of a model class."""

    def __init__(
        self,
        model_cls: type,
        helper: Helper,
        append_fn: Callable[[Field, Any], None],
    ):
        self.model_cls = model_cls
        self.helper = helper
        self.append_fn = append_fn

    def number(self, field: str | Field) -> NumberConfigurator:
        """Start rules for the ``int`` or ``float`` field named by ``field``."""
        resolved = resolve_field(self.model_cls, field)
        kind = resolved.base_type
        if kind not in _NUMBER_KINDS:
            raise TypeError(f"unsupported number field type for {resolved.path!r}")
        maker = FieldFnMaker(_number_getter(resolved, kind), resolved, self.helper)
        configurator = FieldConfigurator(maker, lambda fn: self.append_fn(resolved, fn))
        return NumberConfigurator(resolved, self.helper, configurator, kind)