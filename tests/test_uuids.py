import uuid
from dataclasses import dataclass, field as dc_field

import pytest

from valigo.errors import ValidationError
from valigo.fields import Helper, resolve_field
from valigo.uuids import (
    ANY_OF_LOCALE_KEY,
    NIL,
    REQUIRED_LOCALE_KEY,
    UUIDBundle,
    UUIDSliceConfigurator,
)


@dataclass
class Account:
    id: uuid.UUID = NIL
    owner: uuid.UUID | None = None
    name: str = ""
    clients: list[uuid.UUID] = dc_field(default_factory=list)


class RecordingHelper(Helper):
    def __init__(self):
        self.calls = []

    def error_t(self, ctx, field, value, locale_key, *args):
        self.calls.append((locale_key, args))
        return ValidationError(message=locale_key, location=field.path, value=value)


class Registry:
    def __init__(self):
        self.helper = RecordingHelper()
        self.registered = []

    def append(self, field, fn):
        self.registered.append((field, fn))

    def bind(self, field):
        return lambda fn: self.append(field, fn)

    def validate(self, obj):
        return [
            err for field, fn in self.registered for err in fn(None, self.helper, field.ref(obj))
        ]


def test_required_rejects_nil():
    reg = Registry()
    UUIDBundle(Account, reg.helper, reg.append).uuid("id").required()
    errors = reg.validate(Account(id=uuid.UUID(int=0)))
    assert errors == [ValidationError(REQUIRED_LOCALE_KEY, "id", uuid.UUID(int=0))]
    assert reg.validate(Account(id=uuid.uuid4())) == []


def test_required_on_optional_none_reports_error():
    reg = Registry()
    UUIDBundle(Account, reg.helper, reg.append).uuid("owner").required()
    errors = reg.validate(Account(owner=None))
    assert [e.message for e in errors] == [REQUIRED_LOCALE_KEY]
    assert errors[0].value is None


def test_any_of():
    allowed = uuid.uuid4()
    reg = Registry()
    UUIDBundle(Account, reg.helper, reg.append).uuid("id").any_of(allowed)
    assert reg.validate(Account(id=allowed)) == []
    other = uuid.uuid4()
    errors = reg.validate(Account(id=other))
    assert errors == [ValidationError(ANY_OF_LOCALE_KEY, "id", other)]
    assert reg.helper.calls == [(ANY_OF_LOCALE_KEY, ())]


def test_custom_receives_value():
    reg = Registry()
    seen = []

    def check(ctx, helper, value):
        seen.append(value)
        return [helper.error_t(ctx, value, "custom")]

    value = uuid.uuid4()
    UUIDBundle(Account, reg.helper, reg.append).uuid("id").custom(check)
    errors = reg.validate(Account(id=value))
    assert seen == [value]
    assert errors == [ValidationError("custom", "id", value)]


def test_custom_returning_none_gives_no_errors():
    reg = Registry()
    UUIDBundle(Account, reg.helper, reg.append).uuid("id").custom(
        lambda ctx, helper, value: None
    )
    assert len(reg.registered) == 1
    assert reg.validate(Account(id=uuid.uuid4())) == []


def test_when_guards_rules():
    reg = Registry()
    UUIDBundle(Account, reg.helper, reg.append).uuid("id").when(
        lambda ctx, value: value != NIL
    ).any_of(uuid.uuid4())
    assert reg.validate(Account(id=NIL)) == []
    assert len(reg.validate(Account(id=uuid.uuid4()))) == 1


def test_when_none_returns_same_configurator():
    reg = Registry()
    configurator = UUIDBundle(Account, reg.helper, reg.append).uuid("id")
    assert configurator.when(None) is configurator


def test_uuid_on_non_uuid_field_raises():
    reg = Registry()
    bundle = UUIDBundle(Account, reg.helper, reg.append)
    with pytest.raises(TypeError):
        bundle.uuid("name")


def test_uuid_on_unknown_field_raises():
    reg = Registry()
    bundle = UUIDBundle(Account, reg.helper, reg.append)
    with pytest.raises(LookupError):
        bundle.uuid("missing")


def test_string_value_in_uuid_field_reports_failed_read():
    reg = Registry()
    UUIDBundle(Account, reg.helper, reg.append).uuid("id").required()
    text = str(uuid.uuid4())
    errors = reg.validate(Account(id=text))
    assert errors == [ValidationError(REQUIRED_LOCALE_KEY, "id", text)]


def test_uuid_slice_any_of_reports_each_unknown():
    allowed = uuid.uuid4()
    stranger = uuid.uuid4()
    reg = Registry()
    field = resolve_field(Account, "clients")
    UUIDSliceConfigurator(field, reg.helper, reg.bind(field)).any_of(allowed)
    errors = reg.validate(Account(clients=[allowed, stranger]))
    assert errors == [ValidationError(ANY_OF_LOCALE_KEY, "clients", str(stranger))]
    assert reg.helper.calls == [(ANY_OF_LOCALE_KEY, ([allowed],))]


def test_uuid_slice_any_of_all_allowed():
    first, second = uuid.uuid4(), uuid.uuid4()
    reg = Registry()
    field = resolve_field(Account, "clients")
    UUIDSliceConfigurator(field, reg.helper, reg.bind(field)).any_of(first, second)
    assert len(reg.registered) == 1
    assert reg.validate(Account(clients=[second, first, first])) == []
    assert len(reg.validate(Account(clients=[uuid.uuid4()]))) == 1


def test_uuid_slice_required_inherited():
    reg = Registry()
    field = resolve_field(Account, "clients")
    UUIDSliceConfigurator(field, reg.helper, reg.bind(field)).required()
    assert len(reg.validate(Account(clients=[]))) == 1
    assert reg.validate(Account(clients=[uuid.uuid4()])) == []