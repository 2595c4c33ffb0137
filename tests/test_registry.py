import math

import pytest

from event_binder import CustomBinder, InvalidParameterType, NumberFormatError
from event_binder.exceptions import EncodingError
from event_binder.registry import (
    clear_binders,
    decode_text,
    parse_double,
    parse_float,
    parse_long,
    register_binder,
    registered_binders,
    resolve_binder_factory,
    unregister_binder,
)

NOT_CALLABLE = 42


class Outer:
    class Inner(CustomBinder):
        def set_value(self, output, event):
            output.set_string(self.slot, "inner")


@pytest.fixture(autouse=True)
def clean_registry():
    clear_binders()
    yield
    clear_binders()


@pytest.mark.parametrize(
    "expected, text",
    (
        (1234, "1234"),
        (-17, "-17"),
        (5, "+5"),
        (0, "000"),
        (2**63 - 1, "9223372036854775807"),
        (-(2**63), "-9223372036854775808"),
    ),
)
def test_parse_long(expected, text):
    assert expected == parse_long(text)


@pytest.mark.parametrize(
    "text",
    (
        "notalong",
        "",
        " 12",
        "12 ",
        "1_000",
        "1.0",
        "9223372036854775808",
        "-9223372036854775809",
        "Ù¡Ù¢",
    ),
)
def test_parse_long_invalid(text):
    with pytest.raises(NumberFormatError) as ex:
        parse_long(text)
    assert ex.value.value == text
    assert ex.value.type_name == "long"


@pytest.mark.parametrize(
    "expected, text",
    (
        (123.4, "123.4"),
        (-0.5, " -0.5 "),
        (1e10, "1e10"),
        (1.0, "1."),
        (0.5, ".5"),
        (0.001, "+1E-3"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
    ),
)
def test_parse_double(expected, text):
    assert expected == parse_double(text)


def test_parse_double_nan():
    assert math.isnan(parse_double("NaN"))


@pytest.mark.parametrize(
    "text",
    ("", "abc", "1_0", "1,5", "١٢", "inf", "infinity", "nan", "0x10", "."),
)
@pytest.mark.parametrize("parse", (parse_double, parse_float))
def test_parse_floating_invalid(text, parse):
    """Only ASCII decimal notation, NaN and Infinity are numbers."""
    with pytest.raises(NumberFormatError):
        parse(text)


def test_parse_float_rounds_to_single():
    assert parse_float("0.1") != 0.1
    assert parse_float("0.5") == 0.5


@pytest.mark.parametrize("text, sign", (("1e40", 1), ("-1e40", -1)))
def test_parse_float_overflow(text, sign):
    assert math.copysign(math.inf, sign) == parse_float(text)


def test_decode_text():
    assert "abc" == decode_text(bytearray(b"abc"), "ascii")
    with pytest.raises(EncodingError) as ex:
        decode_text(b"\xff", "ascii")
    assert ex.value.encoding == "ascii"


def test_register_direct():
    register_binder("inner", Outer.Inner)
    assert registered_binders() == {"inner": Outer.Inner}
    assert resolve_binder_factory("inner") is Outer.Inner
    unregister_binder("inner")
    assert registered_binders() == {}


def test_register_decorator():
    @register_binder("constant")
    class Constant(CustomBinder):
        def set_value(self, output, event):
            output.set_long(self.slot, 1)

    assert resolve_binder_factory("constant") is Constant


def test_register_duplicate():
    register_binder("inner", Outer.Inner)
    with pytest.raises(InvalidParameterType):
        register_binder("inner", CustomBinder)
    register_binder("inner", CustomBinder, overwrite=True)
    assert resolve_binder_factory("inner") is CustomBinder


@pytest.mark.parametrize("name", ("long", "DATE", "bytearray", ""))
def test_register_reserved(name):
    with pytest.raises(InvalidParameterType):
        register_binder(name, CustomBinder)


def test_register_not_callable():
    with pytest.raises(InvalidParameterType):
        register_binder("number", 7)


def test_resolve_import_path():
    assert resolve_binder_factory(f"{__name__}.Outer", allow_import=True) is Outer
    inner = resolve_binder_factory(f"{__name__}:Outer.Inner", allow_import=True)
    assert inner is Outer.Inner


def test_resolve_import_path_needs_opt_in():
    with pytest.raises(InvalidParameterType):
        resolve_binder_factory(f"{__name__}.Outer")


def test_registered_name_needs_no_opt_in():
    register_binder("my.inner", Outer.Inner)
    assert resolve_binder_factory("my.inner") is Outer.Inner


@pytest.mark.parametrize(
    "name",
    (
        "foo",
        "no_such_module_for_binders.Binder",
        f"{__name__}.Missing",
        f"{__name__}:Outer.Missing",
        f"{__name__}:NOT_CALLABLE",
        f"{__name__}:",
    ),
)
def test_resolve_failure(name):
    with pytest.raises(InvalidParameterType) as ex:
        resolve_binder_factory(name, allow_import=True)
    assert ex.value.type_name == name
