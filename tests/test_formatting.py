import pytest

from pipekit.formatting import (
    HEXALOW,
    HEXAUP,
    NULLPOINTER,
    FormatSpec,
    add_hex_prefix,
    field_width,
    itoa_base,
    plus_space_format,
    precision_format,
    zero_padding,
)


@pytest.mark.parametrize("n", [0, 1, 9, 10, 15, 16, 255, 4096, 2**32 - 1, 2**64 - 1])
@pytest.mark.parametrize("base", [2, 8, 10, 16])
def test_itoa_base_round_trip(n, base):
    assert int(itoa_base(n, base), base) == n


@pytest.mark.parametrize("n", [0, 10, 255, 48879, 2**32 - 1])
def test_itoa_base_hex_matches_stdlib(n):
    assert itoa_base(n, 16, False) == format(n, "x")
    assert itoa_base(n, 16, True) == format(n, "X")


def test_itoa_base_uses_alphabets():
    assert itoa_base(15, 16, False) == HEXALOW[15]
    assert itoa_base(15, 16, True) == HEXAUP[15]


def test_itoa_base_rejects_negative():
    with pytest.raises(ValueError):
        itoa_base(-1, 10)


@pytest.mark.parametrize("base", [0, 1, 17])
def test_itoa_base_rejects_bad_base(base):
    with pytest.raises(ValueError):
        itoa_base(5, base)


@pytest.mark.parametrize("n", [0, 7, -7, 42, -42, 123456, -123456])
@pytest.mark.parametrize("precision", [0, 1, 3, 5, 8])
def test_precision_format_matches_c_style(n, precision):
    spec = FormatSpec(precision=precision)
    assert precision_format(str(n), spec) == "%.*d" % (precision, n)


def test_precision_unset_means_one_digit():
    spec = FormatSpec()
    assert precision_format("", spec) == "0"
    assert precision_format("5", spec) == "5"


def test_precision_format_leaves_long_text():
    spec = FormatSpec(precision=2)
    assert precision_format("12345", spec) == "12345"


def test_plus_space_format_plus_wins():
    spec = FormatSpec(plus=True, space=True)
    assert plus_space_format(3, "3", spec) == "+3"


def test_plus_space_format_space():
    spec = FormatSpec(space=True)
    assert plus_space_format(0, "0", spec) == " 0"


def test_plus_space_format_negative_unchanged():
    spec = FormatSpec(plus=True, space=True)
    assert plus_space_format(-3, "-3", spec) == "-3"


def test_plus_space_format_no_flags():
    assert plus_space_format(3, "3", FormatSpec()) == "3"


def test_add_hex_prefix():
    assert add_hex_prefix("ff", False) == "0xff"
    assert add_hex_prefix("FF", True) == "0XFF"


@pytest.mark.parametrize("n", [0, 5, -5, 1234, -1234])
@pytest.mark.parametrize("width", [1, 4, 8, 12])
def test_field_width_zero_matches_c_style(n, width):
    spec = FormatSpec(zero=True, field_width=width)
    assert field_width(str(n), spec) == "%0*d" % (width, n)


@pytest.mark.parametrize("text", ["a", "abc", "-12", "hello world"])
@pytest.mark.parametrize("width", [0, 3, 10])
def test_field_width_spaces(text, width):
    right = field_width(text, FormatSpec(field_width=width))
    left = field_width(text, FormatSpec(field_width=width, minus=True))
    assert right == text.rjust(width)
    assert left == text.ljust(width)
    assert len(right) == max(width, len(text))


def test_field_width_zero_ignored_with_precision():
    spec = FormatSpec(zero=True, precision=2, field_width=6)
    assert field_width("42", spec) == "42".rjust(6)


def test_field_width_zero_ignored_with_minus():
    spec = FormatSpec(zero=True, minus=True, field_width=6)
    assert field_width("42", spec) == "42".ljust(6)


@pytest.mark.parametrize("sign", ["-", "+", " "])
def test_zero_padding_keeps_sign_first(sign):
    spec = FormatSpec(field_width=7)
    out = zero_padding(sign + "12", spec)
    assert len(out) == 7
    assert out[0] == sign
    assert out[1:].lstrip("0") == "12"


def test_zero_padding_hex_prefix_not_a_sign():
    spec = FormatSpec(field_width=6)
    out = zero_padding("0xff", spec)
    assert out.endswith("0xff")
    assert len(out) == 6


def test_zero_padding_short_width_unchanged():
    assert zero_padding("1234", FormatSpec(field_width=2)) == "1234"


def test_null_pointer_text_pads_like_any_text():
    assert NULLPOINTER in ("(nil)", "0x0")
    padded = field_width(NULLPOINTER, FormatSpec(field_width=8))
    assert padded == NULLPOINTER.rjust(8)