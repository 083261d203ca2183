import pytest

from flyfx.errors import TransformParseError
from flyfx.stage.transform import IDENTITY, Matrix2D, format_number, parse_transform, rotation_from_transform


@pytest.mark.parametrize("value", [None, "", "none", "  none "])
def test_empty_transforms_are_identity(value):
    assert parse_transform(value) is IDENTITY


def test_matrix_rotation():
    # matrix() of rotate(30deg)
    assert rotation_from_transform("matrix(0.866025, 0.5, -0.5, 0.866025, 0, 0)") == pytest.approx(30.0, abs=1e-4)


@pytest.mark.parametrize("value, expected", [
    ("rotate(45deg)", 45.0),
    ("rotate(-90deg)", -90.0),
    ("rotate(0.5turn)", 180.0),
    ("rotate(100grad)", 90.0),
    ("rotate(0)", 0.0),
])
def test_rotate_units(value, expected):
    assert rotation_from_transform(value) == pytest.approx(expected)


def test_composition_keeps_rotation_and_translation():
    matrix = parse_transform("translate(10px, 20px) rotate(90deg) scale(2)")
    assert matrix.translation == (10.0, 20.0)
    assert matrix.rotation_deg == pytest.approx(90.0)


def test_translate_axes_and_scale():
    assert parse_transform("translateX(5px) translateY(-7px)").translation == (5.0, -7.0)
    assert parse_transform("scale(2, 3)") == Matrix2D(a=2.0, d=3.0)
    assert parse_transform("scaleX(0.5)") == Matrix2D(a=0.5)


@pytest.mark.parametrize("value", [
    "skew(10deg)",
    "rotate(10px)",
    "translate(1em)",
    "matrix(1, 0, 0, 1)",
    "translateX(1px, 2px)",
    "rotate(45deg) garbage",
    "banana",
])
def test_invalid_transforms_raise(value):
    with pytest.raises(TransformParseError) as err:
        parse_transform(value)
    assert err.value.code == "INVALID_TRANSFORM"


def test_to_css_round_trip():
    matrix = parse_transform("translate(200px, 0) scale(0.5)")
    assert matrix.to_css() == "matrix(0.5, 0, 0, 0.5, 200, 0)"
    assert parse_transform(matrix.to_css()) == matrix


def test_format_number():
    assert format_number(200.0) == "200"
    assert format_number(0.1) == "0.1"
    assert format_number(-12.3456789) == "-12.345679"
