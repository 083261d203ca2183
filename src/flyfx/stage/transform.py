"""
Transform parsing

Parses CSS-like 2D transform strings into an affine matrix and extracts the
rotation angle the element already has. Supported functions:

    none
    matrix(a, b, c, d, e, f)
    rotate(<angle>)              deg | rad | turn | grad
    translate(x[, y]) translateX(x) translateY(y)     px (unit optional)
    scale(sx[, sy]) scaleX(sx) scaleY(sy)

Functions compose left to right, as in CSS.
"""

import math
import re
from dataclasses import dataclass
from typing import List, Tuple

from flyfx.errors import TransformParseError

_FUNCTION_RE = re.compile(r"([a-zA-Z]+)\(([^)]*)\)")
_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-z%]*)\s*$")

_ANGLE_UNITS = {
    "deg": 1.0,
    "rad": 180.0 / math.pi,
    "turn": 360.0,
    "grad": 0.9,
}


@dataclass(frozen=True)
class Matrix2D:
    """
    2D affine matrix in CSS order:

        | a c e |
        | b d f |
        | 0 0 1 |
    """
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    def multiply(self, other: "Matrix2D") -> "Matrix2D":
        """self × other (other applied first to points)"""
        return Matrix2D(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    @property
    def rotation_deg(self) -> float:
        return math.degrees(math.atan2(self.b, self.a))

    @property
    def translation(self) -> Tuple[float, float]:
        return (self.e, self.f)

    @property
    def is_identity(self) -> bool:
        return self == IDENTITY

    def to_css(self) -> str:
        values = ", ".join(format_number(v) for v in (self.a, self.b, self.c, self.d, self.e, self.f))
        return f"matrix({values})"


IDENTITY = Matrix2D()


def format_number(value: float) -> str:
    """Compact number formatting for style strings: 200.0 → '200', 0.5 → '0.5'"""
    value = round(value, 6)
    if value == int(value):
        return str(int(value))
    return f"{value:.6f}".rstrip("0").rstrip(".")


def _parse_number(raw: str, source: str) -> Tuple[float, str]:
    match = _NUMBER_RE.match(raw)
    if not match:
        raise TransformParseError(source, f"invalid number '{raw.strip()}'")
    return float(match.group(1)), match.group(2)


def _parse_angle(raw: str, source: str) -> float:
    value, unit = _parse_number(raw, source)
    if unit == "" and value == 0:
        return 0.0
    if unit not in _ANGLE_UNITS:
        raise TransformParseError(source, f"invalid angle unit '{unit}'")
    return value * _ANGLE_UNITS[unit]


def _parse_length(raw: str, source: str) -> float:
    value, unit = _parse_number(raw, source)
    if unit not in ("", "px"):
        raise TransformParseError(source, f"unsupported length unit '{unit}'")
    return value


def _function_matrix(name: str, args: List[str], source: str) -> Matrix2D:
    name = name.lower()
    argc = len(args)

    if name == "matrix":
        if argc != 6:
            raise TransformParseError(source, "matrix() takes 6 values")
        return Matrix2D(*(_parse_number(a, source)[0] for a in args))

    if name == "rotate":
        if argc != 1:
            raise TransformParseError(source, "rotate() takes 1 value")
        rad = math.radians(_parse_angle(args[0], source))
        cos, sin = math.cos(rad), math.sin(rad)
        return Matrix2D(cos, sin, -sin, cos, 0.0, 0.0)

    if name == "translate":
        if argc not in (1, 2):
            raise TransformParseError(source, "translate() takes 1 or 2 values")
        tx = _parse_length(args[0], source)
        ty = _parse_length(args[1], source) if argc == 2 else 0.0
        return Matrix2D(e=tx, f=ty)

    if name in ("translatex", "translatey", "scalex", "scaley") and argc != 1:
        raise TransformParseError(source, f"{name}() takes 1 value")

    if name == "translatex":
        return Matrix2D(e=_parse_length(args[0], source))

    if name == "translatey":
        return Matrix2D(f=_parse_length(args[0], source))

    if name == "scale":
        if argc not in (1, 2):
            raise TransformParseError(source, "scale() takes 1 or 2 values")
        sx = _parse_number(args[0], source)[0]
        sy = _parse_number(args[1], source)[0] if argc == 2 else sx
        return Matrix2D(a=sx, d=sy)

    if name == "scalex":
        return Matrix2D(a=_parse_number(args[0], source)[0])

    if name == "scaley":
        return Matrix2D(d=_parse_number(args[0], source)[0])

    raise TransformParseError(source, f"unsupported function '{name}'")


def parse_transform(value: str) -> Matrix2D:
    """
    Parse a transform string into a Matrix2D.

    Raises:
        TransformParseError: on unknown functions, bad arity or bad units
    """
    if value is None:
        return IDENTITY
    text = value.strip()
    if text == "" or text == "none":
        return IDENTITY

    matrix = IDENTITY
    consumed = 0
    for match in _FUNCTION_RE.finditer(text):
        if text[consumed:match.start()].strip():
            raise TransformParseError(value, f"unexpected text '{text[consumed:match.start()].strip()}'")
        raw_args = match.group(2)
        args = raw_args.split(",") if "," in raw_args else raw_args.split()
        if not args:
            raise TransformParseError(value, f"{match.group(1)}() needs arguments")
        matrix = matrix.multiply(_function_matrix(match.group(1), args, value))
        consumed = match.end()

    if consumed == 0 or text[consumed:].strip():
        raise TransformParseError(value, "not a transform function list")

    return matrix


def rotation_from_transform(value: str) -> float:
    """Rotation in degrees encoded by a transform string (0 for 'none')"""
    return parse_transform(value).rotation_deg
