"""
Arbitrary value payloads for the twfuse merge core.

Handles the bracket syntax of utility classes (``[color:blue]``, ``w-[12px]``):
label extraction for collision scoping, typed extraction of numbers, fractions,
lengths and angles, and the value-shape predicates the classifier uses to tell
ambiguous utilities apart (``text-[12px]`` vs ``text-[#333]``).
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

RE_LABEL = re.compile(r"^-{0,2}[A-Za-z][A-Za-z0-9_-]*$")
RE_INTEGER = re.compile(r"^[+-]?\d+$")
RE_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)$")
RE_FRACTION = re.compile(r"^(\d+)/(\d+)$")
RE_DIMENSION = re.compile(r"^([+-]?(?:\d+\.?\d*|\.\d+))([A-Za-z%]*)$")
RE_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
RE_SHADOW = re.compile(
    r"^(?:inset_)?-?(?:\d+\.?\d*|\.\d+)[a-z]*_-?(?:\d+\.?\d*|\.\d+)[a-z]*"
)

LENGTH_UNITS = {
    "px", "rem", "em", "ex", "ch", "lh", "rlh", "pt", "pc", "in", "cm", "mm",
    "q", "vw", "vh", "vmin", "vmax", "dvw", "dvh", "svw", "svh", "lvw", "lvh",
    "cqw", "cqh", "cqi", "cqb", "cqmin", "cqmax", "%",
}
ANGLE_UNITS = {"deg", "rad", "grad", "turn"}
LENGTH_FUNCTIONS = ("calc(", "min(", "max(", "clamp(")
COLOR_FUNCTIONS = (
    "rgb(", "rgba(", "hsl(", "hsla(", "hwb(", "lab(", "lch(", "oklab(", "oklch(",
    "color(", "color-mix(",
)
IMAGE_FUNCTIONS = (
    "url(", "image(", "image-set(", "cross-fade(", "element(",
    "linear-gradient(", "radial-gradient(", "conic-gradient(",
    "repeating-linear-gradient(", "repeating-radial-gradient(",
    "repeating-conic-gradient(",
)
POSITION_KEYWORDS = {"center", "top", "right", "bottom", "left"}
ABSOLUTE_SIZES = {
    "xx-small", "x-small", "small", "medium", "large", "x-large", "xx-large",
    "xxx-large",
}
NAMED_COLORS = {"transparent", "currentcolor", "currentColor", "inherit", "black", "white"}

# Labels that act as a type hint inside a utility, e.g. ``text-[length:var(--x)]``
TYPE_HINTS = {
    "length", "size", "percentage", "number", "integer", "color", "url", "image",
    "position", "family-name", "absolute-size", "shadow", "line-width", "any",
}


class ArbitraryValueError(ValueError):
    """Raised when an arbitrary payload does not match the requested value grammar."""

    def __init__(self, kind: str, text: str):
        super().__init__(f"Invalid {kind}: {text!r}")
        self.kind = kind
        self.text = text


@dataclass(frozen=True)
class Length:
    """A numeric CSS length or angle with its unit (empty for a bare zero)."""

    value: float
    unit: str

    def __str__(self) -> str:
        number = int(self.value) if self.value.is_integer() else self.value
        return f"{number}{self.unit}"


@dataclass(frozen=True)
class ArbitraryValue:
    """The text between the brackets of an arbitrary utility."""

    inner: str

    @property
    def label(self) -> Optional[str]:
        """The ``label`` of a ``label:value`` payload, or None."""
        if ":" not in self.inner:
            return None
        label = self.inner.split(":", 1)[0]
        return label if RE_LABEL.match(label) else None

    @property
    def hint(self) -> Optional[str]:
        """The label, when it is one of the recognised data-type hints."""
        label = self.label
        return label if label in TYPE_HINTS else None

    @property
    def value(self) -> str:
        """The payload with any label removed."""
        if self.label is None:
            return self.inner
        return self.inner.split(":", 1)[1]

    def as_integer(self) -> int:
        text = self.value
        if not RE_INTEGER.match(text):
            raise ArbitraryValueError("integer", text)
        return int(text)

    def as_float(self) -> float:
        text = self.value
        if not RE_NUMBER.match(text):
            raise ArbitraryValueError("float", text)
        return float(text)

    def as_fraction(self) -> Tuple[int, int]:
        text = self.value
        m = RE_FRACTION.match(text)
        if not m or int(m.group(2)) == 0:
            raise ArbitraryValueError("fraction", text)
        return int(m.group(1)), int(m.group(2))

    def as_length(self) -> Length:
        return parse_length(self.value)

    def as_length_or_fraction(self) -> Length:
        """Parse a length, falling back to a fraction expressed as a percentage."""
        try:
            return self.as_length()
        except ArbitraryValueError:
            numerator, denominator = self.as_fraction()
            return Length(numerator / denominator * 100, "%")

    def as_angle(self) -> Length:
        return parse_angle(self.value)


def parse_length(text: str) -> Length:
    m = RE_DIMENSION.match(text)
    if not m:
        raise ArbitraryValueError("length", text)
    number, unit = float(m.group(1)), m.group(2)
    if unit == "":
        # Only zero may omit its unit
        if number != 0:
            raise ArbitraryValueError("length", text)
    elif unit.lower() not in LENGTH_UNITS:
        raise ArbitraryValueError("length", text)
    return Length(number, unit.lower())


def parse_angle(text: str) -> Length:
    m = RE_DIMENSION.match(text)
    if not m:
        raise ArbitraryValueError("angle", text)
    number, unit = float(m.group(1)), m.group(2).lower()
    if unit not in ANGLE_UNITS and not (unit == "" and number == 0):
        raise ArbitraryValueError("angle", text)
    return Length(number, unit)


# === Value-shape predicates ===


def is_length(text: str) -> bool:
    if text.startswith(LENGTH_FUNCTIONS):
        return True
    if RE_FRACTION.match(text):
        return True
    try:
        parse_length(text)
    except ArbitraryValueError:
        return False
    return True


def is_number(text: str) -> bool:
    return bool(RE_NUMBER.match(text))


def is_percentage(text: str) -> bool:
    return text.endswith("%") and is_number(text[:-1])


def is_color(text: str) -> bool:
    return (
        bool(RE_HEX_COLOR.match(text))
        or text.startswith(COLOR_FUNCTIONS)
        or text in NAMED_COLORS
    )


def is_image(text: str) -> bool:
    return text.startswith(IMAGE_FUNCTIONS)


def is_url(text: str) -> bool:
    return text.startswith("url(")


def is_shadow(text: str) -> bool:
    return bool(RE_SHADOW.match(text))


def is_position(text: str) -> bool:
    parts = text.split("_")
    return all(p in POSITION_KEYWORDS or is_length(p) for p in parts) and len(parts) > 1


def is_absolute_size(text: str) -> bool:
    return text in ABSOLUTE_SIZES


def is_any(text: str) -> bool:
    return True
