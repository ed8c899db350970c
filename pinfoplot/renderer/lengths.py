import math

from pinfoplot.errors import InvalidDimensionError

POINTS_PER_INCH = 72.0

_UNITS_IN_INCHES = (
    ("inch", 1.0),
    ("in", 1.0),
    ("cm", 1 / 2.54),
    ("mm", 1 / 25.4),
    ("pt", 1 / POINTS_PER_INCH),
)


def parse_length(value: str) -> float:
    """
    Parses a physical length such as "10cm", "4in" or "300" and returns it in inches.

    A number without a unit is read as points (1/72 inch).
    """
    text = value.strip()
    unit = 1 / POINTS_PER_INCH
    for suffix, inches in _UNITS_IN_INCHES:
        if text.endswith(suffix):
            text = text[: -len(suffix)].strip()
            unit = inches
            break

    try:
        number = float(text)
    except ValueError as exc:
        raise InvalidDimensionError(f"invalid length {value!r}") from exc

    length = number * unit
    if not math.isfinite(length) or length <= 0:
        raise InvalidDimensionError(f"length must be positive, got {value!r}")
    return length
