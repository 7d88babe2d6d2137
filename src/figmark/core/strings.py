"""
String and number formatting helpers shared by the engine and serializers.

CSS output depends on these being stable: identical inputs must format
identically on every run.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal

_NON_CLASS_CHARS = re.compile(r"[^a-z0-9_]")
_WHITESPACE = re.compile(r"\s+")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def round1(value: float) -> float:
    """
    Round to one decimal place, halves rounding up.

    Examples:
        >>> round1(123.45)
        123.5
        >>> round1(10.04)
        10.0
    """
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def js_round(value: float) -> int:
    """
    Round to the nearest integer with halves going towards +infinity.

    Python's built-in ``round`` uses banker's rounding, which would make
    gradient angles and stop percentages drift on exact halves.

    Examples:
        >>> js_round(2.5)
        3
        >>> js_round(-2.5)
        -2
    """
    return math.floor(value + 0.5)


def fmt_number(value: float) -> str:
    """
    Format a number for CSS without a trailing ``.0``.

    Examples:
        >>> fmt_number(100.0)
        '100'
        >>> fmt_number(12.5)
        '12.5'
    """
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def px(value: float) -> str:
    """Format a length as pixels rounded to one decimal place."""
    return f"{fmt_number(round1(value))}px"


def class_name(name: str | None) -> str:
    """
    Derive a CSS class name from a design layer name.

    Examples:
        >>> class_name("Hero Card")
        'hero_card'
        >>> class_name("Icon/Arrow")
        'iconarrow'
        >>> class_name("")
        'unnamed'
    """
    if not name:
        return "unnamed"
    cleaned = _NON_CLASS_CHARS.sub("", _WHITESPACE.sub("_", name.lower()))
    return cleaned or "unnamed"


def pascal_case(name: str) -> str:
    """
    Normalize a component name to PascalCase.

    Trailing variant descriptors after the first comma are dropped and
    non-alphanumerics act as word breaks. Words already in mixed case keep
    their inner capitals; all-caps words are title-cased.

    Examples:
        >>> pascal_case("Button, Size=Large, State=Default")
        'Button'
        >>> pascal_case("date picker")
        'DatePicker'
        >>> pascal_case("TextField")
        'TextField'
        >>> pascal_case("CARD")
        'Card'
    """
    head = name.split(",")[0].strip()
    words = [w for w in _NON_ALNUM.sub(" ", head).split(" ") if w]
    parts: list[str] = []
    for word in words:
        if word.isupper():
            parts.append(word.capitalize())
        else:
            parts.append(word[0].upper() + word[1:])
    return "".join(parts)


def prop_name(name: str) -> str:
    """
    Normalize a component property name to a camelCase identifier.

    Examples:
        >>> prop_name("Show Icon")
        'showIcon'
        >>> prop_name("Label text")
        'labelText'
        >>> prop_name("SIZE")
        'size'
    """
    words = [w for w in _NON_ALNUM.sub(" ", name).split(" ") if w]
    parts: list[str] = []
    for index, word in enumerate(words):
        if word.isupper():
            word = word.lower()
        head = word[0].lower() if index == 0 else word[0].upper()
        parts.append(head + word[1:])
    return "".join(parts)


def css_var_name(variable_name: str) -> str:
    """
    Convert a design variable name to a CSS custom property name.

    Examples:
        >>> css_var_name("color/neutral/text-default")
        '--color-neutral-text-default'
        >>> css_var_name("Font Size/Body")
        '--font-size-body'
    """
    return "--" + _WHITESPACE.sub("-", variable_name.replace("/", "-")).lower()


def camel_case_property(prop: str) -> str:
    """
    Convert a CSS property to its React style-object key.

    Examples:
        >>> camel_case_property("background-color")
        'backgroundColor'
        >>> camel_case_property("-webkit-line-clamp")
        'WebkitLineClamp'
    """
    head, *rest = prop.split("-")
    if not head:
        return "".join(part.capitalize() for part in rest)
    return head + "".join(part.capitalize() for part in rest)
