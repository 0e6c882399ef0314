"""
Value-to-literal serializer for generated source code.

Values are first lifted into a closed set of literal variants
(StringValue, NumberValue, BooleanValue, EnumValue, SequenceValue) by
``to_literal``. Anything outside that set (mappings, None, NaN, arbitrary
objects) raises SerializationFault there, so ``serialize`` only ever
dispatches over known shapes and never guesses.

The per-language rules live in a LiteralPolicy. SWIFT is the bundled one:

    >>> serialize(["metrics"])
    '["metrics"]'
    >>> serialize(Lifetime.APPLICATION)
    '.application'
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Union

from metricgen.core.casing import lower_camel
from metricgen.core.errors import SerializationFault
from metricgen.core.metrics import MetricEnum


__all__ = [
    "StringValue",
    "NumberValue",
    "BooleanValue",
    "EnumValue",
    "SequenceValue",
    "LiteralValue",
    "LiteralPolicy",
    "SWIFT",
    "SWIFT_KEYWORDS",
    "swift_string",
    "swift_identifier",
    "to_literal",
    "serialize",
]


# Literal variants


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class NumberValue:
    value: Union[int, float]


@dataclass(frozen=True)
class BooleanValue:
    value: bool


@dataclass(frozen=True)
class EnumValue:
    value: MetricEnum

    @property
    def case_name(self) -> str:
        return self.value.value


@dataclass(frozen=True)
class SequenceValue:
    items: Tuple["LiteralValue", ...]


LiteralValue = Union[StringValue, NumberValue, BooleanValue, EnumValue, SequenceValue]
_LITERAL_TYPES = (StringValue, NumberValue, BooleanValue, EnumValue, SequenceValue)


def to_literal(value: Any) -> LiteralValue:
    """Lift a plain value into its literal variant.

    Raises:
        SerializationFault: the value has no literal form
    """
    if isinstance(value, _LITERAL_TYPES):
        return value
    # Enum before str: MetricEnum members are str instances too
    if isinstance(value, MetricEnum):
        return EnumValue(value)
    if isinstance(value, str):
        return StringValue(value)
    # bool before int: True is an int
    if isinstance(value, bool):
        return BooleanValue(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise SerializationFault(f"non-finite number {value!r} has no literal form", value=value)
        return NumberValue(value)
    if isinstance(value, (list, tuple)):
        return SequenceValue(tuple(to_literal(item) for item in value))
    if value is None:
        raise SerializationFault("cannot serialize a null value", value=value)
    if isinstance(value, dict):
        raise SerializationFault("cannot serialize a mapping", value=value)
    raise SerializationFault(
        f"cannot serialize value of type {type(value).__name__}", value=value
    )


# Language policies


def swift_string(text: str) -> str:
    """Quote text as a Swift string literal."""
    out = ['"']
    for char in text:
        code = ord(char)
        if char == "\\":
            out.append("\\\\")
        elif char == '"':
            out.append('\\"')
        elif char == "\n":
            out.append("\\n")
        elif char == "\r":
            out.append("\\r")
        elif char == "\t":
            out.append("\\t")
        elif char == "\0":
            out.append("\\0")
        elif code < 0x20 or code == 0x7F or 0x80 <= code < 0xA0:
            out.append(f"\\u{{{code:X}}}")
        else:
            out.append(char)
    out.append('"')
    return "".join(out)


SWIFT_KEYWORDS = frozenset(
    """
    associatedtype class deinit enum extension fileprivate func import init
    inout internal let open operator private precedencegroup protocol public
    rethrows static struct subscript typealias var break case catch continue
    default defer do else fallthrough for guard if in repeat return throw
    switch where while Any as await false is nil self Self super throws true
    try Type Protocol
    """.split()
)


def swift_identifier(text: str) -> str:
    """Make a cased name usable as a Swift identifier.

    A leading digit gets an underscore prefix and reserved words are
    escaped with backticks.

    Example:
        >>> swift_identifier("default")
        '`default`'

    Raises:
        SerializationFault: the name is empty after casing
    """
    if not text:
        raise SerializationFault("name has no identifier form", value=text)
    if text[0].isdigit():
        return f"_{text}"
    if text in SWIFT_KEYWORDS:
        return f"`{text}`"
    return text


@dataclass(frozen=True)
class LiteralPolicy:
    """Formatting rules for one target language."""

    name: str
    quote: Callable[[str], str]
    enum_prefix: str = "."
    enum_case: Callable[[str], str] = lower_camel
    sequence_open: str = "["
    sequence_close: str = "]"
    separator: str = ", "
    true: str = "true"
    false: str = "false"
    identifier: Callable[[str], str] = str


SWIFT = LiteralPolicy(name="swift", quote=swift_string, identifier=swift_identifier)


def _number(value: Union[int, float]) -> str:
    if isinstance(value, int):
        return str(value)
    return repr(value)


def serialize(value: Any, policy: Optional[LiteralPolicy] = None) -> str:
    """Render a value as literal source text.

    Args:
        value: A literal variant or a plain value (str, number, bool,
            MetricEnum member, or list/tuple of those, nested to any depth)
        policy: Target language rules (default: SWIFT)

    Raises:
        SerializationFault: the value (or a nested element) has no literal form
    """
    policy = policy or SWIFT
    literal = to_literal(value)

    if isinstance(literal, StringValue):
        return policy.quote(literal.value)
    if isinstance(literal, BooleanValue):
        return policy.true if literal.value else policy.false
    if isinstance(literal, NumberValue):
        return _number(literal.value)
    if isinstance(literal, EnumValue):
        return f"{policy.enum_prefix}{policy.enum_case(literal.case_name)}"
    if isinstance(literal, SequenceValue):
        items = policy.separator.join(serialize(item, policy) for item in literal.items)
        return f"{policy.sequence_open}{items}{policy.sequence_close}"
    raise SerializationFault(f"unsupported literal {literal!r}", value=value)
