from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal


class LiteralError(ValueError):
    """Raised when a value has no Ruby literal form."""


@dataclass(frozen=True)
class Literal:
    pass


@dataclass(frozen=True)
class NumberLiteral(Literal):
    value: int | float


@dataclass(frozen=True)
class StringLiteral(Literal):
    value: str


@dataclass(frozen=True)
class BooleanLiteral(Literal):
    value: bool


@dataclass(frozen=True)
class ArrayLiteral(Literal):
    items: tuple[Literal, ...] = ()


@dataclass(frozen=True)
class HashLiteral(Literal):
    fields: tuple[tuple[str, Literal], ...] = ()


INDENT_STEP = 2


def quote(text: str) -> str:
    # Only double quotes are escaped; backslashes pass through unchanged.
    return '"' + text.replace('"', '\\"') + '"'


def to_literal(value: object) -> Literal:
    if isinstance(value, Literal):
        return value
    if isinstance(value, bool):
        return BooleanLiteral(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise LiteralError(f"Non-finite number {value!r} has no literal form.")
        return NumberLiteral(value)
    if isinstance(value, str):
        return StringLiteral(value)
    if isinstance(value, (list, tuple)):
        return ArrayLiteral(tuple(to_literal(item) for item in value))
    raise LiteralError(f"Unsupported value of type '{type(value).__name__}': {value!r}.")


def format_number(value: int | float) -> str:
    """Render a number the way JavaScript's ``Number#toString`` does.

    Plain decimals are used from 1e-6 up to 1e21; outside that range the
    shortest digits go in exponent form without zero padding (``1e-7``).
    """
    if isinstance(value, int) or value == 0:
        return str(int(value))
    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    count = len(digits)
    point = exponent + count
    prefix = "-" if sign else ""
    if count <= point <= 21:
        return prefix + digits + "0" * (point - count)
    if 0 < point <= 21:
        return f"{prefix}{digits[:point]}.{digits[point:]}"
    if -6 < point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    mantissa = digits[0] + (f".{digits[1:]}" if count > 1 else "")
    power = point - 1
    return f"{prefix}{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def serialize_scalar(value: float | str | bool) -> str:
    literal = to_literal(value)
    if isinstance(literal, ArrayLiteral):
        raise LiteralError(f"Expected a scalar value, got a sequence: {value!r}.")
    return render(literal)


def serialize_sequence(values) -> str:
    return render(ArrayLiteral(tuple(to_literal(value) for value in values)))


def render(literal: Literal, indent: int = 0) -> str:
    """Render a literal as Ruby source.

    ``indent`` is the column of the line the literal starts on. Hashes, and
    arrays holding hashes, continue on following lines two columns deeper and
    close at ``indent``; everything else stays on one line.
    """
    if isinstance(literal, NumberLiteral):
        return format_number(literal.value)
    if isinstance(literal, StringLiteral):
        return quote(literal.value)
    if isinstance(literal, BooleanLiteral):
        return "true" if literal.value else "false"
    if isinstance(literal, ArrayLiteral):
        if not literal.items:
            return "[]"
        if not any(isinstance(item, HashLiteral) for item in literal.items):
            return "[" + ", ".join(render(item) for item in literal.items) + "]"
        inner = indent + INDENT_STEP
        lines = [" " * inner + render(item, inner) for item in literal.items]
        return "[\n" + ",\n".join(lines) + "\n" + " " * indent + "]"
    if isinstance(literal, HashLiteral):
        if not literal.fields:
            return "{}"
        inner = indent + INDENT_STEP
        lines = [f"{' ' * inner}{key}: {render(value, inner)}" for key, value in literal.fields]
        return "{\n" + ",\n".join(lines) + "\n" + " " * indent + "}"
    raise LiteralError(f"Unsupported literal type '{type(literal).__name__}'.")
