from __future__ import annotations

import logging
from pathlib import Path

from literals import (
    ArrayLiteral,
    HashLiteral,
    Literal,
    LiteralError,
    StringLiteral,
    quote,
    render,
    to_literal,
)
from model import Costume, Entity, Runtime, ScratchList, Variable, VariableEntry, VariableKind

logger = logging.getLogger(__name__)


class CodegenError(ValueError):
    """Raised when Ruby source generation fails."""


# Includes the opening parenthesis: its length is the keyword indent width (11 and 10).
SPRITE_CONSTRUCTOR = "Sprite.new("
STAGE_CONSTRUCTOR = "Stage.new("

DEFAULT_X = 0
DEFAULT_Y = 0
DEFAULT_DIRECTION = 90
DEFAULT_VISIBLE = True
DEFAULT_SIZE = 100
DEFAULT_COSTUME_INDEX = 0
DEFAULT_ROTATION_STYLE = "all around"


def emit_entity(entity: Entity) -> str:
    """Emit the ``Sprite.new``/``Stage.new`` expression recreating ``entity``.

    Keyword arguments equal to their defaults are left out. When none remain
    the call fits on one line; otherwise every keyword gets its own line,
    aligned one column after the opening parenthesis.
    """
    constructor = STAGE_CONSTRUCTOR if entity.is_stage else SPRITE_CONSTRUCTOR
    head = f"{constructor}{quote(entity.name)}"
    try:
        arguments = _keyword_arguments(entity)
    except LiteralError as exc:
        raise CodegenError(f"Cannot emit target '{entity.name}': {exc}") from exc
    if not arguments:
        return head + ")"

    column = len(constructor)
    lines = [f"{' ' * column}{key}: {render(value, column)}" for key, value in arguments]
    return head + ",\n" + ",\n".join(lines) + ")"


def emit_project(runtime: Runtime) -> str:
    ordered_targets = sorted(runtime.targets, key=lambda t: 0 if t.is_stage else 1)
    chunks: list[str] = []
    for target in ordered_targets:
        logger.debug("Emitting %s '%s'", "stage" if target.is_stage else "sprite", target.name)
        chunks.append(emit_entity(target))
    return "\n\n".join(chunks) + "\n"


def write_rb(source: str, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(source, encoding="utf-8")
    logger.info("Wrote %d bytes to %s", len(source.encode("utf-8")), output_path)


def _keyword_arguments(entity: Entity) -> list[tuple[str, Literal]]:
    arguments: list[tuple[str, Literal]] = []

    def add(key: str, value: object, default: object) -> None:
        if not _same_value(value, default):
            arguments.append((key, to_literal(value)))

    add("x", entity.x, DEFAULT_X)
    add("y", entity.y, DEFAULT_Y)
    add("direction", entity.direction, DEFAULT_DIRECTION)
    add("visible", bool(entity.visible), DEFAULT_VISIBLE)
    add("size", entity.size, DEFAULT_SIZE)
    add("current_costume", entity.current_costume - 1, DEFAULT_COSTUME_INDEX)
    if entity.costumes:
        arguments.append(("costumes", ArrayLiteral(tuple(_costume_record(c) for c in entity.costumes))))
    add("rotation_style", entity.rotation_style, DEFAULT_ROTATION_STYLE)

    for key, kind in (("variables", VariableKind.SCALAR), ("lists", VariableKind.LIST)):
        members = [entry for entry in entity.variables.values() if entry.kind is kind]
        if members:
            arguments.append((key, ArrayLiteral(tuple(_variable_record(entry) for entry in members))))
    return arguments


def _costume_record(costume: Costume) -> HashLiteral:
    return HashLiteral(
        (
            ("asset_id", to_literal(costume.asset_id)),
            ("name", to_literal(costume.name)),
            ("bitmap_resolution", to_literal(costume.bitmap_resolution)),
            ("md5", to_literal(costume.md5)),
            ("data_format", to_literal(costume.data_format)),
            ("rotation_center_x", to_literal(costume.rotation_center_x)),
            ("rotation_center_y", to_literal(costume.rotation_center_y)),
        )
    )


def _variable_record(entry: VariableEntry) -> HashLiteral:
    fields: list[tuple[str, Literal]] = [("name", StringLiteral(entry.name))]
    if not _is_default_value(entry):
        fields.append(("value", to_literal(entry.value)))
    return HashLiteral(tuple(fields))


def _is_default_value(entry: VariableEntry) -> bool:
    if isinstance(entry, Variable):
        return _same_value(entry.value, 0)
    if isinstance(entry, ScratchList):
        return len(entry.value) == 0
    raise CodegenError(f"Unsupported variable entry type '{type(entry).__name__}'.")


def _same_value(value: object, default: object) -> bool:
    # Strict comparison: True is not 1, "0" is not 0.
    if isinstance(value, bool) or isinstance(default, bool):
        return isinstance(value, bool) and isinstance(default, bool) and value == default
    if isinstance(value, str) or isinstance(default, str):
        return isinstance(value, str) and isinstance(default, str) and value == default
    return value == default
