from __future__ import annotations

from model import Entity, VariableKind

INSTANCE_SIGIL = "@"
GLOBAL_SIGIL = "$"


def sanitize(name: str) -> str:
    """Replace ASCII characters that cannot appear in a bare identifier with ``_``.

    Non-ASCII characters are kept as they are, so the result always has the
    same length as ``name``.
    """
    chars: list[str] = []
    for ch in name:
        if ord(ch) >= 128 or ch == "_" or (ch.isascii() and ch.isalnum()):
            chars.append(ch)
        else:
            chars.append("_")
    return "".join(chars)


def resolve_name(kind: VariableKind, entity: Entity, variable_id: str) -> str | None:
    """Return the sigiled Ruby name of a variable or list, or None when it does not resolve.

    Sprite-local entries shadow the stage's. An id found locally with the other
    kind never falls back to the stage, and the stage itself has no outer scope.
    """
    if entity.is_stage:
        return _scoped_name(GLOBAL_SIGIL, kind, entity, variable_id)

    local = entity.lookup(variable_id)
    if local is not None:
        if local.kind is not kind:
            return None
        return INSTANCE_SIGIL + sanitize(local.name)

    stage = entity.runtime.stage() if entity.runtime is not None else None
    if stage is None:
        return None
    return _scoped_name(GLOBAL_SIGIL, kind, stage, variable_id)


def _scoped_name(sigil: str, kind: VariableKind, owner: Entity, variable_id: str) -> str | None:
    entry = owner.lookup(variable_id)
    if entry is None or entry.kind is not kind:
        return None
    return sigil + sanitize(entry.name)


def variable_name(entity: Entity, variable_id: str) -> str | None:
    return resolve_name(VariableKind.SCALAR, entity, variable_id)


def list_name(entity: Entity, list_id: str) -> str | None:
    return resolve_name(VariableKind.LIST, entity, list_id)


def sprite_name() -> str:
    # Sprite-level calls are emitted inside the sprite's own block.
    return "self"
