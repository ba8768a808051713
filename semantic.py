from __future__ import annotations

from model import ROTATION_STYLES, Entity, Runtime, ScratchList, Variable


class SemanticError(ValueError):
    """Raised when semantic validation fails."""


def analyze(runtime: Runtime) -> None:
    if not runtime.targets:
        raise SemanticError("Project must define at least one target.")
    stage_count = sum(1 for target in runtime.targets if target.is_stage)
    if stage_count > 1:
        raise SemanticError("Project can only define one stage.")
    names = set()
    for target in runtime.targets:
        if not target.is_stage:
            lowered = target.name.lower()
            if lowered in names:
                raise SemanticError(f"Duplicate sprite name '{target.name}'.")
            names.add(lowered)
        _analyze_target(target)


def _analyze_target(target: Entity) -> None:
    for key, entry in target.variables.items():
        if not isinstance(entry, (Variable, ScratchList)):
            raise SemanticError(
                f"Entry '{key}' in target '{target.name}' is neither a variable nor a list "
                f"(got '{type(entry).__name__}')."
            )
        if entry.id != key:
            raise SemanticError(
                f"Variable '{entry.name}' in target '{target.name}' is stored under id '{key}' "
                f"but declares id '{entry.id}'."
            )
    if target.rotation_style not in ROTATION_STYLES:
        raise SemanticError(
            f"Unknown rotation style '{target.rotation_style}' in target '{target.name}'; "
            f"expected one of {', '.join(repr(style) for style in ROTATION_STYLES)}."
        )
    if target.costumes and not 1 <= target.current_costume <= len(target.costumes):
        raise SemanticError(
            f"Current costume {target.current_costume} of target '{target.name}' is out of range "
            f"(1..{len(target.costumes)})."
        )
