from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


class VariableKind(Enum):
    SCALAR = "scalar"
    LIST = "list"


ROTATION_STYLES = ("all around", "left-right", "don't rotate")


@dataclass(frozen=True)
class Costume:
    asset_id: str
    name: str
    bitmap_resolution: int
    md5: str
    data_format: str
    rotation_center_x: float
    rotation_center_y: float


@dataclass(frozen=True)
class Variable:
    kind: ClassVar[VariableKind] = VariableKind.SCALAR

    id: str
    name: str
    value: float | str | bool = 0


@dataclass(frozen=True)
class ScratchList:
    kind: ClassVar[VariableKind] = VariableKind.LIST

    id: str
    name: str
    value: list = field(default_factory=list)


VariableEntry = Union[Variable, ScratchList]


@dataclass
class Entity:
    """Snapshot of a sprite or the stage.

    ``variables`` maps ids to Variable and ScratchList entries; its insertion
    order is the emission order. ``current_costume`` is 1-based.
    """

    name: str
    is_stage: bool = False
    x: float = 0
    y: float = 0
    direction: float = 90
    visible: bool = True
    size: float = 100
    costumes: list[Costume] = field(default_factory=list)
    current_costume: int = 1
    rotation_style: str = "all around"
    variables: dict[str, VariableEntry] = field(default_factory=dict)
    runtime: Runtime | None = field(default=None, repr=False, compare=False)

    def lookup(self, variable_id: str) -> VariableEntry | None:
        return self.variables.get(variable_id)


@dataclass
class Runtime:
    targets: list[Entity] = field(default_factory=list)

    def add_target(self, entity: Entity) -> Entity:
        entity.runtime = self
        self.targets.append(entity)
        return entity

    def stage(self) -> Entity | None:
        return next((target for target in self.targets if target.is_stage), None)

    def sprites(self) -> list[Entity]:
        return [target for target in self.targets if not target.is_stage]
