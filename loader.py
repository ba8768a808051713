from __future__ import annotations

import json
import logging
import zipfile
from pathlib import Path

from model import Costume, Entity, Runtime, ScratchList, Variable, VariableEntry

logger = logging.getLogger(__name__)


class LoadError(ValueError):
    """Raised when a Scratch project cannot be read into entity snapshots."""


PROJECT_MEMBER = "project.json"


def load_project(path: Path) -> Runtime:
    resolved = path.resolve()
    if not resolved.exists() or not resolved.is_file():
        raise LoadError(f"Project file not found: '{path}'.")
    text = _read_project_text(resolved)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LoadError(f"Invalid project JSON in '{path}': {exc}.") from exc
    try:
        return runtime_from_json(data)
    except LoadError as exc:
        raise LoadError(f"{exc} (in '{path}')") from exc


def _read_project_text(path: Path) -> str:
    try:
        if not zipfile.is_zipfile(path):
            logger.debug("Reading plain project JSON from %s", path)
            return path.read_text(encoding="utf-8-sig")
        logger.debug("Reading %s from archive %s", PROJECT_MEMBER, path)
        with zipfile.ZipFile(path) as zf:
            return zf.read(PROJECT_MEMBER).decode("utf-8-sig")
    except KeyError as exc:
        raise LoadError(f"Archive '{path}' has no '{PROJECT_MEMBER}'.") from exc
    except zipfile.BadZipFile as exc:
        raise LoadError(f"Unreadable archive '{path}': {exc}.") from exc
    except UnicodeDecodeError as exc:
        raise LoadError(f"Project JSON in '{path}' is not valid UTF-8: {exc}.") from exc
    except OSError as exc:
        raise LoadError(f"Cannot read '{path}': {exc}.") from exc


def runtime_from_json(data: dict) -> Runtime:
    if not isinstance(data, dict) or not isinstance(data.get("targets"), list):
        raise LoadError("Project JSON must be an object with a 'targets' array.")
    runtime = Runtime()
    for index, target_json in enumerate(data["targets"]):
        runtime.add_target(_entity_from_json(target_json, index))
    logger.debug("Loaded %d target(s)", len(runtime.targets))
    return runtime


def _entity_from_json(target_json: dict, index: int) -> Entity:
    if not isinstance(target_json, dict):
        raise LoadError(f"Target #{index} is not an object.")
    name = _required(target_json, "name", f"target #{index}")
    is_stage = bool(target_json.get("isStage", False))
    where = f"target '{name}'"

    variables: dict[str, VariableEntry] = {}
    for var_id, pair in _mapping(target_json, "variables", where).items():
        var_name, value = _name_and_value(pair, var_id, where)
        variables[var_id] = Variable(id=var_id, name=var_name, value=value)
    for list_id, pair in _mapping(target_json, "lists", where).items():
        list_name, value = _name_and_value(pair, list_id, where)
        if list_id in variables:
            raise LoadError(f"Id '{list_id}' in {where} names both a variable and a list.")
        if not isinstance(value, list):
            raise LoadError(f"List '{list_name}' in {where} does not hold an array.")
        variables[list_id] = ScratchList(id=list_id, name=list_name, value=list(value))

    try:
        current_costume = int(target_json.get("currentCostume", 0)) + 1
    except (TypeError, ValueError) as exc:
        raise LoadError(f"Invalid currentCostume in {where}: {target_json['currentCostume']!r}.") from exc

    costumes = [_costume_from_json(costume, where) for costume in target_json.get("costumes", [])]
    entity = Entity(
        name=name,
        is_stage=is_stage,
        costumes=costumes,
        current_costume=current_costume,
        variables=variables,
    )
    if not is_stage:
        # The stage has no position or appearance state; it keeps the defaults.
        entity.x = target_json.get("x", entity.x)
        entity.y = target_json.get("y", entity.y)
        entity.direction = target_json.get("direction", entity.direction)
        entity.visible = bool(target_json.get("visible", entity.visible))
        entity.size = target_json.get("size", entity.size)
        entity.rotation_style = target_json.get("rotationStyle", entity.rotation_style)
    return entity


def _costume_from_json(costume_json: dict, where: str) -> Costume:
    if not isinstance(costume_json, dict):
        raise LoadError(f"Costume entry in {where} is not an object.")
    asset_id = _required(costume_json, "assetId", f"costume in {where}")
    data_format = _required(costume_json, "dataFormat", f"costume '{asset_id}' in {where}")
    return Costume(
        asset_id=asset_id,
        name=costume_json.get("name", asset_id),
        bitmap_resolution=costume_json.get("bitmapResolution", 1),
        md5=costume_json.get("md5ext", f"{asset_id}.{data_format}"),
        data_format=data_format,
        rotation_center_x=costume_json.get("rotationCenterX", 0),
        rotation_center_y=costume_json.get("rotationCenterY", 0),
    )


def _mapping(target_json: dict, key: str, where: str) -> dict:
    value = target_json.get(key, {})
    if not isinstance(value, dict):
        raise LoadError(f"'{key}' of {where} must be an object.")
    return value


def _name_and_value(pair: object, entry_id: str, where: str) -> tuple[str, object]:
    if not isinstance(pair, list) or len(pair) < 2 or not isinstance(pair[0], str):
        raise LoadError(f"Malformed entry '{entry_id}' in {where}; expected [name, value].")
    return pair[0], pair[1]


def _required(obj: dict, key: str, where: str):
    if key not in obj:
        raise LoadError(f"Missing '{key}' in {where}.")
    return obj[key]
