"""Built-in game catalog used when callers do not supply their own."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Final

from trigscript.catalog.load import catalog_from_mapping
from trigscript.catalog.model import ActionCatalog


def _params(*pairs: tuple[str, str]) -> list[dict[str, str]]:
    return [{"field": field, "dataType": data_type} for field, data_type in pairs]


BUILTIN_CATALOG_DATA: Final[dict[str, Any]] = {
    "functions": {
        # actions
        "setHealth": {
            "category": "action",
            "returnType": "action",
            "title": "set health of entity",
            "params": _params(("entity", "unit"), ("value", "number")),
        },
        "sendChatMessage": {
            "category": "action",
            "returnType": "action",
            "title": "send chat message to everyone",
            "params": _params(("message", "string")),
        },
        "sendChatMessageToPlayer": {
            "category": "action",
            "returnType": "action",
            "title": "send chat message to player",
            "params": _params(("message", "string"), ("player", "player")),
        },
        "createUnitForPlayerAtPosition": {
            "category": "action",
            "returnType": "action",
            "title": "create unit for player at position",
            "params": _params(
                ("unitType", "unitType"),
                ("player", "player"),
                ("position", "position"),
                ("angle", "number"),
            ),
        },
        "destroyEntity": {
            "category": "action",
            "returnType": "action",
            "title": "destroy entity",
            "params": _params(("entity", "unit")),
        },
        "moveEntity": {
            "category": "action",
            "returnType": "action",
            "title": "move entity to position",
            "params": _params(("entity", "unit"), ("position", "position")),
        },
        "setVariable": {
            "category": "action",
            "returnType": "action",
            "title": "set variable",
            "params": _params(("variableName", "string"), ("value", "any")),
        },
        "runScript": {
            "category": "action",
            "returnType": "action",
            "title": "run script",
            "params": _params(("scriptName", "script")),
        },
        "giveNewItemToUnit": {
            "category": "action",
            "returnType": "action",
            "title": "give new item to unit",
            "params": _params(("itemType", "itemType"), ("unit", "unit")),
        },
        "setPlayerAttribute": {
            "category": "action",
            "returnType": "action",
            "title": "set player attribute",
            "params": _params(("attribute", "attributeType"), ("player", "player"), ("value", "number")),
        },
        "playSound": {
            "category": "action",
            "returnType": "action",
            "title": "play sound at position",
            "params": _params(("sound", "string"), ("position", "position")),
        },
        # entities
        "triggeringPlayer": {"category": "player", "returnType": "player", "title": "triggering player"},
        "triggeringUnit": {"category": "unit", "returnType": "unit", "title": "triggering unit"},
        "thisEntity": {"category": "entity", "returnType": "any", "title": "this entity"},
        "ownerOfEntity": {
            "category": "player",
            "returnType": "player",
            "title": "owner of entity",
            "params": _params(("entity", "unit")),
        },
        "getUnitType": {
            "category": "unit",
            "returnType": "unitType",
            "title": "type of unit",
            "params": _params(("unit", "unit")),
        },
        # values
        "getEntityAttribute": {
            "category": "number",
            "returnType": "number",
            "title": "attribute value of entity",
            "params": _params(("attribute", "attributeType"), ("entity", "unit")),
        },
        "getPlayerName": {
            "category": "string",
            "returnType": "string",
            "title": "name of player",
            "params": _params(("player", "player")),
        },
        "concat": {
            "category": "string",
            "returnType": "string",
            "title": "concatenate text",
            "params": _params(("textA", "string"), ("textB", "string")),
        },
        "getEntityPosition": {
            "category": "position",
            "returnType": "position",
            "title": "position of entity",
            "params": _params(("entity", "unit")),
        },
        "xyCoordinate": {
            "category": "position",
            "returnType": "position",
            "title": "coordinate",
            "params": _params(("x", "number"), ("y", "number")),
        },
        "randomNumberBetween": {
            "category": "number",
            "returnType": "number",
            "title": "random number between",
            "params": _params(("min", "number"), ("max", "number")),
        },
        "getNumberOfUnitsOfUnitType": {
            "category": "number",
            "returnType": "number",
            "title": "number of units of unit type",
            "params": _params(("unitType", "unitType"),),
        },
        "playerIsControlledByHuman": {
            "category": "boolean",
            "returnType": "boolean",
            "title": "player is controlled by a human",
            "params": _params(("player", "player")),
        },
    },
    "triggers": [
        "gameStart",
        "secondTick",
        "frameTick",
        "playerJoinsGame",
        "playerLeavesGame",
        "unitDies",
        "unitAttacksUnit",
        "unitEntersRegion",
        "unitUsesItem",
    ],
}


@lru_cache(maxsize=1)
def default_catalog() -> ActionCatalog:
    return catalog_from_mapping(BUILTIN_CATALOG_DATA)
