import logging

import pytest

from trigscript.document import (
    ConditionalBuilder,
    ConditionalSlot,
    DocumentAssembler,
    DocumentIdentity,
    new_structure,
    publish_action,
    strip_reserved_fields,
)

ASSEMBLER_LOGGER = "trigscript.document.assembler"

CONDITION = [{"operator": "==", "operandType": "number"}, {"function": "getVariable", "variableName": "x"}, 1]
ACTION = {"function": "sendChatMessage", "message": "hi"}
OTHER_ACTION = {"function": "sendChatMessage", "message": "bye"}


def new_assembler() -> DocumentAssembler:
    return DocumentAssembler(DocumentIdentity(name="Script", key="k1", order=3, parent="folder"))


def test_empty_document_has_identity_and_default_conditions() -> None:
    document = new_assembler().generate_document()

    assert document == {
        "isProtected": False,
        "triggers": [],
        "conditions": [{"operator": "==", "operandType": "boolean"}, True, True],
        "actions": [],
        "name": "Script",
        "parent": "folder",
        "key": "k1",
        "order": 3,
    }


def test_actions_keep_insertion_order() -> None:
    assembler = new_assembler()
    for index in range(5):
        assembler.insert_action({"function": "sendChatMessage", "message": str(index)})

    assert [action["message"] for action in assembler.generate_document()["actions"]] == ["0", "1", "2", "3", "4"]


def test_comment_attaches_to_next_action_only() -> None:
    assembler = new_assembler()
    assembler.insert_comment("note")
    assembler.insert_action(ACTION)
    assembler.insert_action(OTHER_ACTION)

    actions = assembler.generate_document()["actions"]
    assert actions[0] == {**ACTION, "comment": "note"}
    assert "comment" not in actions[1]
    assert assembler.pending_comment == ""
    assert "comment" not in ACTION


def test_consecutive_comments_join_with_newline() -> None:
    assembler = new_assembler()
    assembler.insert_comment("first")
    assembler.insert_comment("second")
    assembler.insert_action(ACTION)

    assert assembler.generate_document()["actions"][0]["comment"] == "first\nsecond"


def test_comment_stays_pending_over_primitive_action() -> None:
    assembler = new_assembler()
    assembler.insert_comment("note")
    assembler.insert_action(5)

    assert assembler.pending_comment == "note"
    assert assembler.generate_document()["actions"] == [5]


def test_conditional_block_is_built_from_its_slots() -> None:
    assembler = new_assembler()
    assembler.open_structure("if")
    assembler.insert_action(CONDITION)
    assembler.advance_slot()
    assembler.insert_action(ACTION)
    assembler.close_structure()

    assert assembler.generate_document()["actions"] == [
        {"type": "condition", "conditions": CONDITION, "then": [ACTION], "else": []}
    ]
    assert assembler.depth == 0


def test_else_slot_receives_actions_after_second_advance() -> None:
    assembler = new_assembler()
    assembler.open_structure("if")
    assembler.insert_action(CONDITION)
    assembler.advance_slot()
    assembler.insert_action(ACTION)
    assembler.advance_slot()
    assembler.insert_action(OTHER_ACTION)
    assembler.close_structure()

    (block,) = assembler.generate_document()["actions"]
    assert block["then"] == [ACTION]
    assert block["else"] == [OTHER_ACTION]


def test_nested_structure_is_spliced_into_parent_slot() -> None:
    assembler = new_assembler()
    assembler.open_structure("if")
    assembler.insert_action(CONDITION)
    assembler.advance_slot()
    assembler.open_structure("if")
    assembler.insert_action(True)
    assembler.advance_slot()
    assembler.insert_action(ACTION)
    assembler.close_structure()

    assert assembler.depth == 1
    assert assembler.active_slot == ConditionalSlot.THEN
    assembler.insert_action(OTHER_ACTION)
    assembler.close_structure()

    (outer,) = assembler.generate_document()["actions"]
    assert outer["then"] == [
        {"type": "condition", "conditions": True, "then": [ACTION], "else": []},
        OTHER_ACTION,
    ]


def test_unclosed_structure_never_reaches_actions() -> None:
    assembler = new_assembler()
    assembler.insert_action(ACTION)
    assembler.open_structure("if")
    assembler.insert_action(CONDITION)
    assembler.advance_slot()
    assembler.insert_action(OTHER_ACTION)

    assert assembler.depth == 1
    assert assembler.generate_document()["actions"] == [ACTION]


def test_comment_waits_for_next_top_level_action() -> None:
    assembler = new_assembler()
    assembler.insert_comment("guard")
    assembler.open_structure("if")
    assembler.insert_action(True)
    assembler.advance_slot()
    assembler.insert_action(ACTION)
    assert assembler.pending_comment == "guard"

    assembler.close_structure()
    assembler.insert_action(OTHER_ACTION)

    block, after = assembler.generate_document()["actions"]
    assert "comment" not in block
    assert block["then"] == [ACTION]
    assert after == {**OTHER_ACTION, "comment": "guard"}
    assert assembler.pending_comment == ""


def test_empty_comment_lines_are_not_queued() -> None:
    assembler = new_assembler()
    assembler.insert_comment("")
    assert assembler.pending_comment == ""

    assembler.insert_comment("note")
    assembler.insert_comment("")
    assembler.insert_action(ACTION)

    assert assembler.generate_document()["actions"] == [{**ACTION, "comment": "note"}]


def test_closing_three_nested_structures_pops_one_level_each() -> None:
    assembler = new_assembler()
    for name in ("outer", "middle", "inner"):
        assembler.open_structure("if")
        assembler.insert_action([{"operator": "==", "operandType": "string"}, name, name])
        assembler.advance_slot()
    assert assembler.depth == 3

    assembler.insert_action(ACTION)
    assembler.close_structure()
    assert assembler.depth == 2
    assert assembler.active_slot == ConditionalSlot.THEN

    assembler.insert_action(OTHER_ACTION)
    assembler.close_structure()
    assert assembler.depth == 1
    assert assembler.generate_document()["actions"] == []

    assembler.close_structure()
    assert assembler.depth == 0

    (outer,) = assembler.generate_document()["actions"]
    assert outer["conditions"][1] == "outer"
    (middle,) = outer["then"]
    assert middle["conditions"][1] == "middle"
    inner, after_inner = middle["then"]
    assert inner["conditions"][1] == "inner"
    assert inner["then"] == [ACTION]
    assert after_inner == OTHER_ACTION


def test_generate_document_is_idempotent_and_independent() -> None:
    assembler = new_assembler()
    assembler.insert_trigger({"type": "gameStart"})
    assembler.insert_action(ACTION)

    first = assembler.generate_document()
    second = assembler.generate_document()
    assert first == second

    first["actions"][0]["message"] = "changed"
    first["triggers"].clear()
    assert assembler.generate_document() == second


def test_reserved_fields_are_not_surfaced() -> None:
    assembler = new_assembler()
    assembler.insert_action({"function": "destroyEntity", "entity": {"function": "thisEntity", "_dataType": "unit"}})

    assert assembler.generate_document()["actions"] == [
        {"function": "destroyEntity", "entity": {"function": "thisEntity"}}
    ]


def test_advance_without_structure_is_logged_no_op(caplog: pytest.LogCaptureFixture) -> None:
    assembler = new_assembler()

    with caplog.at_level(logging.WARNING, logger=ASSEMBLER_LOGGER):
        assembler.advance_slot()

    assert assembler.depth == 0
    assert "no open structure" in caplog.text


def test_close_without_structure_is_logged_no_op(caplog: pytest.LogCaptureFixture) -> None:
    assembler = new_assembler()
    assembler.insert_action(ACTION)

    with caplog.at_level(logging.WARNING, logger=ASSEMBLER_LOGGER):
        assembler.close_structure()

    assert assembler.generate_document()["actions"] == [ACTION]
    assert "no open structure" in caplog.text


def test_second_insert_into_conditions_slot_is_ignored(caplog: pytest.LogCaptureFixture) -> None:
    assembler = new_assembler()
    assembler.open_structure("if")
    assembler.insert_action(CONDITION)

    with caplog.at_level(logging.WARNING, logger=ASSEMBLER_LOGGER):
        assembler.insert_action(ACTION)
    assembler.close_structure()

    (block,) = assembler.generate_document()["actions"]
    assert block["conditions"] == CONDITION
    assert block["then"] == []
    assert "already filled" in caplog.text


def test_advancing_past_last_slot_is_ignored(caplog: pytest.LogCaptureFixture) -> None:
    assembler = new_assembler()
    assembler.open_structure("if")
    assembler.advance_slot()
    assembler.advance_slot()
    assert assembler.active_slot == ConditionalSlot.ELSE

    with caplog.at_level(logging.WARNING, logger=ASSEMBLER_LOGGER):
        assembler.advance_slot()

    assert assembler.active_slot == ConditionalSlot.ELSE
    assert "no slot after" in caplog.text


def test_each_open_gets_a_fresh_builder() -> None:
    first = new_structure("if")
    second = new_structure("if")
    first.insert(True)
    first.advance()
    first.insert(ACTION)

    assert isinstance(second, ConditionalBuilder)
    assert second.build() == {"type": "condition", "conditions": None, "then": [], "else": []}


def test_unknown_structure_kind_is_a_programming_error() -> None:
    with pytest.raises(ValueError, match="Unknown structure kind `while`"):
        new_assembler().open_structure("while")


def test_identity_rejects_non_integer_order() -> None:
    with pytest.raises(ValueError):
        DocumentIdentity(name="n", key="k", order="1")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        DocumentIdentity(name="n", key="k", order=True)


def test_identity_from_published_mapping() -> None:
    identity = DocumentIdentity.from_mapping({"name": "n", "key": "k", "order": 2, "isProtected": True})

    assert identity == DocumentIdentity(name="n", key="k", order=2, parent=None, is_protected=True)


def test_strip_reserved_fields_runs_effects_before_copying() -> None:
    visited: list[str] = []

    def record(key: str, value: object) -> None:
        visited.append(key)
        if isinstance(value, dict) and "_mark" in value:
            value["marked"] = True

    source = {"a": {"_mark": 1, "b": [1, 2]}, "_hidden": 3}
    stripped = strip_reserved_fields(source, (record,))

    assert stripped == {"a": {"b": [1, 2], "marked": True}}
    assert visited == ["", "a", "b", "0", "1", "marked"]


def test_publish_action_renames_function_in_branches_only() -> None:
    block = {
        "type": "condition",
        "conditions": [{"operator": "==", "operandType": "unit"}, {"function": "triggeringUnit"}, 1],
        "then": [{"function": "destroyEntity", "entity": {"function": "triggeringUnit"}}],
        "else": [],
    }

    assert publish_action(block) == {
        "type": "condition",
        "conditions": [{"operator": "==", "operandType": "unit"}, {"function": "triggeringUnit"}, 1],
        "then": [{"type": "destroyEntity", "entity": {"function": "triggeringUnit"}}],
        "else": [],
    }
