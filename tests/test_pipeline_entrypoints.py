import pytest

from trigscript.catalog import ActionCatalog, FunctionSignature, Param
from trigscript.document import DocumentIdentity
from trigscript.parser import ParserOptions
from trigscript.pipeline import (
    ScriptContext,
    SideTable,
    build_script_services,
    process_document,
)
from trigscript.text import SourceRange
from tests._shared_cases import CASE_OPTIONS, DOCUMENT_CASES, ScriptCase, case_id

IDENTITY = DocumentIdentity(name="Script", key="k1", order=0)


def run(text: str, context: ScriptContext | None = None):
    return process_document(text, IDENTITY, context, options=CASE_OPTIONS)


@pytest.mark.parametrize("case", DOCUMENT_CASES, ids=case_id)
def test_document_cases_build_cleanly(case: ScriptCase) -> None:
    result = run(case.source)

    assert result.diagnostics == []
    assert len(result.document["actions"]) == case.action_count
    assert len(result.document["triggers"]) == case.trigger_count
    assert result.has_output == bool(case.action_count or case.trigger_count)


@pytest.mark.parametrize("case", DOCUMENT_CASES, ids=case_id)
def test_rendered_document_rebuilds_the_same_document(case: ScriptCase) -> None:
    first = run(case.source)

    second = run(first.rendered_text)

    assert second.diagnostics == []
    assert second.document == first.document


def test_commented_action_is_published_with_type_field() -> None:
    result = process_document(
        "// set hp\nsetHealth(player, 100)",
        IDENTITY,
        options=ParserOptions.with_variables({"player": "unit"}),
    )

    assert result.diagnostics == []
    assert result.document["actions"] == [
        {
            "type": "setHealth",
            "entity": {"function": "getVariable", "variableName": "player"},
            "value": 100,
            "comment": "set hp",
        }
    ]


def test_misspelled_function_is_reported_and_skipped() -> None:
    result = run("setHelth(player, 100)")

    assert result.document["actions"] == []
    assert result.has_errors
    assert len(result.diagnostics) == 1
    diagnostic = result.diagnostics[0]
    assert diagnostic.code == "PARSER_UNEXPECTED_TOKEN"
    assert diagnostic.severity == "error"
    assert "setHelth" in diagnostic.message
    assert diagnostic.range == SourceRange(1, 1, 1, 9)


def test_non_ascii_digit_is_an_unexpected_token_not_a_crash() -> None:
    result = run("sendChatMessage(\u00b2)\nsendChatMessage(\"ok\")")

    assert result.document["actions"] == [{"type": "sendChatMessage", "message": "ok"}]
    (diagnostic,) = result.diagnostics
    assert diagnostic.code == "PARSER_UNEXPECTED_TOKEN"
    assert diagnostic.range == SourceRange(1, 17, 1, 18)


def test_diagnostic_ranges_are_anchored_to_document_lines() -> None:
    result = run('sendChatMessage("ok")\n\n    setHelth(player, 100)')

    assert len(result.document["actions"]) == 1
    assert result.diagnostics[0].range == SourceRange(3, 5, 3, 13)
    assert result.diagnostics_as_dicts() == [
        {
            "message": "expect FUNCTION here, but got setHelth",
            "severity": "error",
            "range": {"startLine": 3, "startColumn": 5, "endLine": 3, "endColumn": 13},
        }
    ]


def test_failing_line_does_not_abort_the_build() -> None:
    result = run('sendChatMessage("a")\ndestroyEntity(ghost)\nsendChatMessage("b")')

    assert [action["message"] for action in result.document["actions"]] == ["a", "b"]
    assert [diagnostic.message for diagnostic in result.diagnostics] == ["ghost is undefined"]
    assert result.diagnostics[0].code == "PARSER_UNDEFINED_NAME"
    assert result.diagnostics[0].range == SourceRange(2, 15, 2, 20)


def test_type_mismatch_keeps_line_out_of_document() -> None:
    result = run('setHealth(player, "full")')

    assert result.document["actions"] == []
    assert [diagnostic.code for diagnostic in result.diagnostics] == ["TYPECHECK_ARGUMENT_TYPE_MISMATCH"]


def test_empty_text_is_an_empty_document() -> None:
    result = run("")

    assert result.diagnostics == []
    assert result.has_output is False
    assert result.document["actions"] == []
    assert result.document["triggers"] == []
    assert result.document["conditions"] == [{"operator": "==", "operandType": "boolean"}, True, True]
    assert result.rendered_text == ""


def test_all_line_break_styles_split_lines() -> None:
    result = run('sendChatMessage("a")\r\nsendChatMessage("b")\rsendChatMessage("c")\n')

    assert [action["message"] for action in result.document["actions"]] == ["a", "b", "c"]


def test_triggers_are_collected_in_line_order() -> None:
    result = run("@gameStart\nsendChatMessage(\"x\")\n@unitDies")

    assert result.document["triggers"] == [{"type": "gameStart"}, {"type": "unitDies"}]


def test_unknown_trigger_is_reported() -> None:
    result = run("@noSuchEvent")

    assert result.document["triggers"] == []
    assert [diagnostic.message for diagnostic in result.diagnostics] == ["noSuchEvent is undefined"]
    assert result.diagnostics[0].range == SourceRange(1, 2, 1, 13)


def test_conditional_block_with_else() -> None:
    source = "\n".join(
        [
            "if randomNumberBetween(1, 10) > 5",
            '  sendChatMessage("big")',
            "else",
            '  sendChatMessage("small")',
            "end",
        ]
    )

    result = run(source)

    assert result.diagnostics == []
    assert result.document["actions"] == [
        {
            "type": "condition",
            "conditions": [
                {"operator": ">", "operandType": "number"},
                {"function": "randomNumberBetween", "min": 1, "max": 10},
                5,
            ],
            "then": [{"type": "sendChatMessage", "message": "big"}],
            "else": [{"type": "sendChatMessage", "message": "small"}],
        }
    ]


def test_nested_blocks_publish_branch_actions() -> None:
    source = "if true\nif false\ndestroyEntity(player)\nend\nend"

    result = run(source)

    (outer,) = result.document["actions"]
    (inner,) = outer["then"]
    assert inner["then"] == [{"type": "destroyEntity", "entity": {"function": "getVariable", "variableName": "player"}}]


def test_comment_inside_block_waits_for_next_top_level_action() -> None:
    result = run("if true\n// inner note\nsendChatMessage(\"x\")\nend\nsendChatMessage(\"y\")")

    block, after = result.document["actions"]
    assert "comment" not in block["then"][0]
    assert after == {"type": "sendChatMessage", "message": "y", "comment": "inner note"}


def test_bare_comment_sigil_adds_no_comment() -> None:
    result = run("//\n// note\nsendChatMessage(\"x\")")

    assert result.document["actions"] == [{"type": "sendChatMessage", "message": "x", "comment": "note"}]


def test_failed_condition_leaves_block_open_with_empty_conditions() -> None:
    result = run("if 5\n  sendChatMessage(\"x\")\nend")

    (block,) = result.document["actions"]
    assert block["conditions"] is None
    assert block["then"] == [{"type": "sendChatMessage", "message": "x"}]
    assert [diagnostic.message for diagnostic in result.diagnostics] == ["expect boolean here, but got number"]
    assert result.diagnostics[0].range == SourceRange(1, 3, 1, 5)


def test_unmatched_else_and_end_are_reported() -> None:
    result = run("else\nsendChatMessage(\"x\")\n  end")

    assert [diagnostic.code for diagnostic in result.diagnostics] == [
        "STRUCTURE_UNMATCHED_ELSE",
        "STRUCTURE_UNMATCHED_END",
    ]
    assert result.diagnostics[1].range == SourceRange(3, 3, 3, 6)
    assert len(result.document["actions"]) == 1


def test_duplicate_else_is_reported_once_per_extra_branch() -> None:
    result = run("if true\nelse\nelse\nend")

    assert [diagnostic.code for diagnostic in result.diagnostics] == ["STRUCTURE_DUPLICATE_ELSE"]
    assert result.diagnostics[0].range == SourceRange(3, 1, 3, 5)
    assert len(result.document["actions"]) == 1


def test_unclosed_block_is_a_warning_and_left_out() -> None:
    result = run('sendChatMessage("before")\nif true\n  sendChatMessage("inside")')

    assert [action["message"] for action in result.document["actions"]] == ["before"]
    assert len(result.diagnostics) == 1
    assert result.diagnostics[0].code == "STRUCTURE_UNCLOSED_BLOCK"
    assert result.diagnostics[0].severity == "warning"
    assert result.diagnostics[0].range == SourceRange(2, 1, 2, 3)
    assert result.has_errors is False


def test_side_table_resolves_this_entity() -> None:
    context = ScriptContext(side_table=SideTable.from_mapping({"thisEntity": [{"dataType": "unit", "entity": "Knight", "key": "k9"}]}))

    result = run("destroyEntity(thisEntity)", context)

    assert result.document["actions"] == [
        {"type": "destroyEntity", "entity": {"function": "thisEntity", "entity": "Knight", "key": "k9"}}
    ]


def test_custom_catalog_is_used_for_parsing() -> None:
    catalog = ActionCatalog.of(
        [FunctionSignature("healUnit", params=(Param("amount", "number"),), return_type="action", category="action")],
        triggers=["unitHealed"],
    )

    result = process_document("@unitHealed\nhealUnit(5)", IDENTITY, catalog=catalog)

    assert result.diagnostics == []
    assert result.document["actions"] == [{"type": "healUnit", "amount": 5}]
    assert result.rendered_text == "@unitHealed\nhealUnit(5)"


def test_services_cannot_be_combined_with_catalog_or_options() -> None:
    with pytest.raises(ValueError, match="Pass either services or catalog/options, not both"):
        process_document("", IDENTITY, services=build_script_services(), options=CASE_OPTIONS)


def test_identity_is_carried_into_document() -> None:
    identity = DocumentIdentity(name="Intro", key="intro", order=7, parent="root", is_protected=True)

    document = process_document("", identity).document

    assert document["name"] == "Intro"
    assert document["key"] == "intro"
    assert document["order"] == 7
    assert document["parent"] == "root"
    assert document["isProtected"] is True
