"""Line grammar routines that build fragments.

```
line        := trigger | expression
trigger     := '@' IDENTIFIER
expression  := and_expr (('or' | '||') and_expr)*
and_expr    := comparison (('and' | '&&') comparison)*
comparison  := additive (COMPARISON additive)?
additive    := term (('+' | '-') term)*
term        := unary (('*' | '/' | '%') unary)*
unary       := '-' unary | primary
primary     := NUMBER | STRING | 'true' | 'false' | call | name | '(' expression ')'
call        := FUNCTION '(' (expression (',' expression)*)? ')'
```
"""

from typing import Any, Final

from trigscript.catalog import (
    CALCULATE_FUNCTION,
    THIS_ENTITY_FUNCTION,
    VARIABLE_FUNCTION,
    FunctionSignature,
)
from trigscript.fragments import FUNCTION_FIELD, Fragment, PUBLIC_TYPE_FIELD
from trigscript.lexer import TokenKind, unquote_string
from trigscript.parser.errors import UndefinedNameError
from trigscript.parser.parser import Parser
from trigscript.typecheck.kinds import DATA_TYPE_FIELD, infer_data_type

COMPARISON_OPERATORS: Final[dict[TokenKind, str]] = {
    TokenKind.EQUAL_EQUAL: "==",
    TokenKind.NOT_EQUAL: "!=",
    TokenKind.LESS_THAN_OR_EQUAL: "<=",
    TokenKind.GREATER_THAN_OR_EQUAL: ">=",
    TokenKind.LESS_THAN: "<",
    TokenKind.GREATER_THAN: ">",
}
ADDITIVE_OPERATORS: Final[dict[TokenKind, str]] = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
}
MULTIPLICATIVE_OPERATORS: Final[dict[TokenKind, str]] = {
    TokenKind.STAR: "*",
    TokenKind.SLASH: "/",
    TokenKind.PERCENT: "%",
}

KEYWORDS: Final[frozenset[str]] = frozenset({"and", "or", "true", "false", "if", "else", "end"})

PRIMARY_EXPECTED: Final[tuple[str, ...]] = ("NUMBER", "STRING", "BOOLEAN", "FUNCTION", "VARIABLE", "'('", "'-'")
TRIGGER_EXPECTED: Final[tuple[str, ...]] = ("TRIGGER",)
_OPERATOR_SPELLINGS: Final[tuple[str, ...]] = (
    *COMPARISON_OPERATORS.values(),
    *ADDITIVE_OPERATORS.values(),
    *MULTIPLICATIVE_OPERATORS.values(),
)
CONTINUATION_EXPECTED: Final[tuple[str, ...]] = (
    *(f"'{operator}'" for operator in _OPERATOR_SPELLINGS),
    "'and'",
    "'or'",
    "end of line",
)


def parse_line(parser: Parser) -> Fragment:
    if parser.at(TokenKind.AT):
        fragment = parse_trigger(parser)
    else:
        fragment = parse_expression(parser)
    parse_end_of_line(parser)
    return fragment


def parse_end_of_line(parser: Parser) -> None:
    if parser.at(TokenKind.EOF):
        return
    raise parser.unexpected(CONTINUATION_EXPECTED)


def parse_trigger(parser: Parser) -> dict[str, Any]:
    parser.expect(TokenKind.AT)
    if not parser.at(TokenKind.IDENTIFIER):
        raise parser.unexpected(TRIGGER_EXPECTED)
    name = parser.current_text
    known = parser.catalog.triggers
    if known and name not in known and not parser.options.allow_unknown_triggers:
        raise UndefinedNameError(name)
    parser.bump()
    return {PUBLIC_TYPE_FIELD: name}


def parse_expression(parser: Parser) -> Fragment:
    left = parse_and(parser)
    while parser.at(TokenKind.PIPE_PIPE) or parser.at_keyword("or"):
        parser.bump()
        right = parse_and(parser)
        left = [{"operator": "OR", "operandType": "or"}, left, right]
    return left


def parse_and(parser: Parser) -> Fragment:
    left = parse_comparison(parser)
    while parser.at(TokenKind.AMP_AMP) or parser.at_keyword("and"):
        parser.bump()
        right = parse_comparison(parser)
        left = [{"operator": "AND", "operandType": "and"}, left, right]
    return left


def parse_comparison(parser: Parser) -> Fragment:
    left = parse_additive(parser)
    operator = COMPARISON_OPERATORS.get(parser.current)
    if operator is None:
        return left
    parser.bump()
    right = parse_additive(parser)
    operand_type = infer_data_type(left, parser.catalog)
    return [{"operator": operator, "operandType": operand_type}, left, right]


def parse_additive(parser: Parser) -> Fragment:
    left = parse_term(parser)
    while (operator := ADDITIVE_OPERATORS.get(parser.current)) is not None:
        parser.bump()
        left = _calculation(operator, left, parse_term(parser))
    return left


def parse_term(parser: Parser) -> Fragment:
    left = parse_unary(parser)
    while (operator := MULTIPLICATIVE_OPERATORS.get(parser.current)) is not None:
        parser.bump()
        left = _calculation(operator, left, parse_unary(parser))
    return left


def parse_unary(parser: Parser) -> Fragment:
    if not parser.eat(TokenKind.MINUS):
        return parse_primary(parser)
    operand = parse_unary(parser)
    if isinstance(operand, (int, float)) and not isinstance(operand, bool):
        return -operand
    return _calculation("*", -1, operand)


def parse_primary(parser: Parser) -> Fragment:
    match parser.current:
        case TokenKind.INT:
            return int(parser.bump_text())
        case TokenKind.FLOAT:
            return float(parser.bump_text())
        case TokenKind.STRING:
            if parser.current_token.is_unterminated:
                raise parser.unexpected(("'\"'",), token=parser.eof_token)
            return unquote_string(parser.bump_text())
        case TokenKind.LPAREN:
            parser.bump()
            inner = parse_expression(parser)
            parser.expect(TokenKind.RPAREN)
            return inner
        case TokenKind.IDENTIFIER:
            return parse_name(parser)
        case _:
            raise parser.unexpected(PRIMARY_EXPECTED)


def parse_name(parser: Parser) -> Fragment:
    name = parser.current_text
    if name == "true" or name == "false":
        parser.bump()
        return name == "true"
    if name in KEYWORDS:
        raise parser.unexpected(PRIMARY_EXPECTED)

    signature = parser.catalog.get(name)
    if parser.nth(1) == TokenKind.LPAREN:
        if signature is None:
            raise parser.unexpected(("FUNCTION",))
        return parse_call(parser, signature)

    if signature is not None:
        if signature.arity > 0:
            parser.bump()
            raise parser.unexpected(("'('",))
        parser.bump()
        return {FUNCTION_FIELD: name}

    data_type = parser.options.variables.get(name)
    if data_type is not None:
        parser.bump()
        return {FUNCTION_FIELD: VARIABLE_FUNCTION, "variableName": name, DATA_TYPE_FIELD: data_type}

    raise UndefinedNameError(name)


def parse_call(parser: Parser, signature: FunctionSignature) -> dict[str, Any]:
    parser.bump()
    parser.expect(TokenKind.LPAREN)

    fragment: dict[str, Any] = {FUNCTION_FIELD: signature.key}
    for index, param in enumerate(signature.params):
        if index > 0:
            if not parser.at(TokenKind.COMMA):
                raise parser.unexpected(("','",))
            parser.bump()
        argument = parse_expression(parser)
        if isinstance(argument, dict) and argument.get(FUNCTION_FIELD) == THIS_ENTITY_FUNCTION:
            argument[DATA_TYPE_FIELD] = param.data_type
        fragment[param.field] = argument

    if not parser.at(TokenKind.RPAREN):
        raise parser.unexpected(("')'",))
    parser.bump()
    return fragment


def _calculation(operator: str, left: Fragment, right: Fragment) -> dict[str, Any]:
    return {FUNCTION_FIELD: CALCULATE_FUNCTION, "items": [{"operator": operator}, left, right]}

