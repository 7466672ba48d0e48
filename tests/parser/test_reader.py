# Copyright 2026 mstdoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the JavaScript reader and the expression tree it builds."""

import pytest

from mstdoc.parser import ExpressionKind, Expr, ParseError, parse, returned_expression, static_text

# ###############
# Helpers
# ###############


def _first_statement(source: str) -> Expr:
    program = parse(source)
    assert program.kind is ExpressionKind.PROGRAM
    return program.items[0]


def _initializer(source: str) -> Expr:
    """Return the value of the first variable declarator in *source*."""
    declaration = _first_statement(source)
    assert declaration.kind is ExpressionKind.VARIABLE_DECLARATION
    value = declaration.items[0].get("value")
    assert value is not None
    return value


# ###############
# Program structure
# ###############


class TestProgram:
    def test_empty_source(self) -> None:
        program = parse("")
        assert program.kind is ExpressionKind.PROGRAM
        assert program.items == ()

    def test_comments_are_dropped(self) -> None:
        program = parse("// leading\nconst a = 1; /* trailing */\n")
        assert [s.kind for s in program.items] == [ExpressionKind.VARIABLE_DECLARATION]

    def test_variable_declarator_fields(self) -> None:
        declaration = _first_statement("const Todo = types.model({});")
        declarator = declaration.items[0]
        assert declarator.kind is ExpressionKind.VARIABLE_DECLARATOR
        name = declarator.get("name")
        assert name is not None and name.kind is ExpressionKind.IDENTIFIER
        assert name.text == "Todo"

    def test_export_default_value(self) -> None:
        statement = _first_statement("export default types.model({});")
        assert statement.kind is ExpressionKind.EXPORT
        value = statement.get("value")
        assert value is not None and value.kind is ExpressionKind.CALL

    def test_export_declaration(self) -> None:
        statement = _first_statement("export const A = 1;")
        assert statement.kind is ExpressionKind.EXPORT
        declaration = statement.get("declaration")
        assert declaration is not None
        assert declaration.kind is ExpressionKind.VARIABLE_DECLARATION

    def test_lines_are_one_based(self) -> None:
        program = parse("\n\nconst a = 1;\n")
        assert program.items[0].line == 3


# ###############
# Expressions
# ###############


class TestExpressions:
    def test_call_with_member_callee(self) -> None:
        call = _initializer("const a = types.array(types.string);")
        assert call.kind is ExpressionKind.CALL
        callee = call.get("callee")
        assert callee is not None and callee.kind is ExpressionKind.MEMBER
        assert callee.text == "types.array"
        assert len(call.arguments) == 1
        assert call.arguments[0].text == "types.string"

    def test_member_object_and_property(self) -> None:
        member = _initializer("const a = types.string;")
        obj = member.get("object")
        prop = member.get("property")
        assert obj is not None and obj.text == "types"
        assert prop is not None and prop.text == "string"

    def test_string_value_is_decoded(self) -> None:
        assert _initializer("const a = 'single';").text == "single"
        assert _initializer('const a = "double";').text == "double"

    @pytest.mark.parametrize(
        ("literal", "kind"),
        [
            ("1.5", ExpressionKind.NUMBER),
            ("true", ExpressionKind.BOOLEAN),
            ("false", ExpressionKind.BOOLEAN),
            ("null", ExpressionKind.NULL),
            ("`tpl`", ExpressionKind.TEMPLATE),
            ("[1, 2]", ExpressionKind.ARRAY),
        ],
    )
    def test_literal_kinds(self, literal: str, kind: ExpressionKind) -> None:
        assert _initializer(f"const a = {literal};").kind is kind

    def test_object_entries(self) -> None:
        obj = _initializer("const a = { plain: 1, 'quoted': 2, short, ...rest, method() {} };")
        assert obj.kind is ExpressionKind.OBJECT
        kinds = [entry.kind for entry in obj.items]
        assert kinds == [
            ExpressionKind.PAIR,
            ExpressionKind.PAIR,
            ExpressionKind.SHORTHAND,
            ExpressionKind.SPREAD,
            ExpressionKind.METHOD,
        ]
        quoted_key = obj.items[1].get("key")
        assert quoted_key is not None and quoted_key.text == "quoted"
        assert obj.items[2].text == "short"
        assert obj.items[4].text == "method"

    def test_accessor_and_async_modifiers(self) -> None:
        obj = _initializer("const a = { get x() { return 1; }, set x(v) {}, async y() {}, plain() {} };")
        getter, setter, async_method, plain = obj.items
        assert "get" in getter.flags
        assert "set" in setter.flags
        assert "async" in async_method.flags
        assert plain.flags == frozenset()

    def test_parenthesized_unwrap(self) -> None:
        value = _initializer("const a = ((types.string));")
        assert value.kind is ExpressionKind.PARENTHESIZED
        assert value.unwrap().kind is ExpressionKind.MEMBER

    def test_generator_function_flag(self) -> None:
        call = _initializer("const a = flow(function* () { yield 1; });")
        function = call.arguments[0]
        assert function.kind is ExpressionKind.FUNCTION
        assert "*" in function.flags

    def test_unknown_nodes_keep_children(self) -> None:
        statement = _first_statement("if (ready) { const A = types.model({}); }")
        assert statement.kind is ExpressionKind.OTHER
        assert any(child.kind is ExpressionKind.BLOCK for child in statement.children())

    def test_deeply_nested_expression(self) -> None:
        terms = " + ".join(["1"] * 3000)
        value = _initializer(f"const total = {terms};")
        depth = 0
        while value.kind is ExpressionKind.OTHER and value.items:
            value = value.items[0]
            depth += 1
        assert depth == 2999
        assert value.kind is ExpressionKind.NUMBER

    @pytest.mark.parametrize(
        ("literal", "expected"),
        [
            ("'quoted'", "quoted"),
            ("`plain`", "plain"),
            ("`with ${part}`", None),
            ("name", None),
            ("42", None),
        ],
    )
    def test_static_text(self, literal: str, expected: str | None) -> None:
        assert static_text(_initializer(f"const a = {literal};")) == expected

    def test_nodes_hash_by_identity(self) -> None:
        first = _initializer("const a = types.string;")
        second = _initializer("const a = types.string;")
        assert first != second
        assert len({first, second}) == 2


# ###############
# Returned expressions
# ###############


class TestReturnedExpression:
    def test_arrow_expression_body(self) -> None:
        arrow = _initializer("const f = self => ({ a() {} });")
        returned = returned_expression(arrow)
        assert returned is not None and returned.kind is ExpressionKind.OBJECT

    def test_first_top_level_return(self) -> None:
        arrow = _initializer("const f = self => { const x = 1; return { x }; return null; };")
        returned = returned_expression(arrow)
        assert returned is not None and returned.kind is ExpressionKind.OBJECT

    def test_function_expression(self) -> None:
        function = _initializer("const f = function (self) { return { a: 1 }; };")
        returned = returned_expression(function)
        assert returned is not None and returned.kind is ExpressionKind.OBJECT

    def test_no_return(self) -> None:
        arrow = _initializer("const f = () => { doSomething(); };")
        assert returned_expression(arrow) is None

    def test_not_a_function(self) -> None:
        assert returned_expression(_initializer("const f = 1;")) is None


# ###############
# Errors
# ###############


class TestParseErrors:
    def test_syntax_error_raises(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("const a = types.model({ a: });\n")
        assert exc_info.value.line == 1

    def test_error_line_is_reported(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("const ok = 1;\nconst broken = ;\n")
        assert exc_info.value.line == 2
        assert "Line 2" in str(exc_info.value)
