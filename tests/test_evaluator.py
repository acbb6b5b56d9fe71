"""Tests for the expression evaluator and bindings."""

import pytest

from tqs.compiler.evaluator import METHODS, Bindings, Evaluator, stringify
from tqs.exceptions import (
    InvalidExpressionSyntax,
    UnboundIdentifier,
    UnsupportedMethod,
)


@pytest.fixture
def evaluator():
    return Evaluator()


# =============================================================================
# Lookup and concatenation
# =============================================================================


class TestLookup:
    def test_identifier(self, evaluator):
        assert evaluator.evaluate("name", {"name": "world"}) == "world"

    def test_surrounding_whitespace(self, evaluator):
        assert evaluator.evaluate("  name ", {"name": "world"}) == "world"

    def test_unbound_identifier(self, evaluator):
        with pytest.raises(UnboundIdentifier) as exc_info:
            evaluator.evaluate("missing", {})
        assert exc_info.value.name == "missing"

    def test_property_of_mapping(self, evaluator):
        bindings = {"user": {"name": "Ada"}}
        assert evaluator.evaluate("user.name", bindings) == "Ada"

    def test_missing_property_names_path(self, evaluator):
        with pytest.raises(UnboundIdentifier) as exc_info:
            evaluator.evaluate("user.email", {"user": {"name": "Ada"}})
        assert exc_info.value.name == "user.email"

    def test_string_length(self, evaluator):
        assert evaluator.evaluate("title.length", {"title": "Hello"}) == "5"

    def test_unknown_string_property(self, evaluator):
        with pytest.raises(UnboundIdentifier):
            evaluator.evaluate("title.size", {"title": "Hello"})


class TestConcatenation:
    def test_left_to_right(self, evaluator):
        bindings = {"a": "x", "b": "y", "c": "z"}
        assert evaluator.evaluate("a + b + c", bindings) == "xyz"

    def test_with_string_constant(self, evaluator):
        bindings = {"title": "Hello"}
        result = evaluator.evaluate("title + ' ' + title.toUpperCase()", bindings)
        assert result == "Hello HELLO"

    def test_non_string_operands_are_stringified(self, evaluator):
        bindings = {"n": 3, "flag": True, "nothing": None, "ratio": 1.5}
        assert evaluator.evaluate("n + flag + nothing + ratio", bindings) == (
            "3truenull1.5"
        )

    def test_numbers_are_not_added(self, evaluator):
        assert evaluator.evaluate("a + b", {"a": 1, "b": 2}) == "12"

    def test_unbound_operand_fails_whole_expression(self, evaluator):
        with pytest.raises(UnboundIdentifier):
            evaluator.evaluate("a + missing", {"a": "x"})


# =============================================================================
# Methods
# =============================================================================


class TestMethods:
    def test_recognized_set(self):
        assert set(METHODS) == {
            "toUpperCase",
            "toLowerCase",
            "trim",
            "trimStart",
            "trimEnd",
            "toString",
        }

    def test_each_method(self, evaluator):
        bindings = {"s": "  MiXed  "}
        assert evaluator.evaluate("s.toUpperCase()", bindings) == "  MIXED  "
        assert evaluator.evaluate("s.toLowerCase()", bindings) == "  mixed  "
        assert evaluator.evaluate("s.trim()", bindings) == "MiXed"
        assert evaluator.evaluate("s.trimStart()", bindings) == "MiXed  "
        assert evaluator.evaluate("s.trimEnd()", bindings) == "  MiXed"
        assert evaluator.evaluate("s.toString()", bindings) == "  MiXed  "

    def test_method_on_non_string(self, evaluator):
        assert evaluator.evaluate("n.toString()", {"n": 42}) == "42"
        assert evaluator.evaluate("flag.toUpperCase()", {"flag": False}) == "FALSE"

    def test_chained_methods(self, evaluator):
        assert evaluator.evaluate("s.trim().toUpperCase()", {"s": " a "}) == "A"

    def test_unsupported_method(self, evaluator):
        with pytest.raises(UnsupportedMethod) as exc_info:
            evaluator.evaluate("s.reverse()", {"s": "abc"})
        assert exc_info.value.name == "reverse"

    def test_receiver_looked_up_before_method_check(self, evaluator):
        """A missing receiver is reported even when the method is unsupported."""
        with pytest.raises(UnboundIdentifier) as exc_info:
            evaluator.evaluate("missing.reverse()", {})
        assert exc_info.value.name == "missing"

    def test_python_method_names_are_not_exposed(self, evaluator):
        with pytest.raises(UnsupportedMethod):
            evaluator.evaluate("s.upper()", {"s": "abc"})

    def test_disabled_method(self):
        evaluator = Evaluator(methods=["toLowerCase"])
        assert evaluator.evaluate("s.toLowerCase()", {"s": "ABC"}) == "abc"
        with pytest.raises(UnsupportedMethod):
            evaluator.evaluate("s.toUpperCase()", {"s": "abc"})

    def test_unknown_enabled_method_rejected(self):
        with pytest.raises(ValueError):
            Evaluator(methods=["toUpperCase", "eval"])


def test_syntax_error_propagates(evaluator):
    with pytest.raises(InvalidExpressionSyntax):
        evaluator.evaluate("a +", {"a": "x"})


def test_stringify():
    assert stringify("x") == "x"
    assert stringify(None) == "null"
    assert stringify(True) == "true"
    assert stringify(0) == "0"


# =============================================================================
# Bindings
# =============================================================================


class TestBindings:
    def test_mapping_and_kwargs(self):
        bindings = Bindings({"a": 1}, b=2)
        assert dict(bindings) == {"a": 1, "b": 2}
        assert len(bindings) == 2
        assert "a" in bindings

    def test_kwargs_override_mapping(self):
        assert Bindings({"a": 1}, a=2)["a"] == 2

    def test_read_only(self):
        bindings = Bindings({"a": 1})
        with pytest.raises(TypeError):
            bindings["a"] = 2  # type: ignore[index]

    def test_copies_input(self):
        source = {"a": 1}
        bindings = Bindings(source)
        source["a"] = 2
        assert bindings["a"] == 1

    def test_non_string_names_rejected(self):
        with pytest.raises(TypeError):
            Bindings({1: "x"})

    def test_merge_precedence(self):
        base = Bindings({"a": 1, "b": 1})
        merged = base.merge({"b": 2})
        assert dict(merged) == {"a": 1, "b": 2}
        assert base["b"] == 1

    def test_binding_named_values(self):
        assert Bindings(values="v")["values"] == "v"
