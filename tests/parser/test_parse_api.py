"""Tests for the public parse entry points."""

import pytest

from vecset import (
    Leaf,
    MismatchedCloserError,
    OrderedCollection,
    ParseError,
    ParserConfig,
    UnorderedCollection,
    parse,
    parse_to_python,
    render,
    try_parse,
)
from vecset.errors import NestingTooDeepError, UnexpectedEndOfInputError, UnknownCharacterError


class TestLiteralCases:
    """Known inputs and their canonical renderings."""

    @pytest.mark.parametrize("source,expected", [
        ("[]", "[]"),
        ("[0]", '["0"]'),
        ("[[5]]", '[["5"]]'),
        ("[[0], 1]", '[["0"],"1"]'),
        ("[[[[[[0]]]], [[1, 2, 3], [4]]], 5]", '[[[[[["0"]]]],[["1","2","3"],["4"]]],"5"]'),
        ("[{[[[[0]]]], {[1, 2, 3], {4}}}, 5]", '[{[[[["0"]]]],{["1","2","3"],{"4"}}},"5"]'),
    ])
    def test_renders(self, source, expected):
        assert render(parse(source)) == expected

    def test_mismatched_closer(self):
        with pytest.raises(MismatchedCloserError):
            parse("[}")

    def test_bare_leaf(self):
        assert parse("0") == Leaf("0")

    def test_unordered_duplicates_collapse(self):
        assert parse_to_python("{a, a}") == frozenset({"a"})

    @pytest.mark.parametrize("source", [
        "[a,b]",
        "[ a , b ]",
        "\n[\ta,\n b]\n",
        "  [a,   b]  ",
    ])
    def test_whitespace_is_insignificant(self, source):
        assert parse(source) == OrderedCollection((Leaf("a"), Leaf("b")))


class TestProperties:
    """Behaviour that holds for every accepted input."""

    SAMPLES = [
        "[]",
        "{}",
        "x",
        "[{a, b}, [c, {d, d}], e]",
        "[{[[[[0]]]], {[1, 2, 3], {4}}}, 5]",
        "{[], {}, [[]], {{}}}",
    ]

    @pytest.mark.parametrize("source", SAMPLES)
    def test_deterministic(self, source):
        assert parse(source) == parse(source)
        assert render(parse(source)) == render(parse(source))

    @pytest.mark.parametrize("source", SAMPLES)
    def test_leaves_stay_strings(self, source):
        pending = [parse(source)]
        while pending:
            value = pending.pop()
            if isinstance(value, Leaf):
                assert isinstance(value.text, str)
            else:
                assert isinstance(value, (OrderedCollection, UnorderedCollection))
                pending.extend(value)

    @pytest.mark.parametrize("source", SAMPLES)
    def test_reparsing_notation_is_idempotent(self, source):
        value = parse(source)
        assert parse(render(value, quote_leaves=False)) == value


class TestTryParse:
    """Non-raising entry point."""

    def test_success(self):
        outcome = try_parse("[a]")
        assert outcome.ok
        assert outcome.error is None
        assert outcome.unwrap() == OrderedCollection((Leaf("a"),))

    def test_failure(self):
        outcome = try_parse("[a")
        assert not outcome.ok
        assert outcome.value is None
        assert isinstance(outcome.error, ParseError)
        with pytest.raises(ParseError):
            outcome.unwrap()


class TestParseArguments:
    """Input validation and configuration."""

    def test_rejects_bytes(self):
        with pytest.raises(TypeError):
            parse(b"[0]")

    def test_reserved_character(self):
        with pytest.raises(UnknownCharacterError) as exc_info:
            parse("[a:b]", config=ParserConfig(reserved=":"))
        assert exc_info.value.column == 3

    def test_reserved_characters_are_payload_by_default(self):
        assert parse("[a:b]") == OrderedCollection((Leaf("a:b"),))

    def test_max_depth(self):
        config = ParserConfig(max_depth=2)
        assert parse("[[0]]", config=config) == OrderedCollection((OrderedCollection((Leaf("0"),)),))
        with pytest.raises(NestingTooDeepError):
            parse("[[[0]]]", config=config)

    def test_default_depth_limit(self):
        with pytest.raises(NestingTooDeepError):
            parse("[" * 101 + "]" * 101)
        parse("[" * 100 + "]" * 100)

    def test_end_of_input_position(self):
        with pytest.raises(UnexpectedEndOfInputError) as exc_info:
            parse("  \n  ")
        assert (exc_info.value.line, exc_info.value.column) == (2, 3)


class TestUnlimitedDepth:
    """Deep input with the nesting limit switched off."""

    DEPTH = 3000
    UNLIMITED = ParserConfig(max_depth=None)

    def deep_mixed(self):
        return "{" + "[" * self.DEPTH + "0" + "]" * self.DEPTH + "}"

    def test_ordered_chain_inside_unordered(self):
        value = parse(self.deep_mixed(), config=self.UNLIMITED)
        assert isinstance(value, UnorderedCollection)
        assert len(value) == 1

    def test_try_parse(self):
        outcome = try_parse(self.deep_mixed(), config=self.UNLIMITED)
        assert outcome.ok

    def test_deep_values_compare_equal(self):
        first = parse(self.deep_mixed(), config=self.UNLIMITED)
        second = parse(self.deep_mixed(), config=self.UNLIMITED)
        assert first == second
        assert hash(first) == hash(second)
        assert first != parse("{" + "[" * self.DEPTH + "1" + "]" * self.DEPTH + "}", config=self.UNLIMITED)

    def test_deep_duplicates_collapse(self):
        chain = "[" * self.DEPTH + "0" + "]" * self.DEPTH
        value = parse("{" + chain + ", " + chain + "}", config=self.UNLIMITED)
        assert len(value) == 1

    def test_to_python(self):
        value = parse_to_python("[" * self.DEPTH + "0" + "]" * self.DEPTH, config=self.UNLIMITED)
        for _ in range(self.DEPTH):
            assert isinstance(value, list)
            (value,) = value
        assert value == "0"
