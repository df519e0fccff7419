import math

import pytest

from passgen.errors import TemplateSyntaxError
from passgen.template import (parse_template, validate_template, resolve_character_set,
                              calculate_template_entropy, LITERAL, CHARACTER_SET)


def test_parse_instructions():
    instructions = parse_template("[A-Z]{3}-[0-9]{4}")
    assert [i.kind for i in instructions] == [CHARACTER_SET, LITERAL, CHARACTER_SET]
    letters, dash, digits = instructions
    assert letters.charset == "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    assert letters.quantity == 3
    assert dash.value == "-"
    assert dash.quantity == 1
    assert dash.entropy == 0
    assert digits.charset == "0123456789"
    assert digits.quantity == 4


def test_valid_template_entropy():
    result = validate_template("[A-Z]{3}-[0-9]{4}")
    assert result.is_valid, result.errors
    expected = 3 * math.log2(26) + 4 * math.log2(10)
    assert result.metadata.total_entropy == pytest.approx(expected)
    assert result.metadata.total_length == 8
    assert result.metadata.has_random_content
    assert calculate_template_entropy(result.metadata.instructions) == pytest.approx(expected)


def test_quantity_defaults_to_one():
    instructions = parse_template("x[DIGITS]y")
    assert instructions[1].quantity == 1
    assert instructions[1].entropy == pytest.approx(math.log2(10))


@pytest.mark.parametrize("template, position, fragment", [
    ("[A-Z", 0, "Unmatched '['"),
    ("ab[]", 2, "Empty character set"),
    ("[a-z]{3", 5, "Unmatched '{'"),
    ("[a-z]{}", 5, "Empty quantity"),
    ("[a-z]{0}", 5, "Invalid quantity"),
    ("[a-z]{x}", 5, "Invalid quantity"),
    ("[a-z]{-2}", 5, "Invalid quantity"),
    ("[a-z]{1,3}", 5, "Range quantities"),
    ("[a-z]{1001}", 5, "Quantity too large"),
    ("ab[z-a]{4}", 2, "Invalid range"),
])
def test_syntax_errors(template, position, fragment):
    with pytest.raises(TemplateSyntaxError) as excinfo:
        parse_template(template)
    assert excinfo.value.position == position
    assert fragment in str(excinfo.value)
    result = validate_template(template)
    assert not result.is_valid
    assert result.metadata is None
    assert result.errors[0].startswith("Template syntax error: ")


def test_empty_template():
    with pytest.raises(TemplateSyntaxError):
        parse_template("")
    assert not validate_template(None).is_valid


def test_literal_only_rejected():
    result = validate_template("abc-def")
    assert not result.is_valid
    assert not result.metadata.has_random_content
    assert any("at least one random character set" in e for e in result.errors)


def test_insufficient_entropy():
    result = validate_template("[0-9]{2}")
    assert not result.is_valid
    assert any("insufficient entropy" in e for e in result.errors)


def test_too_long():
    assert validate_template("[a-z]{1000}").is_valid
    result = validate_template("[a-z]{1000}[0-9]")
    assert not result.is_valid
    assert any("too long" in e for e in result.errors)


def test_resolve_character_set():
    assert resolve_character_set("digits").charset == "0123456789"
    assert resolve_character_set("Special").size == 26
    assert resolve_character_set("alpha").size == 52
    assert resolve_character_set("ALPHANUMERIC").size == 62
    assert resolve_character_set("hex").charset == "0123456789ABCDEF"
    assert resolve_character_set("a-f").charset == "abcdef"
    assert resolve_character_set("0-3").charset == "0123"
    assert resolve_character_set("aab").charset == "ab"
    assert resolve_character_set("x-").charset == "x-"
