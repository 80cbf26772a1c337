import pytest

from xento.json_parser import JsonObject, JsonParseError, JsonParser, parse


def test_parse_null():
    assert JsonParser("null").parse_value() is None


def test_parse_boolean_true():
    assert JsonParser("true").parse_value() is True


def test_parse_boolean_false():
    assert JsonParser("false").parse_value() is False


def test_parse_number_integer():
    value = JsonParser("42").parse_value()
    assert value == 42
    assert type(value) is int


def test_parse_number_negative_integer():
    value = JsonParser("-42").parse_value()
    assert value == -42
    assert type(value) is int


def test_parse_number_float():
    value = JsonParser("3.14").parse_value()
    assert value == 3.14
    assert type(value) is float


def test_parse_string():
    assert JsonParser('"hello"').parse_value() == "hello"


def test_parse_array():
    value = JsonParser("[1, 2, 3]").parse_value()
    assert value == [1, 2, 3]
    assert all(type(item) is int for item in value)


def test_parse_object():
    value = JsonParser('{"foo": 1, "bar": true}').parse_value()
    assert value == JsonObject([("foo", 1), ("bar", True)])
    assert value.get("bar") is True


def test_parse_function_matches_parser():
    assert parse('[null, "x"]') == [None, "x"]


def test_nested_structures():
    value = parse('{"a": [1, {"b": []}], "c": {}}')
    assert value == JsonObject([("a", [1, JsonObject([("b", [])])]), ("c", JsonObject())])


def test_object_keeps_duplicate_keys_in_order():
    value = parse('{"k": 1, "k": 2}')
    assert list(value) == [("k", 1), ("k", 2)]
    assert value.get("k") == 1
    assert len(value) == 2


def test_exponent_makes_float():
    value = parse("1e3")
    assert value == 1000.0
    assert type(value) is float


def test_escapes():
    assert parse(r'"a\"b\\c\/d\n\t\r\b\f"') == 'a"b\\c/d\n\t\r\b\f'


def test_unicode_escape():
    assert parse(r'"\u00e9!"') == "\u00e9!"


def test_unicode_escape_takes_all_hex_digits():
    # Hex digits after the escape are all part of the code point.
    assert parse(r'"\u41"') == "A"


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "Unexpected end of input"),
        ("x", "Unexpected character: x"),
        (" 1", "Unexpected character:  "),
        ("nul", "Unexpected end of input"),
        ("nulx", "1 Unexpected character: x, expected: l"),
        ("tru", "Unexpected end of input"),
        ('"abc', "Unexpected end of input"),
        (r'"\q"', "Invalid escape character: q"),
        (r'"\uzz"', "Invalid Unicode escape: cannot parse integer from empty string"),
        (r'"\ud800"', "Invalid Unicode code point: 55296"),
        ("1e", "Invalid float number: invalid float literal"),
        ("1-2", "Invalid integer number: invalid digit found in string"),
        ("9223372036854775808", "Invalid integer number: number too large to fit in target type"),
        ("[1 2]", "Invalid array"),
        ('{"a" 1}', "Unexpected character: 1, expected: :"),
        ('{"a": 1', "Unexpected end of input"),
        ("{a: 1}", "Unexpected character: a, expected: \""),
    ],
)
def test_errors(text, message):
    with pytest.raises(JsonParseError) as excinfo:
        parse(text)
    assert str(excinfo.value) == message


def test_integer_limits():
    assert parse("9223372036854775807") == 2**63 - 1
    assert parse("-9223372036854775808") == -(2**63)


def test_trailing_comma_in_array_is_accepted():
    assert parse("[1, 2,]") == [1, 2]


def test_trailing_text_is_ignored():
    assert parse("true false") is True


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse("?")