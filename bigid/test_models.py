"""
Tests for the BigID text, JSON and binding adapters.
"""

import json

import pytest
from pydantic import BaseModel, ValidationError

from bigid.models import INT64_MAX, INT64_MIN, BigID, ParseError, parse_int64


class Record(BaseModel):
    id: BigID
    name: str


@pytest.mark.parametrize("value", [0, 1, -1, 4611686018695069697, INT64_MAX, INT64_MIN])
def test_render_then_parse(value):
    big_id = BigID(value)
    assert str(big_id) == str(value)
    assert BigID.parse(str(big_id)) == big_id


def test_parse_accepts_sign():
    assert BigID.parse("+42") == 42
    assert BigID.parse("-42") == -42


@pytest.mark.parametrize("text", ["", "not-a-number", "12a", " 12", "12 ", "1_000", "1.5", "+", "-", "0x10", "١٢"])
def test_parse_rejects_invalid_syntax(text):
    with pytest.raises(ParseError) as exc_info:
        BigID.parse(text)
    assert exc_info.value.reason == ParseError.INVALID_SYNTAX
    assert exc_info.value.text == text


@pytest.mark.parametrize("text", [
    str(INT64_MAX + 1),
    str(INT64_MIN - 1),
    "99999999999999999999",
    "9" * 5000,
    "-" + "9" * 5000,
    "0" * 5000 + "1" + "0" * 19,
])
def test_parse_rejects_out_of_range(text):
    with pytest.raises(ParseError) as exc_info:
        BigID.parse(text)
    assert exc_info.value.reason == ParseError.OUT_OF_RANGE


def test_parse_ignores_leading_zeros():
    assert BigID.parse("0" * 5000 + "1") == 1
    assert BigID.parse("-" + "0" * 5000 + "42") == -42
    assert BigID.parse("+000") == 0
    assert BigID.parse("-0") == 0
    assert BigID.parse("0" * 30 + str(INT64_MAX)) == INT64_MAX
    assert BigID.parse("-" + "0" * 30 + str(-INT64_MIN)) == INT64_MIN


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_int64("nope")


def test_bind_uses_parse_rules():
    assert BigID.from_bind("123") == 123
    with pytest.raises(ParseError):
        BigID.from_bind("abc")


def test_json_encode_is_quoted_string():
    big_id = BigID(4611686018695069697)
    assert big_id.to_json() == '"4611686018695069697"'
    assert json.loads(big_id.to_json()) == "4611686018695069697"


def test_json_decode():
    assert BigID.from_json('"4611686018695069697"') == 4611686018695069697
    assert BigID.from_json(b'"-7"') == -7
    assert BigID.from_json("123") == 123
    assert BigID.from_json('""5""') == 5
    assert BigID.from_json(BigID(-99).to_json()) == -99


@pytest.mark.parametrize("data", ['""', '"abc"', '"1 2"', b'"x"', b'"\xff"'])
def test_json_decode_rejects_malformed(data):
    with pytest.raises(ParseError):
        BigID.from_json(data)


def test_repr():
    assert repr(BigID(5)) == "BigID(5)"


def test_pydantic_field_serializes_as_string():
    record = Record(id=BigID(4611686018695069697), name="a")

    assert json.loads(record.model_dump_json()) == {"id": "4611686018695069697", "name": "a"}
    assert record.model_dump()["id"] == 4611686018695069697


def test_pydantic_field_accepts_string_or_int():
    assert Record.model_validate_json('{"id": "-12", "name": "a"}').id == -12
    assert Record(id=12, name="a").id == 12
    assert isinstance(Record(id="12", name="a").id, BigID)


@pytest.mark.parametrize("value", ["abc", "", 1 << 63, True, 1.5, None])
def test_pydantic_field_rejects_bad_values(value):
    with pytest.raises(ValidationError):
        Record(id=value, name="a")


def test_pydantic_round_trip():
    record = Record(id=BigID(INT64_MIN), name="min")
    assert Record.model_validate_json(record.model_dump_json()) == record


def test_json_schema_is_string():
    schema = Record.model_json_schema()
    assert schema["properties"]["id"]["type"] == "string"
