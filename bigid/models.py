"""
Data models for BigID identifiers.

A BigID is a plain signed 64-bit integer. Text, JSON and request-binding
representations all use its base-10 form; JSON carries it as a quoted
string so that numeric JSON parsers cannot lose precision.
"""

import re
from typing import Any, Union

from pydantic import BaseModel, Field
from pydantic_core import core_schema

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# Same grammar as a base-10 strconv.ParseInt: optional sign, ASCII digits only
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


class ParseError(ValueError):
    """Raised when text is not a base-10 signed 64-bit integer."""

    INVALID_SYNTAX = "invalid syntax"
    OUT_OF_RANGE = "value out of range"

    def __init__(self, text, reason):
        self.text = text
        self.reason = reason
        super().__init__(f"parsing {text!r}: {reason}")


class ShardIDError(ValueError):
    """Raised by strict generators for shard IDs outside 0-255."""


def parse_int64(text):
    """Parse a base-10 signed 64-bit integer.

    Args:
        text (str): Decimal text such as "-42" or "+7"

    Returns:
        int: The parsed value

    Raises:
        ParseError: If the text is empty, not a decimal literal or out of range
    """
    if not isinstance(text, str) or not _DECIMAL_RE.fullmatch(text):
        raise ParseError(text, ParseError.INVALID_SYNTAX)
    sign = "-" if text[0] == "-" else ""
    digits = text.lstrip("+-").lstrip("0") or "0"
    # At most 19 significant digits fit in an int64; longer text is rejected before int()
    if len(digits) > 19:
        raise ParseError(text, ParseError.OUT_OF_RANGE)
    value = int(sign + digits)
    if value < INT64_MIN or value > INT64_MAX:
        raise ParseError(text, ParseError.OUT_OF_RANGE)
    return value


class BigID(int):
    """A 64-bit time-ordered identifier."""

    @classmethod
    def parse(cls, text: str) -> "BigID":
        """Parse an identifier from its decimal string form."""
        return cls(parse_int64(text))

    @classmethod
    def from_bind(cls, value: str) -> "BigID":
        """Bind an identifier from a plain request value (path, query, form)."""
        return cls.parse(value)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "BigID":
        """Decode an identifier from a JSON string token such as '"123"'.

        Every leading and trailing quote is stripped, so a bare number
        token is accepted as well.
        """
        if isinstance(data, (bytes, bytearray)):
            try:
                data = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(repr(data), ParseError.INVALID_SYNTAX) from e
        return cls.parse(data.strip('"'))

    def to_json(self) -> str:
        return f'"{self}"'

    def __str__(self) -> str:
        # upper() is a no-op on digits; kept so the rendering rule is explicit
        return int.__repr__(self).upper()

    def __repr__(self) -> str:
        return f"BigID({int.__repr__(self)})"

    @classmethod
    def _validate(cls, value: Any) -> "BigID":
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError("BigID must be an integer or a decimal string")
        if isinstance(value, int):
            if value < INT64_MIN or value > INT64_MAX:
                raise ParseError(str(value), ParseError.OUT_OF_RANGE)
            return cls(value)
        if isinstance(value, (str, bytes, bytearray)):
            return cls.from_json(value)
        raise ValueError("BigID must be an integer or a decimal string")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema, handler):
        return {"type": "string", "pattern": r"^[+-]?[0-9]+$", "examples": ["4611686018695069697"]}


class DecodedBigID(BaseModel):
    """The logical fields of an identifier."""

    version: int = Field(..., description="Format version (2 bits)")
    reserved: int = Field(..., description="Reserved bits, 0 in the current format (4 bits)")
    timestamp: int = Field(..., description="Milliseconds since the clock base (40 bits)")
    shard_id: int = Field(..., description="Generator/shard identity (8 bits)")
    sequence: int = Field(..., description="Local sequence counter (10 bits)")
    create_time: str = Field(..., description="Clock base + timestamp, ISO-8601")


class GeneratedID(BaseModel):
    id: BigID


class ShardResponse(BaseModel):
    shard_id: int
